"""Column permission DTOs."""

from dataclasses import dataclass

from colguard.domain.entities import Collaborator, ColumnPermission


@dataclass
class ColumnPermissionInput:
    """One entry of a permission write, not yet validated."""

    column_name: object
    access_level: object


@dataclass
class ResolvedPermissions:
    """Effective access of one collaborator, one entry per recognized column."""

    collaborator_id: str
    permissions: list[ColumnPermission]


@dataclass
class CollaboratorPermissions:
    """Membership plus resolved permissions, for the admin overview."""

    collaborator: Collaborator
    permissions: list[ColumnPermission]
