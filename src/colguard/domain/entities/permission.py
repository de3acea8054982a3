"""Column permission entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from colguard.domain.value_objects import AccessLevel


@dataclass(frozen=True)
class ColumnPermission:
    """Access level of one collaborator on one column, by column name."""

    column_name: str
    access_level: AccessLevel


@dataclass
class PermissionRecord:
    """All explicit column permissions of one collaborator on one project.

    Partial: columns without an entry are unset and fall back to the
    configured default when resolved.
    """

    project_id: UUID
    collaborator_id: str
    permissions: list[ColumnPermission] = field(default_factory=list)
    updated_at: datetime | None = None
    updated_by: str | None = None

    def as_mapping(self) -> dict[str, AccessLevel]:
        """Column name -> access level. Later duplicates win."""
        return {p.column_name: p.access_level for p in self.permissions}

    def without_column(self, column_name: str) -> "PermissionRecord":
        """Copy with every entry for column_name dropped."""
        return replace(
            self,
            permissions=[p for p in self.permissions if p.column_name != column_name],
        )
