"""Column permission repository port."""

from typing import Protocol
from uuid import UUID

from colguard.domain.entities import PermissionRecord


class PermissionRepository(Protocol):
    """Port for the permission registry.

    Writes are scoped to one (project, collaborator) record so that
    concurrent edits of different collaborators never overwrite each other.
    """

    async def get(self, project_id: UUID, collaborator_id: str) -> PermissionRecord | None: ...

    async def list_by_project(self, project_id: UUID) -> list[PermissionRecord]: ...

    async def upsert(self, record: PermissionRecord) -> PermissionRecord: ...

    async def delete(self, project_id: UUID, collaborator_id: str) -> bool: ...

    async def remove_column(self, project_id: UUID, column_name: str) -> int: ...
