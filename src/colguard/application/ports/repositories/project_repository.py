"""Project repository port."""

from typing import Protocol
from uuid import UUID

from colguard.domain.entities import Project


class ProjectRepository(Protocol):
    """Port for project persistence."""

    async def get_by_id(
        self, project_id: UUID, include_deleted: bool = False
    ) -> Project | None: ...

    async def list_by_collaborator(self, user_id: str) -> list[Project]: ...

    async def create(self, project: Project) -> Project: ...

    async def touch(self, project_id: UUID) -> None: ...
