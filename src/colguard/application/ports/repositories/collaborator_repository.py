"""Collaborator repository port."""

from typing import Protocol
from uuid import UUID

from colguard.domain.entities import Collaborator


class CollaboratorRepository(Protocol):
    """Port for project membership persistence."""

    async def get(self, project_id: UUID, user_id: str) -> Collaborator | None: ...

    async def list_by_project(self, project_id: UUID) -> list[Collaborator]: ...

    async def add(self, collaborator: Collaborator) -> Collaborator: ...

    async def remove(self, project_id: UUID, user_id: str) -> bool: ...
