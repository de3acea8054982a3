"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from colguard.application.ports.repositories.collaborator_repository import (
    CollaboratorRepository,
)
from colguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from colguard.application.ports.repositories.project_repository import (
    ProjectRepository,
)
from colguard.application.ports.repositories.sheet_repository import SheetRepository
from colguard.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def projects(self) -> ProjectRepository: ...

    @property
    def sheets(self) -> SheetRepository: ...

    @property
    def collaborators(self) -> CollaboratorRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
