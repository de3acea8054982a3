"""Repository ports."""

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

__all__ = [
    "CollaboratorRepository",
    "PermissionRepository",
    "ProjectRepository",
    "SheetRepository",
    "UserRepository",
]
