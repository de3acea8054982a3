"""Domain entities."""

from colguard.domain.entities.collaborator import Collaborator
from colguard.domain.entities.permission import ColumnPermission, PermissionRecord
from colguard.domain.entities.project import Project
from colguard.domain.entities.sheet import Column, Row, Sheet
from colguard.domain.entities.user import User

__all__ = [
    "Collaborator",
    "Column",
    "ColumnPermission",
    "PermissionRecord",
    "Project",
    "Row",
    "Sheet",
    "User",
]
