"""Collaborator entity - project membership."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from colguard.domain.value_objects import ProjectRole


@dataclass
class Collaborator:
    """User attached to a project with an organizational role label."""

    project_id: UUID
    user_id: str
    joined_at: datetime
    role: ProjectRole = ProjectRole.DEVELOPER
