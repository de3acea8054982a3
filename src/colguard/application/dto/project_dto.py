"""Project DTOs."""

from dataclasses import dataclass

from colguard.domain.entities import Project


@dataclass
class ProjectStats:
    """Counts shown alongside a project."""

    total_rows: int
    total_columns: int
    total_collaborators: int


@dataclass
class ProjectOutput:
    """Project with its statistics."""

    project: Project
    stats: ProjectStats
