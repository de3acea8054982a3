"""Project entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Project:
    """Project - owns one sheet, collaborators and their column permissions."""

    id: UUID
    name: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    deleted_at: datetime | None = None
