"""Sheet DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from colguard.domain.entities import Column
from colguard.domain.value_objects import AccessLevel


@dataclass
class SheetUpdateInput:
    """Full-sheet replacement proposed by a client.

    Columns may be names or {"name": ...} objects; rows may be arrays
    aligned with columns or objects keyed by column name.
    """

    project_id: UUID
    columns: list[object]
    rows: list[object]


@dataclass
class SheetView:
    """Sheet as seen by one subject, with its resolved column access."""

    project_id: UUID
    columns: list[Column]
    rows: list[dict[str, object]]
    access: dict[str, AccessLevel]
    updated_at: datetime | None = None
    rejected_cells: int = 0


@dataclass
class ParsedTable:
    """Columns and name-keyed rows read from an uploaded file."""

    columns: list[Column]
    rows: list[dict[str, object]] = field(default_factory=list)
    skipped_rows: int = 0
