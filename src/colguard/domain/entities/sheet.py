"""Sheet entity - the tabular data of a project."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from colguard.domain.value_objects import DataKind


@dataclass
class Column:
    """Sheet column, unique by name within a project."""

    name: str
    data_kind: DataKind = DataKind.TEXT
    required: bool = False


@dataclass
class Row:
    """Sheet row. Values are always keyed by column name."""

    values: dict[str, object]
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None


@dataclass
class Sheet:
    """Columns and rows of a project, stored and replaced as one document."""

    project_id: UUID
    columns: list[Column] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)
    updated_at: datetime | None = None

    def column_names(self) -> list[str]:
        """Recognized column names, in display order."""
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Column | None:
        for c in self.columns:
            if c.name == name:
                return c
        return None
