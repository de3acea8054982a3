"""Column data kind, inferred at ingestion."""

from enum import StrEnum


class DataKind(StrEnum):
    """Supported column value kinds."""

    TEXT = "text"
    NUMERIC = "numeric"
    DATE = "date"
    BOOLEAN = "boolean"
