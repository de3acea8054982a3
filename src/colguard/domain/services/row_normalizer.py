"""Row normalization between wire/storage shapes and name-keyed rows.

Rows arrive either as arrays aligned with a column list or as objects keyed
by column name. Everything past this module works on name-keyed dicts only,
because permissions reference columns by name while column order changes.
"""

from collections.abc import Mapping, Sequence

from colguard.domain.entities import Column, Row
from colguard.domain.exceptions import ValidationError

BLANK = ""


def column_name(column: object) -> str:
    """Name of a column given as str, Column or {"name": ...} mapping."""
    if isinstance(column, Column):
        return column.name
    if isinstance(column, str):
        name = column
    elif isinstance(column, Mapping):
        name = column.get("name")
    else:
        name = None
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid column: {column!r}")
    return name.strip()


def normalize_row(column_names: Sequence[str], row: object) -> dict[str, object]:
    """Name-keyed copy of row restricted to column_names; missing cells are blank."""
    if isinstance(row, Row):
        row = row.values
    if isinstance(row, Mapping):
        return {name: _cell(row.get(name)) for name in column_names}
    if isinstance(row, Sequence) and not isinstance(row, (str, bytes)):
        return {
            name: _cell(row[i]) if i < len(row) else BLANK
            for i, name in enumerate(column_names)
        }
    raise ValidationError(f"Invalid row: {row!r}")


def normalize_rows(columns: Sequence[object], rows: Sequence[object]) -> list[dict[str, object]]:
    """Normalize every row against the given column list."""
    names = [column_name(c) for c in columns]
    return [normalize_row(names, r) for r in rows]


def rows_to_wire(column_names: Sequence[str], rows: Sequence[Mapping[str, object]]) -> list[list[object]]:
    """Name-keyed rows to arrays in column_names order."""
    return [[_cell(r.get(name)) for name in column_names] for r in rows]


def _cell(value: object) -> object:
    return BLANK if value is None else value
