"""Per-cell rendering decisions from a resolved column access map."""

from collections.abc import Mapping, Sequence
from enum import StrEnum

from colguard.domain.value_objects import AccessLevel


class CellState(StrEnum):
    """How a cell of a column is rendered."""

    EDITABLE = "editable"
    READ_ONLY = "read_only"
    HIDDEN = "hidden"


_STATE_BY_LEVEL = {
    AccessLevel.READ_WRITE: CellState.EDITABLE,
    AccessLevel.READ_ONLY: CellState.READ_ONLY,
    AccessLevel.HIDDEN: CellState.HIDDEN,
}


class GridView:
    """Layout of one project sheet for one viewer.

    Administrators get the editable rendering for every column whatever the
    access map says. Columns missing from the map render as HIDDEN until the
    map is re-fetched. None of this is authoritative; the server merge is.
    """

    def __init__(
        self,
        columns: Sequence[str],
        access: Mapping[str, AccessLevel | str],
        is_admin: bool = False,
    ) -> None:
        self._columns = list(columns)
        self._access = {name: AccessLevel(level) for name, level in access.items()}
        self._is_admin = is_admin

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    def cell_state(self, column: str) -> CellState:
        if self._is_admin:
            return CellState.EDITABLE
        level = self._access.get(column)
        if level is None:
            return CellState.HIDDEN
        return _STATE_BY_LEVEL[level]

    def can_edit(self, column: str) -> bool:
        return self.cell_state(column) is CellState.EDITABLE

    def visible_columns(self) -> list[str]:
        """Rendered columns in order; list index is the layout index."""
        return [c for c in self._columns if self.cell_state(c) is not CellState.HIDDEN]

    def column_index(self, column: str) -> int | None:
        """Layout index of a column, None if it is not rendered."""
        visible = self.visible_columns()
        return visible.index(column) if column in visible else None

    def project_rows(self, rows: Sequence[Mapping[str, object]]) -> list[list[object]]:
        """Rows as arrays aligned with visible_columns()."""
        visible = self.visible_columns()
        return [[row.get(c, "") for c in visible] for row in rows]
