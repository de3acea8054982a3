"""Build the subject-specific view of a sheet."""

from collections.abc import Mapping

from colguard.application.dto.sheet_dto import SheetView
from colguard.domain.entities import Sheet
from colguard.domain.value_objects import AccessLevel


def build_view(sheet: Sheet, access: Mapping[str, AccessLevel], rejected_cells: int = 0) -> SheetView:
    """Sheet restricted to readable columns; access still lists every column.

    HIDDEN values never leave the server.
    """
    visible = [c for c in sheet.columns if access[c.name].can_read]
    names = [c.name for c in visible]
    return SheetView(
        project_id=sheet.project_id,
        columns=visible,
        rows=[{n: r.values.get(n, "") for n in names} for r in sheet.rows],
        access=dict(access),
        updated_at=sheet.updated_at,
        rejected_cells=rejected_cells,
    )
