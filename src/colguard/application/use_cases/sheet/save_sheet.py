"""Save sheet use case - the safe-merge write path."""

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import UTC, datetime

from colguard.application.dto.sheet_dto import SheetUpdateInput, SheetView
from colguard.application.ports import AccessResolver
from colguard.application.use_cases.access import load_sheet, require_member
from colguard.application.use_cases.sheet.view import build_view
from colguard.domain.entities import Column, Row, Sheet, User
from colguard.domain.exceptions import SchemaChangeRejected, ValidationError
from colguard.domain.services import column_name, merge_sheet, normalize_rows, resolve_access
from colguard.domain.value_objects import DataKind

logger = logging.getLogger(__name__)


class SaveSheetUseCase:
    """Persist a full-sheet update after merging it against stored data.

    Permissions are resolved inside the write transaction, from the registry
    as it is at write time. Client-supplied permission state is never used.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        access_resolver: AccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._default = access_resolver.default

    async def execute(self, user: User, data: SheetUpdateInput) -> SheetView:
        """Merge and replace the sheet; return the persisted view for reconciliation."""
        names = [column_name(c) for c in data.columns]
        if len(set(names)) != len(names):
            raise ValidationError("Column names must be unique")
        proposed_rows = normalize_rows(names, data.rows)
        project_id = data.project_id

        async with self._uow_factory() as uow:
            await require_member(uow, user, project_id)
            prior = await load_sheet(uow, project_id, for_update=True)
            prior_names = prior.column_names()

            if user.is_admin:
                registry = []
                proposed_columns = [
                    _admin_column(c, prior.get_column(n))
                    for c, n in zip(data.columns, names, strict=True)
                ]
            else:
                record = await uow.permissions.get(project_id, user.id)
                registry = [record] if record else []
                access = resolve_access(
                    user.security_role, user.id, registry, prior_names, self._default
                )
                visible = {n for n in prior_names if access[n].can_read}
                if set(names) not in (set(prior_names), visible):
                    raise SchemaChangeRejected(
                        "Only administrators can add or remove columns"
                    )
                proposed_columns = [prior.get_column(n) for n in names]

            result = merge_sheet(
                user.security_role,
                user.id,
                proposed_columns,
                proposed_rows,
                prior.columns,
                [r.values for r in prior.rows],
                registry,
                self._default,
            )

            now = datetime.now(UTC)
            sheet = Sheet(
                project_id=project_id,
                columns=result.columns,
                rows=_stamp_rows(result.rows, prior.rows, user.id, now),
                updated_at=now,
            )
            await uow.sheets.replace(sheet)
            await uow.projects.touch(project_id)

            kept = set(sheet.column_names())
            for name in prior_names:
                if name not in kept:
                    await uow.permissions.remove_column(project_id, name)

        if result.rejected_cells or result.retained_rows:
            logger.info(
                "Sheet save on project %s by %s: %d protected cell(s) kept, %d row(s) retained",
                project_id,
                user.id,
                result.rejected_cells,
                result.retained_rows,
            )
        return build_view(sheet, result.access, rejected_cells=result.rejected_cells)


def _stamp_rows(
    values: list[dict[str, object]],
    prior_rows: list[Row],
    user_id: str,
    now: datetime,
) -> list[Row]:
    """Attach audit fields: rows keep their creator, changed rows get a new updater."""
    rows: list[Row] = []
    for i, row_values in enumerate(values):
        prior = prior_rows[i] if i < len(prior_rows) else None
        if prior is None:
            rows.append(Row(row_values, user_id, now, user_id, now))
        elif prior.values == row_values:
            rows.append(prior)
        else:
            rows.append(Row(row_values, prior.created_by, prior.created_at, user_id, now))
    return rows


def _admin_column(column: object, prior: Column | None) -> Column:
    """Column for an admin save: a sent data_kind wins, else the stored one, else text."""
    kind = column.get("data_kind") if isinstance(column, Mapping) else None
    if kind is None:
        return prior or Column(name=column_name(column))
    try:
        data_kind = DataKind(kind)
    except ValueError:
        raise ValidationError(f"Invalid data kind '{kind}'") from None
    if prior:
        return replace(prior, data_kind=data_kind)
    return Column(name=column_name(column), data_kind=data_kind)
