"""Add column use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from colguard.application.use_cases.access import load_project, load_sheet, require_admin
from colguard.domain.entities import Column, Row, Sheet, User
from colguard.domain.exceptions import Conflict, ValidationError
from colguard.domain.services import column_name
from colguard.domain.value_objects import DataKind

logger = logging.getLogger(__name__)


class AddColumnUseCase:
    """Append a column to the sheet; existing rows get a blank cell."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: User,
        project_id: UUID,
        name: str,
        data_kind: str | DataKind = DataKind.TEXT,
    ) -> Sheet:
        require_admin(actor, "add columns")
        name = column_name(name)
        try:
            kind = DataKind(data_kind)
        except ValueError:
            raise ValidationError(f"Invalid data kind '{data_kind}'") from None

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            sheet = await load_sheet(uow, project_id, for_update=True)
            if sheet.get_column(name):
                raise Conflict(f"Column '{name}' already exists in project")

            now = datetime.now(UTC)
            updated = Sheet(
                project_id=project_id,
                columns=[*sheet.columns, Column(name=name, data_kind=kind)],
                rows=[
                    Row({**r.values, name: ""}, r.created_by, r.created_at, r.updated_by, r.updated_at)
                    for r in sheet.rows
                ],
                updated_at=now,
            )
            await uow.sheets.replace(updated)
            await uow.projects.touch(project_id)

        logger.info("Column '%s' added to project %s by %s", name, project_id, actor.id)
        return updated
