"""Remove column use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from colguard.application.use_cases.access import load_project, load_sheet, require_admin
from colguard.domain.entities import Row, Sheet, User
from colguard.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class RemoveColumnUseCase:
    """Drop a column and the permission entries that reference it."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: User, project_id: UUID, name: str) -> Sheet:
        require_admin(actor, "remove columns")

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            sheet = await load_sheet(uow, project_id, for_update=True)
            if not sheet.get_column(name):
                raise NotFound("Column", name)

            now = datetime.now(UTC)
            updated = Sheet(
                project_id=project_id,
                columns=[c for c in sheet.columns if c.name != name],
                rows=[
                    Row(
                        {k: v for k, v in r.values.items() if k != name},
                        r.created_by,
                        r.created_at,
                        r.updated_by,
                        r.updated_at,
                    )
                    for r in sheet.rows
                ],
                updated_at=now,
            )
            await uow.sheets.replace(updated)
            await uow.projects.touch(project_id)
            collected = await uow.permissions.remove_column(project_id, name)

        logger.info(
            "Column '%s' removed from project %s by %s; %d permission record(s) cleaned",
            name,
            project_id,
            actor.id,
            collected,
        )
        return updated
