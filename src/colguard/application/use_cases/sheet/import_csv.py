"""Import CSV use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from colguard.application.dto.sheet_dto import ParsedTable
from colguard.application.ports import CsvParser
from colguard.application.use_cases.access import load_project, load_sheet, require_admin
from colguard.domain.entities import Row, Sheet, User
from colguard.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ImportCsvUseCase:
    """Replace a project's sheet with the contents of a CSV file."""

    def __init__(
        self,
        unit_of_work_factory: type,
        csv_parser: CsvParser,
        max_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._csv_parser = csv_parser
        self._max_bytes = max_bytes

    async def execute(self, actor: User, project_id: UUID, data: bytes) -> tuple[Sheet, ParsedTable]:
        """Import file; permission entries for columns that disappear are cleaned."""
        require_admin(actor, "import data")
        if not data:
            raise ValidationError("CSV file is empty")
        if len(data) > self._max_bytes:
            raise ValidationError(f"CSV file exceeds {self._max_bytes} bytes")

        parsed = self._csv_parser.parse(data)

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            prior = await load_sheet(uow, project_id, for_update=True)

            now = datetime.now(UTC)
            sheet = Sheet(
                project_id=project_id,
                columns=parsed.columns,
                rows=[Row(values, actor.id, now, actor.id, now) for values in parsed.rows],
                updated_at=now,
            )
            await uow.sheets.replace(sheet)
            await uow.projects.touch(project_id)

            new_names = set(sheet.column_names())
            for name in prior.column_names():
                if name not in new_names:
                    await uow.permissions.remove_column(project_id, name)

        logger.info(
            "CSV imported into project %s by %s: %d column(s), %d row(s), %d skipped",
            project_id,
            actor.id,
            len(parsed.columns),
            len(parsed.rows),
            parsed.skipped_rows,
        )
        return sheet, parsed
