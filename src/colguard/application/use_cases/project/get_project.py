"""Get project use case."""

from uuid import UUID

from colguard.application.dto.project_dto import ProjectOutput, ProjectStats
from colguard.application.use_cases.access import load_sheet, require_member
from colguard.domain.entities import User


class GetProjectUseCase:
    """Get project with row, column and collaborator counts."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user: User, project_id: UUID) -> ProjectOutput:
        async with self._uow_factory() as uow:
            project = await require_member(uow, user, project_id)
            sheet = await load_sheet(uow, project_id)
            collaborators = await uow.collaborators.list_by_project(project_id)

        return ProjectOutput(
            project=project,
            stats=ProjectStats(
                total_rows=len(sheet.rows),
                total_columns=len(sheet.columns),
                total_collaborators=len(collaborators),
            ),
        )
