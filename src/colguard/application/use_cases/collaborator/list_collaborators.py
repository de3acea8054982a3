"""List collaborators use case."""

from uuid import UUID

from colguard.application.use_cases.access import load_project, require_admin
from colguard.domain.entities import Collaborator, User


class ListCollaboratorsUseCase:
    """Members of a project with role label and join date."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: User, project_id: UUID) -> list[Collaborator]:
        require_admin(actor, "manage collaborators")
        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            collaborators = await uow.collaborators.list_by_project(project_id)
        return sorted(collaborators, key=lambda c: c.joined_at)
