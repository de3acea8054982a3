"""Remove collaborator use case."""

import logging
from uuid import UUID

from colguard.application.use_cases.access import load_project, require_admin
from colguard.domain.entities import User
from colguard.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class RemoveCollaboratorUseCase:
    """Detach collaborator from project together with its column permissions."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: User, project_id: UUID, user_id: str) -> None:
        require_admin(actor, "manage collaborators")

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            had_record = await uow.permissions.delete(project_id, user_id)
            if not await uow.collaborators.remove(project_id, user_id):
                raise NotFound("Collaborator", f"{project_id}/{user_id}")

        logger.info(
            "Collaborator %s removed from project %s by %s (permission record removed: %s)",
            user_id,
            project_id,
            actor.id,
            had_record,
        )
