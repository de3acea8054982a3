"""Add collaborator use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from colguard.application.use_cases.access import load_project, require_admin
from colguard.domain.entities import Collaborator, User
from colguard.domain.exceptions import Conflict, NotFound, ValidationError
from colguard.domain.value_objects import ProjectRole

logger = logging.getLogger(__name__)


class AddCollaboratorUseCase:
    """Attach an existing COLLABORATOR user to a project."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: User,
        project_id: UUID,
        user_id: str,
        role: str | ProjectRole = ProjectRole.DEVELOPER,
    ) -> Collaborator:
        """Add user to project. No permission record is created until an admin sets one."""
        require_admin(actor, "manage collaborators")
        try:
            project_role = ProjectRole(role)
        except ValueError:
            raise ValidationError(f"Invalid project role '{role}'") from None

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)

            target = await uow.users.get_by_id(user_id)
            if not target:
                raise NotFound("User", user_id)
            if target.is_admin:
                raise ValidationError("Only COLLABORATOR users can be added to a project")

            if await uow.collaborators.get(project_id, user_id):
                raise Conflict(f"User {user_id} is already a collaborator of the project")

            collaborator = Collaborator(
                project_id=project_id,
                user_id=user_id,
                role=project_role,
                joined_at=datetime.now(UTC),
            )
            await uow.collaborators.add(collaborator)

        logger.info("Collaborator %s added to project %s by %s", user_id, project_id, actor.id)
        return collaborator
