"""Create project use case."""

from datetime import UTC, datetime
from uuid import uuid4

from colguard.application.use_cases.access import require_admin
from colguard.domain.entities import Project, Sheet, User
from colguard.domain.exceptions import ValidationError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class CreateProjectUseCase:
    """Create project with an empty sheet."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        user: User,
        name: str,
        description: str | None = None,
    ) -> Project:
        """Create project. Only administrators create projects."""
        require_admin(user, "create projects")

        name = (name or "").strip()
        if not name:
            raise ValidationError("Project name is required")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Project name cannot exceed {NAME_MAX_LENGTH} characters")
        description = (description or "").strip() or None
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Project description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
            )

        now = datetime.now(UTC)
        project = Project(
            id=uuid4(),
            name=name,
            description=description,
            created_by=user.id,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.projects.create(project)
            await uow.sheets.replace(Sheet(project_id=project.id, updated_at=now))
        return project
