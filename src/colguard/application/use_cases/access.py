"""Project-level access checks shared by use cases."""

from uuid import UUID

from colguard.application.ports import UnitOfWork
from colguard.domain.entities import Project, Sheet, User
from colguard.domain.exceptions import NotFound, PermissionDenied


def require_admin(user: User, action: str) -> None:
    """Raise PermissionDenied unless user is an administrator."""
    if not user.is_admin:
        raise PermissionDenied(f"Only administrators can {action}")


async def load_project(uow: UnitOfWork, project_id: UUID) -> Project:
    """Active project or NotFound."""
    project = await uow.projects.get_by_id(project_id)
    if not project:
        raise NotFound("Project", str(project_id))
    return project


async def require_member(uow: UnitOfWork, user: User, project_id: UUID) -> Project:
    """Project the user may access: admins always, collaborators when attached."""
    project = await load_project(uow, project_id)
    if user.is_admin:
        return project
    if not await uow.collaborators.get(project_id, user.id):
        raise PermissionDenied("User does not have access to project")
    return project


async def load_sheet(uow: UnitOfWork, project_id: UUID, for_update: bool = False) -> Sheet:
    """Stored sheet, or an empty one for projects without data yet."""
    sheet = await uow.sheets.get(project_id, for_update=for_update)
    return sheet or Sheet(project_id=project_id)
