"""Get resolved column permissions of one collaborator."""

from uuid import UUID

from colguard.application.dto.permission_dto import ResolvedPermissions
from colguard.application.ports import AccessResolver
from colguard.application.use_cases.access import load_project, load_sheet
from colguard.domain.entities import ColumnPermission, User
from colguard.domain.exceptions import NotFound, PermissionDenied
from colguard.domain.value_objects import SecurityRole


class GetColumnPermissionsUseCase:
    """Effective access of a collaborator, one entry per current column."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_resolver: AccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(
        self, actor: User, project_id: UUID, collaborator_id: str
    ) -> ResolvedPermissions:
        """Admins may read anyone's permissions; collaborators only their own."""
        if not actor.is_admin and actor.id != collaborator_id:
            raise PermissionDenied("Only administrators or the collaborator can view these permissions")

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            if not await uow.collaborators.get(project_id, collaborator_id):
                raise NotFound("Collaborator", f"{project_id}/{collaborator_id}")
            names = (await load_sheet(uow, project_id)).column_names()

        subject = User(id=collaborator_id, security_role=SecurityRole.COLLABORATOR)
        access = await self._access_resolver.resolve(subject, project_id, names)
        return ResolvedPermissions(
            collaborator_id=collaborator_id,
            permissions=[ColumnPermission(n, access[n]) for n in names],
        )
