"""List resolved column permissions of every collaborator of a project."""

from uuid import UUID

from colguard.application.dto.permission_dto import CollaboratorPermissions
from colguard.application.ports import AccessResolver
from colguard.application.use_cases.access import load_project, load_sheet, require_admin
from colguard.domain.entities import Column, ColumnPermission, User
from colguard.domain.services import resolve_access
from colguard.domain.value_objects import SecurityRole


class ListProjectPermissionsUseCase:
    """Admin overview: columns plus each collaborator's resolved access."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_resolver: AccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._default = access_resolver.default

    async def execute(
        self, actor: User, project_id: UUID
    ) -> tuple[list[Column], list[CollaboratorPermissions]]:
        require_admin(actor, "manage column permissions")

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            sheet = await load_sheet(uow, project_id)
            collaborators = await uow.collaborators.list_by_project(project_id)
            records = await uow.permissions.list_by_project(project_id)

        names = sheet.column_names()
        registry = {r.collaborator_id: r for r in records}
        items = []
        for collaborator in sorted(collaborators, key=lambda c: c.joined_at):
            access = resolve_access(
                SecurityRole.COLLABORATOR,
                collaborator.user_id,
                registry,
                names,
                self._default,
            )
            items.append(
                CollaboratorPermissions(
                    collaborator=collaborator,
                    permissions=[ColumnPermission(n, access[n]) for n in names],
                )
            )
        return sheet.columns, items
