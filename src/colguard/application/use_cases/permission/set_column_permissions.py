"""Set column permissions of one collaborator."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from colguard.application.dto.permission_dto import ColumnPermissionInput
from colguard.application.use_cases.access import load_project, load_sheet, require_admin
from colguard.domain.entities import ColumnPermission, PermissionRecord, User
from colguard.domain.exceptions import NotFound, ValidationError
from colguard.domain.value_objects import AccessLevel

logger = logging.getLogger(__name__)


class SetColumnPermissionsUseCase:
    """Replace a collaborator's explicit column permissions.

    The whole batch is validated before anything is written; one bad entry
    rejects all of them. The record is created on first write and replaced
    in place afterwards.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: User,
        project_id: UUID,
        collaborator_id: str,
        entries: list[ColumnPermissionInput],
    ) -> PermissionRecord:
        require_admin(actor, "manage column permissions")

        async with self._uow_factory() as uow:
            await load_project(uow, project_id)
            if not await uow.collaborators.get(project_id, collaborator_id):
                raise NotFound("Collaborator", f"{project_id}/{collaborator_id}")
            names = set((await load_sheet(uow, project_id)).column_names())

            permissions = _validate(entries, names)
            record = PermissionRecord(
                project_id=project_id,
                collaborator_id=collaborator_id,
                permissions=permissions,
                updated_at=datetime.now(UTC),
                updated_by=actor.id,
            )
            await uow.permissions.upsert(record)

        logger.info(
            "Column permissions of %s on project %s set by %s: %s",
            collaborator_id,
            project_id,
            actor.id,
            {p.column_name: p.access_level.value for p in permissions},
        )
        return record


def _validate(entries: list[ColumnPermissionInput], names: set[str]) -> list[ColumnPermission]:
    seen: set[str] = set()
    permissions: list[ColumnPermission] = []
    for entry in entries:
        if (
            not isinstance(entry.column_name, str)
            or not entry.column_name
            or entry.access_level in (None, "")
        ):
            raise ValidationError("Each permission needs column_name and access_level")
        if entry.column_name not in names:
            raise ValidationError(f"Column '{entry.column_name}' does not exist in project")
        if entry.column_name in seen:
            raise ValidationError(f"Column '{entry.column_name}' appears more than once")
        seen.add(entry.column_name)
        permissions.append(
            ColumnPermission(entry.column_name, AccessLevel.parse(entry.access_level))
        )
    return permissions
