"""Access resolver implementation - resolves against the stored registry."""

from collections.abc import Sequence
from uuid import UUID

from colguard.domain.entities import User
from colguard.domain.services import resolve_access
from colguard.domain.value_objects import AccessLevel


class ColumnAccessResolver:
    """Loads the subject's permission record and applies the configured default."""

    def __init__(
        self,
        unit_of_work_factory: type,
        default: AccessLevel = AccessLevel.READ_ONLY,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._default = AccessLevel(default)

    @property
    def default(self) -> AccessLevel:
        return self._default

    async def resolve(
        self, subject: User, project_id: UUID, column_names: Sequence[str]
    ) -> dict[str, AccessLevel]:
        """Resolve access for every column in column_names."""
        if subject.is_admin:
            return resolve_access(subject.security_role, subject.id, None, column_names)

        async with self._uow_factory() as uow:
            record = await uow.permissions.get(project_id, subject.id)
        return resolve_access(
            subject.security_role,
            subject.id,
            [record] if record else None,
            column_names,
            self._default,
        )
