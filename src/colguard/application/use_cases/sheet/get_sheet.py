"""Get sheet use case."""

from uuid import UUID

from colguard.application.dto.sheet_dto import SheetView
from colguard.application.ports import AccessResolver
from colguard.application.use_cases.access import load_sheet, require_member
from colguard.application.use_cases.sheet.view import build_view
from colguard.domain.entities import User


class GetSheetUseCase:
    """Sheet annotated with the caller's per-column access."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_resolver: AccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, user: User, project_id: UUID) -> SheetView:
        async with self._uow_factory() as uow:
            await require_member(uow, user, project_id)
            sheet = await load_sheet(uow, project_id)

        access = await self._access_resolver.resolve(user, project_id, sheet.column_names())
        return build_view(sheet, access)
