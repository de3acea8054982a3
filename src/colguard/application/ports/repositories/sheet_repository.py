"""Sheet repository port."""

from typing import Protocol
from uuid import UUID

from colguard.domain.entities import Sheet


class SheetRepository(Protocol):
    """Port for sheet persistence. A sheet is replaced as a whole, never patched."""

    async def get(self, project_id: UUID, for_update: bool = False) -> Sheet | None: ...

    async def replace(self, sheet: Sheet) -> Sheet: ...
