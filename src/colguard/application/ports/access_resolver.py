"""Access resolver port - effective column access of a subject."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from colguard.domain.entities import User
from colguard.domain.value_objects import AccessLevel


class AccessResolver(Protocol):
    """Port for resolving per-column access against the current registry."""

    @property
    def default(self) -> AccessLevel: ...

    async def resolve(
        self, subject: User, project_id: UUID, column_names: Sequence[str]
    ) -> dict[str, AccessLevel]: ...
