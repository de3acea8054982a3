"""User repository port."""

from typing import Protocol

from colguard.domain.entities import User


class UserRepository(Protocol):
    """Port for the local directory of known users."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def upsert(self, user: User) -> User: ...
