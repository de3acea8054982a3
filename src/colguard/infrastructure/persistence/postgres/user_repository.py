"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from colguard.domain.entities import User
from colguard.domain.value_objects import SecurityRole


class PostgresUserRepository:
    """Local directory of users seen through authentication."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            "SELECT id, security_role, email, username FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], security_role=SecurityRole(r[1]), email=r[2], username=r[3])

    async def upsert(self, user: User) -> User:
        """Insert user or refresh its role and contact fields."""
        await self._conn.execute(
            "INSERT INTO app_user (id, security_role, email, username, last_seen_at) "
            "VALUES (%s, %s, %s, %s, NOW()) "
            "ON CONFLICT (id) DO UPDATE SET security_role = EXCLUDED.security_role, "
            "email = EXCLUDED.email, username = EXCLUDED.username, last_seen_at = NOW()",
            (user.id, user.security_role.value, user.email, user.username),
        )
        return user
