"""PostgreSQL collaborator repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from colguard.domain.entities import Collaborator
from colguard.domain.value_objects import ProjectRole


class PostgresCollaboratorRepository:
    """Project membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, project_id: UUID, user_id: str) -> Collaborator | None:
        """Get membership of user in project."""
        cur = await self._conn.execute(
            "SELECT project_id, user_id, role, joined_at FROM project_collaborator "
            "WHERE project_id = %s AND user_id = %s",
            (project_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Collaborator(project_id=r[0], user_id=r[1], role=ProjectRole(r[2]), joined_at=r[3])

    async def list_by_project(self, project_id: UUID) -> list[Collaborator]:
        """List members of project."""
        cur = await self._conn.execute(
            "SELECT project_id, user_id, role, joined_at FROM project_collaborator "
            "WHERE project_id = %s ORDER BY joined_at",
            (project_id,),
        )
        rows = await cur.fetchall()
        return [
            Collaborator(project_id=r[0], user_id=r[1], role=ProjectRole(r[2]), joined_at=r[3])
            for r in rows
        ]

    async def add(self, collaborator: Collaborator) -> Collaborator:
        """Add membership."""
        await self._conn.execute(
            "INSERT INTO project_collaborator (project_id, user_id, role, joined_at) "
            "VALUES (%s, %s, %s, %s)",
            (
                collaborator.project_id,
                collaborator.user_id,
                collaborator.role.value,
                collaborator.joined_at,
            ),
        )
        return collaborator

    async def remove(self, project_id: UUID, user_id: str) -> bool:
        """Remove membership. Returns False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM project_collaborator WHERE project_id = %s AND user_id = %s",
            (project_id, user_id),
        )
        return cur.rowcount > 0
