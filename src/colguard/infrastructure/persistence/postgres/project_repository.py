"""PostgreSQL project repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from colguard.domain.entities import Project

_COLUMNS = "id, name, description, created_by, created_at, updated_at, deleted_at"


def _to_project(r: tuple) -> Project:
    return Project(
        id=r[0],
        name=r[1],
        description=r[2],
        created_by=r[3],
        created_at=r[4],
        updated_at=r[5],
        deleted_at=r[6],
    )


class PostgresProjectRepository:
    """Project repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(
        self, project_id: UUID, include_deleted: bool = False
    ) -> Project | None:
        """Get project by id."""
        q = f"SELECT {_COLUMNS} FROM project WHERE id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        cur = await self._conn.execute(q, (project_id,))
        r = await cur.fetchone()
        return _to_project(r) if r else None

    async def list_by_collaborator(self, user_id: str) -> list[Project]:
        """Active projects where user is a collaborator, newest first."""
        cur = await self._conn.execute(
            "SELECT p.id, p.name, p.description, p.created_by, p.created_at, p.updated_at, "
            "p.deleted_at FROM project p "
            "JOIN project_collaborator pc ON pc.project_id = p.id "
            "WHERE pc.user_id = %s AND p.deleted_at IS NULL "
            "ORDER BY p.created_at DESC",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_project(r) for r in rows]

    async def create(self, project: Project) -> Project:
        """Create project."""
        await self._conn.execute(
            f"INSERT INTO project ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                project.id,
                project.name,
                project.description,
                project.created_by,
                project.created_at,
                project.updated_at,
                project.deleted_at,
            ),
        )
        return project

    async def touch(self, project_id: UUID) -> None:
        """Bump updated_at after a data change."""
        await self._conn.execute(
            "UPDATE project SET updated_at = NOW() WHERE id = %s",
            (project_id,),
        )
