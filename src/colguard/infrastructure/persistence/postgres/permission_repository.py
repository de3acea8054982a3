"""PostgreSQL column permission repository implementation.

One row per (project, collaborator). Every write touches only that row, so
concurrent admin edits of different collaborators cannot lose each other's
updates.
"""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from colguard.domain.entities import ColumnPermission, PermissionRecord
from colguard.domain.value_objects import AccessLevel


def _to_record(r: tuple) -> PermissionRecord:
    return PermissionRecord(
        project_id=r[0],
        collaborator_id=r[1],
        permissions=[
            ColumnPermission(p["column_name"], AccessLevel(p["access_level"]))
            for p in r[2] or []
        ],
        updated_at=r[3],
        updated_by=r[4],
    )


class PostgresPermissionRepository:
    """Permission registry implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, project_id: UUID, collaborator_id: str) -> PermissionRecord | None:
        """Get record of collaborator on project."""
        cur = await self._conn.execute(
            "SELECT project_id, collaborator_id, permissions, updated_at, updated_by "
            "FROM column_permission WHERE project_id = %s AND collaborator_id = %s",
            (project_id, collaborator_id),
        )
        r = await cur.fetchone()
        return _to_record(r) if r else None

    async def list_by_project(self, project_id: UUID) -> list[PermissionRecord]:
        """List all records of project."""
        cur = await self._conn.execute(
            "SELECT project_id, collaborator_id, permissions, updated_at, updated_by "
            "FROM column_permission WHERE project_id = %s",
            (project_id,),
        )
        rows = await cur.fetchall()
        return [_to_record(r) for r in rows]

    async def upsert(self, record: PermissionRecord) -> PermissionRecord:
        """Create the record or replace its permission list in place."""
        await self._conn.execute(
            "INSERT INTO column_permission "
            "(project_id, collaborator_id, permissions, updated_at, updated_by) "
            "VALUES (%s, %s, %s, COALESCE(%s, NOW()), %s) "
            "ON CONFLICT (project_id, collaborator_id) DO UPDATE SET "
            "permissions = EXCLUDED.permissions, "
            "updated_at = EXCLUDED.updated_at, "
            "updated_by = EXCLUDED.updated_by",
            (
                record.project_id,
                record.collaborator_id,
                Jsonb(
                    [
                        {"column_name": p.column_name, "access_level": p.access_level.value}
                        for p in record.permissions
                    ]
                ),
                record.updated_at,
                record.updated_by,
            ),
        )
        return record

    async def delete(self, project_id: UUID, collaborator_id: str) -> bool:
        """Delete record. Returns False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM column_permission WHERE project_id = %s AND collaborator_id = %s",
            (project_id, collaborator_id),
        )
        return cur.rowcount > 0

    async def remove_column(self, project_id: UUID, column_name: str) -> int:
        """Drop entries for column_name from every record of project."""
        cur = await self._conn.execute(
            "UPDATE column_permission SET permissions = COALESCE("
            "(SELECT jsonb_agg(e) FROM jsonb_array_elements(permissions) AS e "
            "WHERE e->>'column_name' <> %s), '[]'::jsonb) "
            "WHERE project_id = %s AND permissions @> %s",
            (column_name, project_id, Jsonb([{"column_name": column_name}])),
        )
        return cur.rowcount
