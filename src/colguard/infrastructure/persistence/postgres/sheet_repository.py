"""PostgreSQL sheet repository implementation.

Columns and rows live in JSONB columns of a single row per project, so that
a save is one atomic replace of the whole document.
"""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from colguard.domain.entities import Column, Row, Sheet
from colguard.domain.value_objects import DataKind


def _dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _load_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def columns_to_json(columns: list[Column]) -> list[dict]:
    return [
        {"name": c.name, "data_kind": c.data_kind.value, "required": c.required}
        for c in columns
    ]


def columns_from_json(data: list[dict]) -> list[Column]:
    return [
        Column(
            name=c["name"],
            data_kind=DataKind(c.get("data_kind", DataKind.TEXT)),
            required=bool(c.get("required", False)),
        )
        for c in data or []
    ]


def rows_to_json(rows: list[Row]) -> list[dict]:
    return [
        {
            "values": r.values,
            "created_by": r.created_by,
            "created_at": _dump_datetime(r.created_at),
            "updated_by": r.updated_by,
            "updated_at": _dump_datetime(r.updated_at),
        }
        for r in rows
    ]


def rows_from_json(data: list[dict]) -> list[Row]:
    return [
        Row(
            values=dict(r.get("values") or {}),
            created_by=r.get("created_by"),
            created_at=_load_datetime(r.get("created_at")),
            updated_by=r.get("updated_by"),
            updated_at=_load_datetime(r.get("updated_at")),
        )
        for r in data or []
    ]


class PostgresSheetRepository:
    """Sheet repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, project_id: UUID, for_update: bool = False) -> Sheet | None:
        """Get sheet; for_update locks it until the unit of work ends."""
        q = "SELECT project_id, columns, rows, updated_at FROM sheet WHERE project_id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (project_id,))
        r = await cur.fetchone()
        if not r:
            return None
        return Sheet(
            project_id=r[0],
            columns=columns_from_json(r[1]),
            rows=rows_from_json(r[2]),
            updated_at=r[3],
        )

    async def replace(self, sheet: Sheet) -> Sheet:
        """Insert or fully replace the sheet document."""
        await self._conn.execute(
            "INSERT INTO sheet (project_id, columns, rows, updated_at) "
            "VALUES (%s, %s, %s, COALESCE(%s, NOW())) "
            "ON CONFLICT (project_id) DO UPDATE SET "
            "columns = EXCLUDED.columns, rows = EXCLUDED.rows, updated_at = EXCLUDED.updated_at",
            (
                sheet.project_id,
                Jsonb(columns_to_json(sheet.columns)),
                Jsonb(rows_to_json(sheet.rows)),
                sheet.updated_at,
            ),
        )
        return sheet
