"""JSON shapes of API responses."""

from colguard.application.dto.sheet_dto import SheetView
from colguard.domain.entities import (
    Collaborator,
    Column,
    ColumnPermission,
    Project,
    Sheet,
)
from colguard.domain.services import rows_to_wire
from colguard.domain.value_objects import AccessLevel


def project_to_dict(project: Project) -> dict:
    return {
        "id": str(project.id),
        "name": project.name,
        "description": project.description,
        "created_by": project.created_by,
        "created_at": project.created_at.isoformat(),
        "updated_at": project.updated_at.isoformat(),
    }


def collaborator_to_dict(collaborator: Collaborator) -> dict:
    return {
        "user_id": collaborator.user_id,
        "role": collaborator.role.value,
        "joined_at": collaborator.joined_at.isoformat(),
    }


def column_to_dict(column: Column) -> dict:
    return {
        "name": column.name,
        "data_kind": column.data_kind.value,
        "required": column.required,
    }


def permissions_to_list(permissions: list[ColumnPermission]) -> list[dict]:
    return [
        {"column_name": p.column_name, "access_level": p.access_level.value}
        for p in permissions
    ]


def sheet_view_to_dict(view: SheetView) -> dict:
    """Sheet as the subject may see it; rows are arrays aligned with columns."""
    names = [c.name for c in view.columns]
    return {
        "project_id": str(view.project_id),
        "columns": [column_to_dict(c) for c in view.columns],
        "rows": rows_to_wire(names, view.rows),
        "access": [
            {"column_name": name, "access_level": level.value}
            for name, level in view.access.items()
        ],
        "updated_at": view.updated_at.isoformat() if view.updated_at else None,
        "rejected_cells": view.rejected_cells,
    }


def sheet_to_dict(sheet: Sheet) -> dict:
    """Full sheet for administrators."""
    return sheet_view_to_dict(
        SheetView(
            project_id=sheet.project_id,
            columns=sheet.columns,
            rows=[r.values for r in sheet.rows],
            access={c.name: AccessLevel.READ_WRITE for c in sheet.columns},
            updated_at=sheet.updated_at,
        )
    )
