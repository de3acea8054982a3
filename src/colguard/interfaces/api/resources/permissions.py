"""Column permission API resources."""

import falcon.asgi

from colguard.application.dto.permission_dto import ColumnPermissionInput
from colguard.application.use_cases.permission.get_column_permissions import (
    GetColumnPermissionsUseCase,
)
from colguard.application.use_cases.permission.list_project_permissions import (
    ListProjectPermissionsUseCase,
)
from colguard.application.use_cases.permission.set_column_permissions import (
    SetColumnPermissionsUseCase,
)
from colguard.domain.exceptions import ColGuardError
from colguard.interfaces.api.resources.common import current_user, parse_uuid, set_error
from colguard.interfaces.api.resources.serializers import (
    collaborator_to_dict,
    column_to_dict,
    permissions_to_list,
)


class ProjectPermissionsResource:
    """GET /v1/projects/{id}/permissions - every collaborator's resolved access."""

    def __init__(self, list_permissions: ListProjectPermissionsUseCase) -> None:
        self._list = list_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            columns, items = await self._list.execute(user, pid)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {
            "columns": [column_to_dict(c) for c in columns],
            "items": [
                {
                    **collaborator_to_dict(i.collaborator),
                    "permissions": permissions_to_list(i.permissions),
                }
                for i in items
            ],
        }
        resp.status = falcon.HTTP_200


class CollaboratorPermissionsResource:
    """GET/PUT /v1/projects/{id}/permissions/{collaborator_id}."""

    def __init__(
        self,
        get_permissions: GetColumnPermissionsUseCase,
        set_permissions: SetColumnPermissionsUseCase,
    ) -> None:
        self._get = get_permissions
        self._set = set_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        collaborator_id: str,
    ) -> None:
        """Resolved permissions; one entry per current column."""
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            resolved = await self._get.execute(user, pid, collaborator_id)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {
            "collaborator_id": resolved.collaborator_id,
            "permissions": permissions_to_list(resolved.permissions),
        }
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        collaborator_id: str,
    ) -> None:
        """Replace explicit permissions; the whole batch is rejected on any bad entry."""
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            body = await req.get_media()
            raw = body["permissions"]
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        if not isinstance(raw, list) or not all(isinstance(p, dict) for p in raw):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "permissions must be an array of objects"}
            return

        entries = [
            ColumnPermissionInput(p.get("column_name"), p.get("access_level")) for p in raw
        ]
        try:
            record = await self._set.execute(user, pid, collaborator_id, entries)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {
            "collaborator_id": record.collaborator_id,
            "permissions": permissions_to_list(record.permissions),
        }
        resp.status = falcon.HTTP_200
