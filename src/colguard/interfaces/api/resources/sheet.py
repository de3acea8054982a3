"""Sheet and column API resources."""

import falcon.asgi

from colguard.application.dto.sheet_dto import SheetUpdateInput
from colguard.application.use_cases.sheet.add_column import AddColumnUseCase
from colguard.application.use_cases.sheet.get_sheet import GetSheetUseCase
from colguard.application.use_cases.sheet.import_csv import ImportCsvUseCase
from colguard.application.use_cases.sheet.remove_column import RemoveColumnUseCase
from colguard.application.use_cases.sheet.save_sheet import SaveSheetUseCase
from colguard.domain.exceptions import ColGuardError
from colguard.interfaces.api.resources.common import current_user, parse_uuid, set_error
from colguard.interfaces.api.resources.serializers import sheet_to_dict, sheet_view_to_dict


class SheetResource:
    """GET/PUT /v1/projects/{id}/sheet - read annotated sheet, save full sheet."""

    def __init__(self, get_sheet: GetSheetUseCase, save_sheet: SaveSheetUseCase) -> None:
        self._get_sheet = get_sheet
        self._save_sheet = save_sheet

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Sheet restricted to the caller's readable columns, plus the access map."""
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            view = await self._get_sheet.execute(user, pid)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = sheet_view_to_dict(view)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Save full sheet; responds with the persisted, merged document."""
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            body = await req.get_media()
            columns = body["columns"]
            rows = body["rows"]
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        if not isinstance(columns, list) or not isinstance(rows, list):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "columns and rows must be arrays"}
            return

        try:
            view = await self._save_sheet.execute(
                user, SheetUpdateInput(project_id=pid, columns=columns, rows=rows)
            )
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = sheet_view_to_dict(view)
        resp.status = falcon.HTTP_200


class SheetImportResource:
    """POST /v1/projects/{id}/sheet/import - replace sheet from CSV."""

    def __init__(self, import_csv: ImportCsvUseCase) -> None:
        self._import_csv = import_csv

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Accepts multipart/form-data with a "file" part, or a text/csv body."""
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        content_type = req.content_type or ""
        if "multipart/form-data" in content_type:
            data = await self._read_multipart(req, resp)
            if data is None:
                return
        else:
            data = await req.stream.read()

        try:
            sheet, parsed = await self._import_csv.execute(user, pid, data)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {**sheet_to_dict(sheet), "skipped_rows": parsed.skipped_rows}
        resp.status = falcon.HTTP_200

    async def _read_multipart(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> bytes | None:
        try:
            form = await req.get_media()
            async for part in form:
                if part.name == "file":
                    return bytes(await part.get_data())
        except falcon.MediaMalformedError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid multipart: {e.description}"}
            return None
        resp.status = falcon.HTTP_400
        resp.media = {"error": "file part required"}
        return None


class ColumnsResource:
    """POST /v1/projects/{id}/columns - add column."""

    def __init__(self, add_column: AddColumnUseCase) -> None:
        self._add_column = add_column

    async def on_post(
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
            body = await req.get_media()
            name = body["name"]
            data_kind = body.get("data_kind") or "text"
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            sheet = await self._add_column.execute(user, pid, name, data_kind)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = sheet_to_dict(sheet)
        resp.status = falcon.HTTP_201


class ColumnResource:
    """DELETE /v1/projects/{id}/columns/{column_name} - remove column."""

    def __init__(self, remove_column: RemoveColumnUseCase) -> None:
        self._remove_column = remove_column

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        column_name: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            sheet = await self._remove_column.execute(user, pid, column_name)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = sheet_to_dict(sheet)
        resp.status = falcon.HTTP_200
