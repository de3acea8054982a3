"""Project API resources."""

import falcon.asgi

from colguard.application.use_cases.project.create_project import CreateProjectUseCase
from colguard.application.use_cases.project.get_project import GetProjectUseCase
from colguard.application.use_cases.project.list_my_projects import ListMyProjectsUseCase
from colguard.domain.exceptions import ColGuardError
from colguard.interfaces.api.resources.common import current_user, parse_uuid, set_error
from colguard.interfaces.api.resources.serializers import project_to_dict


class ProjectsResource:
    """POST /v1/projects - create project."""

    def __init__(self, create_project: CreateProjectUseCase) -> None:
        self._create_project = create_project

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            name = body["name"]
            description = body.get("description")
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            project = await self._create_project.execute(user, name, description)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = project_to_dict(project)
        resp.status = falcon.HTTP_201


class MyProjectsResource:
    """GET /v1/projects/mine - projects the caller collaborates on."""

    def __init__(self, list_my_projects: ListMyProjectsUseCase) -> None:
        self._list_my_projects = list_my_projects

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req, resp)
        if not user:
            return
        projects = await self._list_my_projects.execute(user)
        resp.media = {"items": [project_to_dict(p) for p in projects]}
        resp.status = falcon.HTTP_200


class ProjectResource:
    """GET /v1/projects/{id} - project with statistics."""

    def __init__(self, get_project: GetProjectUseCase) -> None:
        self._get_project = get_project

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
            out = await self._get_project.execute(user, pid)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {
            **project_to_dict(out.project),
            "stats": {
                "total_rows": out.stats.total_rows,
                "total_columns": out.stats.total_columns,
                "total_collaborators": out.stats.total_collaborators,
            },
        }
        resp.status = falcon.HTTP_200
