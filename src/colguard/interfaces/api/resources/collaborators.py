"""Collaborator API resources."""

import falcon.asgi

from colguard.application.use_cases.collaborator.add_collaborator import AddCollaboratorUseCase
from colguard.application.use_cases.collaborator.list_collaborators import (
    ListCollaboratorsUseCase,
)
from colguard.application.use_cases.collaborator.remove_collaborator import (
    RemoveCollaboratorUseCase,
)
from colguard.domain.exceptions import ColGuardError
from colguard.domain.value_objects import ProjectRole
from colguard.interfaces.api.resources.common import current_user, parse_uuid, set_error
from colguard.interfaces.api.resources.serializers import collaborator_to_dict


class CollaboratorsResource:
    """GET/POST /v1/projects/{id}/collaborators - list and add collaborators."""

    def __init__(
        self,
        list_collaborators: ListCollaboratorsUseCase,
        add_collaborator: AddCollaboratorUseCase,
    ) -> None:
        self._list = list_collaborators
        self._add = add_collaborator

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
            collaborators = await self._list.execute(user, pid)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = {"items": [collaborator_to_dict(c) for c in collaborators]}
        resp.status = falcon.HTTP_200

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
            user_id = str(body["user_id"])
            role = body.get("role") or ProjectRole.DEVELOPER
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        try:
            collaborator = await self._add.execute(user, pid, user_id, role)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.media = collaborator_to_dict(collaborator)
        resp.status = falcon.HTTP_201


class CollaboratorResource:
    """DELETE /v1/projects/{id}/collaborators/{user_id} - remove collaborator."""

    def __init__(self, remove_collaborator: RemoveCollaboratorUseCase) -> None:
        self._remove = remove_collaborator

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
        user_id: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        pid = parse_uuid(project_id, resp)
        if not pid:
            return

        try:
            await self._remove.execute(user, pid, user_id)
        except ColGuardError as e:
            set_error(resp, e)
            return
        resp.status = falcon.HTTP_204
