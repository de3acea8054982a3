"""Fixtures for API tests."""

import falcon.asgi
import pytest

from colguard.application.use_cases.collaborator.add_collaborator import AddCollaboratorUseCase
from colguard.application.use_cases.collaborator.list_collaborators import (
    ListCollaboratorsUseCase,
)
from colguard.application.use_cases.collaborator.remove_collaborator import (
    RemoveCollaboratorUseCase,
)
from colguard.application.use_cases.permission.get_column_permissions import (
    GetColumnPermissionsUseCase,
)
from colguard.application.use_cases.permission.list_project_permissions import (
    ListProjectPermissionsUseCase,
)
from colguard.application.use_cases.permission.set_column_permissions import (
    SetColumnPermissionsUseCase,
)
from colguard.application.use_cases.project.create_project import CreateProjectUseCase
from colguard.application.use_cases.project.get_project import GetProjectUseCase
from colguard.application.use_cases.project.list_my_projects import ListMyProjectsUseCase
from colguard.application.use_cases.sheet.add_column import AddColumnUseCase
from colguard.application.use_cases.sheet.get_sheet import GetSheetUseCase
from colguard.application.use_cases.sheet.import_csv import ImportCsvUseCase
from colguard.application.use_cases.sheet.remove_column import RemoveColumnUseCase
from colguard.application.use_cases.sheet.save_sheet import SaveSheetUseCase
from colguard.infrastructure.csv_import.csv_parser import StdlibCsvParser

from tests.conftest import ADMIN, ANA, BRUNO

USERS = {u.id: u for u in (ADMIN, ANA, BRUNO)}


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-User header."""

    async def process_request(self, req, resp):
        req.context.user = USERS.get(req.get_header("X-Test-User") or "")


def as_user(user) -> dict:
    return {"X-Test-User": user.id}


@pytest.fixture
def app(uow_factory, access_resolver):
    """Falcon ASGI app with API resources for testing."""
    from colguard.interfaces.api.resources.collaborators import (
        CollaboratorResource,
        CollaboratorsResource,
    )
    from colguard.interfaces.api.resources.permissions import (
        CollaboratorPermissionsResource,
        ProjectPermissionsResource,
    )
    from colguard.interfaces.api.resources.projects import (
        MyProjectsResource,
        ProjectResource,
        ProjectsResource,
    )
    from colguard.interfaces.api.resources.sheet import (
        ColumnResource,
        ColumnsResource,
        SheetImportResource,
        SheetResource,
    )

    app = falcon.asgi.App(middleware=[AuthBypassMiddleware()])
    app.add_route("/v1/projects", ProjectsResource(CreateProjectUseCase(uow_factory)))
    app.add_route("/v1/projects/mine", MyProjectsResource(ListMyProjectsUseCase(uow_factory)))
    app.add_route("/v1/projects/{project_id}", ProjectResource(GetProjectUseCase(uow_factory)))
    app.add_route(
        "/v1/projects/{project_id}/collaborators",
        CollaboratorsResource(
            ListCollaboratorsUseCase(uow_factory), AddCollaboratorUseCase(uow_factory)
        ),
    )
    app.add_route(
        "/v1/projects/{project_id}/collaborators/{user_id}",
        CollaboratorResource(RemoveCollaboratorUseCase(uow_factory)),
    )
    app.add_route(
        "/v1/projects/{project_id}/sheet",
        SheetResource(
            GetSheetUseCase(uow_factory, access_resolver),
            SaveSheetUseCase(uow_factory, access_resolver),
        ),
    )
    app.add_route(
        "/v1/projects/{project_id}/sheet/import",
        SheetImportResource(ImportCsvUseCase(uow_factory, StdlibCsvParser(), max_bytes=1024)),
    )
    app.add_route(
        "/v1/projects/{project_id}/columns", ColumnsResource(AddColumnUseCase(uow_factory))
    )
    app.add_route(
        "/v1/projects/{project_id}/columns/{column_name}",
        ColumnResource(RemoveColumnUseCase(uow_factory)),
    )
    app.add_route(
        "/v1/projects/{project_id}/permissions",
        ProjectPermissionsResource(ListProjectPermissionsUseCase(uow_factory, access_resolver)),
    )
    app.add_route(
        "/v1/projects/{project_id}/permissions/{collaborator_id}",
        CollaboratorPermissionsResource(
            GetColumnPermissionsUseCase(uow_factory, access_resolver),
            SetColumnPermissionsUseCase(uow_factory),
        ),
    )
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
