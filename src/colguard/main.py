"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi
import falcon.media

from colguard import __version__
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
from colguard.application.use_cases.user.register_user import RegisterUserUseCase
from colguard.config import get_settings
from colguard.infrastructure.auth.keycloak_provider import KeycloakProvider
from colguard.infrastructure.csv_import.csv_parser import StdlibCsvParser
from colguard.infrastructure.permission.access_resolver import ColumnAccessResolver
from colguard.infrastructure.persistence.postgres.connection import create_pool
from colguard.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from colguard.interfaces.api.middleware.auth import AuthMiddleware
from colguard.interfaces.api.middleware.cors import CORSMiddleware
from colguard.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from colguard.interfaces.api.resources.collaborators import (
    CollaboratorResource,
    CollaboratorsResource,
)
from colguard.interfaces.api.resources.health import HealthResource
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
from colguard.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_colguard_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            admin_role=settings.keycloak_admin_role,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; every request is anonymous")

    access_resolver = ColumnAccessResolver(
        uow_factory, default=settings.default_access_level
    )

    register_user = RegisterUserUseCase(unit_of_work_factory=uow_factory)
    create_project = CreateProjectUseCase(unit_of_work_factory=uow_factory)
    get_project = GetProjectUseCase(unit_of_work_factory=uow_factory)
    list_my_projects = ListMyProjectsUseCase(unit_of_work_factory=uow_factory)
    list_collaborators = ListCollaboratorsUseCase(unit_of_work_factory=uow_factory)
    add_collaborator = AddCollaboratorUseCase(unit_of_work_factory=uow_factory)
    remove_collaborator = RemoveCollaboratorUseCase(unit_of_work_factory=uow_factory)
    get_sheet = GetSheetUseCase(
        unit_of_work_factory=uow_factory,
        access_resolver=access_resolver,
    )
    save_sheet = SaveSheetUseCase(
        unit_of_work_factory=uow_factory,
        access_resolver=access_resolver,
    )
    add_column = AddColumnUseCase(unit_of_work_factory=uow_factory)
    remove_column = RemoveColumnUseCase(unit_of_work_factory=uow_factory)
    import_csv = ImportCsvUseCase(
        unit_of_work_factory=uow_factory,
        csv_parser=StdlibCsvParser(),
        max_bytes=settings.csv_max_bytes,
    )
    get_permissions = GetColumnPermissionsUseCase(
        unit_of_work_factory=uow_factory,
        access_resolver=access_resolver,
    )
    list_permissions = ListProjectPermissionsUseCase(
        unit_of_work_factory=uow_factory,
        access_resolver=access_resolver,
    )
    set_permissions = SetColumnPermissionsUseCase(unit_of_work_factory=uow_factory)

    health_resource = HealthResource(pool)
    projects_resource = ProjectsResource(create_project)
    my_projects_resource = MyProjectsResource(list_my_projects)
    project_resource = ProjectResource(get_project)
    collaborators_resource = CollaboratorsResource(list_collaborators, add_collaborator)
    collaborator_resource = CollaboratorResource(remove_collaborator)
    sheet_resource = SheetResource(get_sheet, save_sheet)
    sheet_import_resource = SheetImportResource(import_csv)
    columns_resource = ColumnsResource(add_column)
    column_resource = ColumnResource(remove_column)
    project_permissions_resource = ProjectPermissionsResource(list_permissions)
    collaborator_permissions_resource = CollaboratorPermissionsResource(
        get_permissions, set_permissions
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, register_user),
        ],
    )

    # Uploaded CSV parts are buffered whole; cap the buffer just above the import limit.
    multipart = falcon.media.MultipartFormHandler()
    multipart.parse_options.max_body_part_buffer_size = settings.csv_max_bytes + 1
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"error": "Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/projects", projects_resource)
    app.add_route("/v1/projects/mine", my_projects_resource)
    app.add_route("/v1/projects/{project_id}", project_resource)
    app.add_route("/v1/projects/{project_id}/collaborators", collaborators_resource)
    app.add_route(
        "/v1/projects/{project_id}/collaborators/{user_id}",
        collaborator_resource,
    )
    app.add_route("/v1/projects/{project_id}/sheet", sheet_resource)
    app.add_route("/v1/projects/{project_id}/sheet/import", sheet_import_resource)
    app.add_route("/v1/projects/{project_id}/columns", columns_resource)
    app.add_route("/v1/projects/{project_id}/columns/{column_name}", column_resource)
    app.add_route("/v1/projects/{project_id}/permissions", project_permissions_resource)
    app.add_route(
        "/v1/projects/{project_id}/permissions/{collaborator_id}",
        collaborator_permissions_resource,
    )

    logger.info(
        "ColGuard v%s configured (environment=%s, default access=%s)",
        __version__,
        settings.environment,
        settings.default_access_level.value,
    )
    return app


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "colguard.main:create_colguard_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
