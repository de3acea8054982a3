"""Request/response helpers shared by API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from colguard.domain.entities import User
from colguard.domain.exceptions import (
    ColGuardError,
    Conflict,
    NotFound,
    PermissionDenied,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[ColGuardError], str]] = [
    (NotFound, falcon.HTTP_404),
    (PermissionDenied, falcon.HTTP_403),
    (Conflict, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
]


def current_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> User | None:
    """Authenticated subject, or None after writing a 401 response."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
    return user


def parse_uuid(value: str, resp: falcon.asgi.Response, label: str = "project ID") -> UUID | None:
    """UUID from path segment, or None after writing a 400 response."""
    try:
        return UUID(value)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": f"Invalid {label}"}
        return None


def error_message(exc: ColGuardError) -> str:
    if isinstance(exc, NotFound) and len(exc.args) == 2:
        return f"{exc.args[0]} not found: {exc.args[1]}"
    return str(exc)


def set_error(resp: falcon.asgi.Response, exc: ColGuardError) -> None:
    """Map a domain exception onto the response."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            resp.status = status
            break
    else:
        resp.status = falcon.HTTP_500
    resp.media = {"error": error_message(exc)}
