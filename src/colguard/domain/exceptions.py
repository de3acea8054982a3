"""Domain exceptions."""


class ColGuardError(Exception):
    """Base exception for ColGuard."""

    pass


class PermissionDenied(ColGuardError):
    """User does not have permission for the requested action."""

    pass


class NotFound(ColGuardError):
    """Requested resource was not found."""

    pass


class Conflict(ColGuardError):
    """Resource already exists (e.g. collaborator already in project)."""

    pass


class ValidationError(ColGuardError):
    """Validation failed for input data."""

    pass


class SchemaChangeRejected(ValidationError):
    """Collaborator tried to add, remove or rename columns."""

    pass
