"""Global security role of a user."""

from enum import StrEnum


class SecurityRole(StrEnum):
    """ADMIN bypasses column permissions; COLLABORATOR is subject to them."""

    ADMIN = "ADMIN"
    COLLABORATOR = "COLLABORATOR"
