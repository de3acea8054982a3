"""User entity - the authenticated subject of a request."""

from dataclasses import dataclass

from colguard.domain.value_objects import SecurityRole


@dataclass
class User:
    """Subject identity with its global security role."""

    id: str
    security_role: SecurityRole = SecurityRole.COLLABORATOR
    email: str | None = None
    username: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.security_role is SecurityRole.ADMIN
