"""Keycloak OIDC provider for bearer token validation."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from colguard.domain.entities import User
from colguard.domain.value_objects import SecurityRole

logger = logging.getLogger(__name__)


class KeycloakProvider:
    """Keycloak OIDC - introspects tokens and maps realm roles to a security role."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        admin_role: str = "colguard-admin",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._admin_role = admin_role

    def decode_token(self, token: str) -> User | None:
        """Introspect token; return the subject or None if inactive/invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        return user_from_claims(token_info, self._admin_role)


def user_from_claims(claims: dict, admin_role: str) -> User | None:
    """Build subject from introspection claims; None for inactive tokens."""
    if not claims.get("active") or not claims.get("sub"):
        return None
    roles = claims.get("realm_access", {}).get("roles", [])
    return User(
        id=claims["sub"],
        security_role=SecurityRole.ADMIN if admin_role in roles else SecurityRole.COLLABORATOR,
        email=claims.get("email"),
        username=claims.get("preferred_username"),
    )
