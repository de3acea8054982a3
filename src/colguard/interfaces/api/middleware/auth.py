"""Auth middleware - resolves the bearer token into the request subject."""

import asyncio

import falcon.asgi

from colguard.application.use_cases.user.register_user import RegisterUserUseCase


class AuthMiddleware:
    """Middleware that validates bearer tokens and sets req.context.user.

    req.context.user is a domain User, or None when the request carries no
    valid token. Resources answer 401 for None.
    """

    def __init__(
        self,
        keycloak_provider=None,
        register_user: RegisterUserUseCase | None = None,
    ) -> None:
        self._keycloak = keycloak_provider
        self._register_user = register_user

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        # introspection is a blocking HTTP call
        user = await asyncio.to_thread(self._keycloak.decode_token, auth[7:])
        if user and self._register_user:
            await self._register_user.execute(user)
        req.context.user = user
