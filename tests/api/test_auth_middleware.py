"""Auth middleware tests."""

import threading

import falcon
import falcon.asgi
from falcon.testing import TestClient

from colguard.application.use_cases.user.register_user import RegisterUserUseCase
from colguard.interfaces.api.middleware.auth import AuthMiddleware

from tests.conftest import ANA


class _StubKeycloak:
    """Token provider accepting a single token; records the calling thread."""

    def __init__(self) -> None:
        self.threads: list[int] = []

    def decode_token(self, token: str):
        self.threads.append(threading.get_ident())
        return ANA if token == "good" else None


class _WhoAmI:
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = req.context.user
        resp.media = {"user": user.id if user else None}


def _client(keycloak, register_user=None) -> TestClient:
    app = falcon.asgi.App(middleware=[AuthMiddleware(keycloak, register_user)])
    app.add_route("/whoami", _WhoAmI())
    return TestClient(app)


def test_valid_token_sets_user_and_registers_it(fake_uow, uow_factory) -> None:
    keycloak = _StubKeycloak()
    client = _client(keycloak, RegisterUserUseCase(uow_factory))

    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer good"})

    assert result.json == {"user": ANA.id}
    assert fake_uow.users._by_id[ANA.id] == ANA


def test_introspection_runs_off_the_event_loop_thread() -> None:
    keycloak = _StubKeycloak()

    _client(keycloak).simulate_get("/whoami", headers={"Authorization": "Bearer good"})

    assert keycloak.threads
    assert keycloak.threads[0] != threading.get_ident()


def test_missing_or_invalid_token_leaves_user_empty() -> None:
    keycloak = _StubKeycloak()
    client = _client(keycloak)

    assert client.simulate_get("/whoami").json == {"user": None}
    assert client.simulate_get("/whoami", headers={"Authorization": "Basic x"}).json == {
        "user": None
    }
    assert client.simulate_get("/whoami", headers={"Authorization": "Bearer bad"}).json == {
        "user": None
    }
    assert len(keycloak.threads) == 1
