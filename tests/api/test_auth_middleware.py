"""Auth middleware tests: bearer token to local user."""

from unittest.mock import MagicMock

import falcon.asgi
import pytest
from falcon.testing import TestClient

from samplepool.infrastructure.auth.keycloak_provider import OIDCUser
from samplepool.interfaces.api.middleware.auth import AuthMiddleware

from tests.conftest import make_role, make_uow_factory, make_user


class WhoAmIResource:
    async def on_get(self, req, resp):
        user = req.context.user
        resp.media = {"email": user.email if user else None}


@pytest.fixture
def keycloak() -> MagicMock:
    provider = MagicMock()
    provider.decode_token.return_value = OIDCUser(
        subject="kc-1", email="Member@Example.com", username="member"
    )
    return provider


@pytest.fixture
def client(fake_uow, keycloak) -> TestClient:
    app = falcon.asgi.App(middleware=[AuthMiddleware(keycloak, make_uow_factory(fake_uow))])
    app.add_route("/whoami", WhoAmIResource())
    return TestClient(app)


def test_token_resolves_local_user(client: TestClient, fake_uow, keycloak) -> None:
    fake_uow.users.add(make_user([make_role("user")], email="member@example.com"))
    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer abc"})
    assert result.json == {"email": "member@example.com"}
    keycloak.decode_token.assert_called_once_with("abc")


def test_missing_header_is_anonymous(client: TestClient, keycloak) -> None:
    assert client.simulate_get("/whoami").json == {"email": None}
    keycloak.decode_token.assert_not_called()


def test_inactive_token_is_anonymous(client: TestClient, fake_uow, keycloak) -> None:
    fake_uow.users.add(make_user(email="member@example.com"))
    keycloak.decode_token.return_value = None
    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer abc"})
    assert result.json == {"email": None}


def test_inactive_local_user_is_anonymous(client: TestClient, fake_uow) -> None:
    fake_uow.users.add(make_user(email="member@example.com", is_active=False))
    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer abc"})
    assert result.json == {"email": None}


def test_unknown_email_is_anonymous(client: TestClient) -> None:
    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer abc"})
    assert result.json == {"email": None}
