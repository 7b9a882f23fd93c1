"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from samplepool.interfaces.api.app import create_app

from tests.conftest import (
    FakePaymentGateway,
    make_permission,
    make_role,
    make_superadmin,
    make_uow_factory,
    make_user,
)


class Principal:
    """Mutable holder for the user the bypass middleware authenticates as."""

    user = None


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing."""

    def __init__(self, principal: Principal) -> None:
        self._principal = principal

    async def process_request(self, req, resp):
        req.context.user = self._principal.user


@pytest.fixture
def principal() -> Principal:
    return Principal()


@pytest.fixture
def superadmin(fake_uow):
    user = make_superadmin(name="Root", email="root@example.com")
    fake_uow.users.add(user)
    return user


@pytest.fixture
def member(fake_uow):
    """Regular account: reads users and manages only the pools it created."""
    role = make_role("member", [make_permission("user", "read")])
    user = make_user([role], name="Member", email="member@example.com")
    fake_uow.users.add(user)
    return user


@pytest.fixture
def roleless(fake_uow):
    user = make_user(name="Fresh", email="fresh@example.com")
    fake_uow.users.add(user)
    return user


@pytest.fixture
def app(fake_uow, payment_gateway: FakePaymentGateway, principal: Principal):
    """Falcon ASGI app wired to in-memory fakes."""
    return create_app(
        make_uow_factory(fake_uow),
        payment_gateway,
        middleware=[AuthBypassMiddleware(principal)],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
