"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

HTTP Mocking:
    All network traffic is intercepted with respx. Tests never reach a real
    server; any unmatched request fails the test.

    api_mock     - empty respx router; register routes per test
    user_server  - stateful in-memory user API installed on a router
"""

import json
import re
from collections.abc import Generator
from typing import Any

import httpx
import pytest
import respx

from useradmin.cli.client import APIClient
from useradmin.cli.gateway import UserGateway
from useradmin.cli.session import Session
from useradmin.core.config import get_app_config, get_settings
from useradmin.core.logging import _load_logging_config

BASE_URL = "http://api.test"


# =============================================================================
# Config Cache
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    _load_logging_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    _load_logging_config.cache_clear()


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def session() -> Session:
    """A fresh anonymous session."""
    return Session()


@pytest.fixture
def api_client(session: Session) -> Generator[APIClient, None, None]:
    """APIClient pointed at the mocked base URL, closed after the test."""
    client = APIClient(base_url=BASE_URL, timeout=5.0, session=session)
    yield client
    client.close()


@pytest.fixture
def gateway(api_client: APIClient) -> UserGateway:
    """UserGateway over the test APIClient."""
    return UserGateway(api_client)


@pytest.fixture
def api_mock() -> Generator[respx.MockRouter, None, None]:
    """
    respx router scoped to BASE_URL.

    Usage:
        def test_list(gateway, api_mock):
            api_mock.get("/users").mock(return_value=httpx.Response(200, json=[]))
            assert gateway.list_users() == []
    """
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


# =============================================================================
# Stateful User Server
# =============================================================================


class FakeUserServer:
    """
    In-memory user API with the same routes and status conventions as the
    real one: 200 on success, 401 without a valid bearer token, 404 for an
    unknown id. Every received request is kept in `requests`.
    """

    def __init__(self, username: str = "admin", password: str = "secret", token: str = "tok-123") -> None:
        self.username = username
        self.password = password
        self.token = token
        self.users: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.requests: list[httpx.Request] = []

    def seed(self, name: str, email: str, age: int) -> dict[str, Any]:
        user = {"id": self.next_id, "name": name, "email": email, "age": age}
        self.users[self.next_id] = user
        self.next_id += 1
        return user

    def _authorized(self, request: httpx.Request) -> bool:
        return request.headers.get("Authorization") == f"Bearer {self.token}"

    def login(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        if body.get("username") == self.username and body.get("password") == self.password:
            return httpx.Response(200, json={"token": self.token})
        return httpx.Response(401, text="invalid credentials")

    def list_users(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._authorized(request):
            return httpx.Response(401, text="unauthorized")
        return httpx.Response(200, json=list(self.users.values()))

    def create_user(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._authorized(request):
            return httpx.Response(401, text="unauthorized")
        body = json.loads(request.content)
        return httpx.Response(200, json=self.seed(body["name"], body["email"], body["age"]))

    def update_user(self, request: httpx.Request, user_id: str) -> httpx.Response:
        self.requests.append(request)
        if not self._authorized(request):
            return httpx.Response(401, text="unauthorized")
        if int(user_id) not in self.users:
            return httpx.Response(404, text="not found")
        body = json.loads(request.content)
        self.users[int(user_id)] = {**body, "id": int(user_id)}
        return httpx.Response(200, json=self.users[int(user_id)])

    def delete_user(self, request: httpx.Request, user_id: str) -> httpx.Response:
        self.requests.append(request)
        if not self._authorized(request):
            return httpx.Response(401, text="unauthorized")
        if self.users.pop(int(user_id), None) is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200)

    def install(self, router: respx.MockRouter, base_url: str = BASE_URL) -> None:
        """Register this server's routes on a respx router."""
        item = re.escape(base_url) + r"/users/(?P<user_id>\d+)$"
        router.post(f"{base_url}/login").mock(side_effect=self.login)
        router.get(f"{base_url}/users").mock(side_effect=self.list_users)
        router.post(f"{base_url}/users").mock(side_effect=self.create_user)
        router.put(url__regex=item).mock(side_effect=self.update_user)
        router.delete(url__regex=item).mock(side_effect=self.delete_user)


@pytest.fixture
def user_server() -> Generator[FakeUserServer, None, None]:
    """A FakeUserServer answering every request to BASE_URL."""
    server = FakeUserServer()
    with respx.mock(assert_all_called=False) as router:
        server.install(router)
        yield server
