"""
User API Gateway.

The five operations of the user API, one HTTP call each. Results are
typed pydantic models; failures are raised as TransportError, ApiError
(AuthError for login) or DecodeError.

Usage:
    with UserGateway.from_settings() as gateway:
        gateway.login("admin", "secret")
        users = gateway.list_users()
        created = gateway.create_user("Alice", "alice@x.com", 30)
"""

from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from useradmin.cli.client import APIClient
from useradmin.cli.session import Session
from useradmin.core.exceptions import ApiError, AuthError, DecodeError
from useradmin.core.logging import get_logger, log_with_source
from useradmin.schemas.user import Credentials, TokenResponse, User, UserCreate

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")

_TOKEN = TypeAdapter(TokenResponse)
_USER = TypeAdapter(User)
_USER_LIST = TypeAdapter(list[User])


def _decode(response: httpx.Response, adapter: TypeAdapter[ModelT], what: str) -> ModelT:
    """Parse a response body with the given adapter, raising DecodeError on failure."""
    try:
        return adapter.validate_json(response.content)
    except ValidationError as e:
        log_with_source(
            logger,
            "api",
            "warning",
            "Undecodable API response",
            expected=what,
            errors=e.error_count(),
        )
        raise DecodeError(f"Could not decode {what}: {e}", body=response.text) from e


class UserGateway:
    """Login and CRUD operations against the /users resource collection."""

    def __init__(self, client: APIClient) -> None:
        self.client = client

    @classmethod
    def from_settings(
        cls,
        base_url: str | None = None,
        session: Session | None = None,
        **kwargs: Any,
    ) -> "UserGateway":
        """Build a gateway over a new APIClient configured from application.yaml."""
        return cls(APIClient(base_url=base_url, session=session, **kwargs))

    @property
    def session(self) -> Session:
        return self.client.session

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "UserGateway":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def login(self, username: str, password: str) -> None:
        """
        Authenticate and store the returned bearer token in the session.

        The session is only touched once the token has been decoded, so a
        failed login leaves any previous token in place.

        Raises:
            TransportError: On transport failure
            AuthError: If the server answers with any status other than 200
            DecodeError: If the body is not JSON or lacks a string "token"
        """
        credentials = Credentials(username=username, password=password)
        try:
            response = self.client.request_ok(
                "POST", "/login", json=credentials.model_dump(), authenticated=False,
            )
        except ApiError as e:
            raise AuthError(e.status_code, e.body) from e

        token = _decode(response, _TOKEN, "login response").token
        self.session.token = token

        log_with_source(logger, "api", "info", "Logged in")

    def list_users(self) -> list[User]:
        """
        Fetch all users, in server order.

        A JSON null body is treated as an empty collection.
        """
        response = self.client.request_ok("GET", "/users")
        if response.content.strip() == b"null":
            return []
        return _decode(response, _USER_LIST, "user list")

    def create_user(self, name: str, email: str, age: int) -> User:
        """Create a user and return it with its server-assigned id."""
        payload = UserCreate(name=name, email=email, age=age)
        response = self.client.request_ok("POST", "/users", json=payload.model_dump())
        user = _decode(response, _USER, "created user")

        log_with_source(logger, "api", "info", "User created", user_id=user.id)
        return user

    def update_user(self, user_id: int, name: str, email: str, age: int) -> User:
        """
        Replace a user's fields.

        The response body is not parsed; the submitted user is returned.
        """
        user = User(id=user_id, name=name, email=email, age=age)
        self.client.request_ok("PUT", f"/users/{user_id}", json=user.model_dump())

        log_with_source(logger, "api", "info", "User updated", user_id=user_id)
        return user

    def delete_user(self, user_id: int) -> int:
        """Delete a user. Returns the deleted id as confirmation."""
        self.client.request_ok("DELETE", f"/users/{user_id}")

        log_with_source(logger, "api", "info", "User deleted", user_id=user_id)
        return user_id
