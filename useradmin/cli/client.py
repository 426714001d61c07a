"""
HTTP Client for the user API.

Provides a synchronous HTTP client for communicating with the remote
user-management API. Every request carries a JSON content type and the
X-Client-ID: useradmin header; authenticated requests also carry the
session's bearer token.
"""

from typing import Any

import httpx

from useradmin.cli.session import Session
from useradmin.core.config import get_api_base_url
from useradmin.core.exceptions import ApiError, TransportError
from useradmin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

CLIENT_ID = "useradmin"
DEFAULT_TIMEOUT = 30.0

_UNSET: Any = object()


class APIClient:
    """
    HTTP client for user API communication.

    Features:
    - Base URL and timeout from settings, overridable per instance
    - Bearer token from the injected Session
    - Structured logging of requests/responses
    - Transport failures and non-200 statuses raised as typed errors

    Usage:
        session = Session()
        with APIClient(session=session) as client:
            response = client.get("/users")
            response = client.post("/users", json={"name": "Alice"})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = _UNSET,
        session: Session | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds, None for no timeout. If omitted,
                reads from config/settings/application.yaml.
            session: Session holding the bearer token. A fresh anonymous one if None.
            transport: Optional httpx transport, used by tests.
        """
        try:
            config_base_url, config_timeout = get_api_base_url()
        except (RuntimeError, FileNotFoundError, ValueError) as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine API URL from config/settings/application.yaml"
                ) from e
            config_base_url = base_url
            config_timeout = DEFAULT_TIMEOUT

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = config_timeout if timeout is _UNSET else timeout
        self.session = session if session is not None else Session()
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Client-ID": CLIENT_ID},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def build_headers(self, authenticated: bool = True) -> dict[str, str]:
        """Request headers: JSON content type plus bearer token when held."""
        headers = {"Content-Type": "application/json"}
        if authenticated:
            headers.update(self.session.authorization_headers())
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /users, /users/5)
            json: Body to serialize as JSON. None sends no payload.
            authenticated: Attach the session's bearer token if one is held.

        Returns:
            httpx.Response, whatever its status

        Raises:
            TransportError: On connection failure, timeout, protocol error or
                an unusable base URL
        """
        log_with_source(
            logger,
            "api",
            "debug",
            "API request",
            method=method,
            path=path,
            authenticated=authenticated and self.session.is_authenticated,
        )

        try:
            response = self._get_client().request(
                method,
                path,
                json=json,
                headers=self.build_headers(authenticated),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(
                f"{method} {path} could not be completed: {e}",
                method=method,
                path=path,
            ) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        return response

    def request_ok(
        self,
        method: str,
        path: str,
        json: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Make a request and require status 200.

        Raises:
            TransportError: On transport failure
            ApiError: On any status other than 200, with the raw body
        """
        response = self.request(method, path, json=json, authenticated=authenticated)
        if response.status_code != httpx.codes.OK:
            log_with_source(
                logger,
                "api",
                "warning",
                "API error response",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise ApiError(response.status_code, response.text, method=method, path=path)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return self.request("DELETE", path, **kwargs)
