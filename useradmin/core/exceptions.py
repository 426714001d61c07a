"""
Custom Exceptions.

Error taxonomy for the user API client. Every failure an operation can
produce is an ApplicationError subclass, so callers can report any of them
and keep going.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class TransportError(ApplicationError):
    """Raised when a request could not be sent or no response was received."""

    def __init__(self, message: str = "Transport error", method: str = "", path: str = "") -> None:
        self.method = method
        self.path = path
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class ApiError(ApplicationError):
    """
    Raised when the server answers with any status other than 200.

    The raw response body is kept verbatim; structured error payloads
    are not parsed.
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        method: str = "",
        path: str = "",
        code: str = "API_STATUS_ERROR",
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        target = f"{method} {path} " if method else ""
        super().__init__(f"{target}failed with status {status_code}: {body}", code=code)


class AuthError(ApiError):
    """Raised when the login endpoint rejects the credentials."""

    def __init__(self, status_code: int, body: str, method: str = "POST", path: str = "/login") -> None:
        super().__init__(status_code, body, method=method, path=path, code="AUTH_FAILED")


class DecodeError(ApplicationError):
    """Raised when a 200 response body cannot be parsed into the expected shape."""

    def __init__(self, message: str = "Could not decode response", body: str = "") -> None:
        self.body = body
        super().__init__(message, code="API_DECODE_ERROR")
