"""
Session State.

Holds the bearer token obtained by login. A Session is owned by the
caller and injected into APIClient, so independent sessions can coexist.
"""


class Session:
    """
    Bearer token holder.

    Two states: anonymous (no token) and authenticated (token present).
    The only transition is anonymous -> authenticated, via a successful login.
    """

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    @property
    def token(self) -> str | None:
        """The current bearer token, or None before login."""
        return self._token

    @token.setter
    def token(self, value: str) -> None:
        self._token = value

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def authorization_headers(self) -> dict[str, str]:
        """Authorization header for the current token, empty when anonymous."""
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def __repr__(self) -> str:
        state = "authenticated" if self.is_authenticated else "anonymous"
        return f"Session({state})"
