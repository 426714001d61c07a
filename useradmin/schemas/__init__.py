# Pydantic schemas package
from useradmin.schemas.user import Credentials, TokenResponse, User, UserCreate

__all__ = [
    "Credentials",
    "TokenResponse",
    "User",
    "UserCreate",
]
