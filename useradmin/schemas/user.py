"""
User Schemas.

Pydantic models for the user API request/response payloads.
Unknown keys in server responses are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Login request body. Used for a single call, never stored."""

    username: str
    password: str = Field(repr=False)


class TokenResponse(BaseModel):
    """Login response body."""

    token: str

    model_config = ConfigDict(extra="ignore")


class UserCreate(BaseModel):
    """Schema for creating a new user. Serialized without an id."""

    name: str = Field(description="Display name", examples=["Alice"])
    email: str = Field(description="Contact email", examples=["alice@x.com"])
    age: int = Field(description="Age in years", examples=[30])


class User(UserCreate):
    """A user resource as held by the server."""

    id: int = Field(description="Server-assigned identifier")

    model_config = ConfigDict(extra="ignore")
