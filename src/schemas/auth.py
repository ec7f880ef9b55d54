"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional here; missing values are reported by the identity
    service with a 400.
    """

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class OAuthSync(BaseModel):
    """Identity pushed by the frontend's OAuth callback."""

    email: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)
    provider: str | None = Field(None, max_length=50)


class UserResponse(BaseModel):
    """Public user information. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str = "user"


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105
