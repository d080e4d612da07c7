"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from devconsole.schemas.users import UserOut


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login, with the signed-in user."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserOut


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    id: str
    username: str
    role: str

    class Config:
        from_attributes = True
