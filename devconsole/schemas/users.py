"""Pydantic schemas for console users. No schema here carries a password hash."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from devconsole.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN

Role = Literal["user", "admin", "developer"]

ROLE_VALUES: frozenset[str] = frozenset({"user", "admin", "developer"})

# Roles allowed to operate the developer console.
STAFF_ROLES: frozenset[str] = frozenset({"admin", "developer"})


class UserOut(BaseModel):
    """User as returned by every read (password stripped)."""

    id: str
    username: str
    name: str
    phone: str | None = None
    email: str | None = None
    role: Role
    is_active: bool
    assigned_pages: list[str] = Field(default_factory=list)
    created_at: datetime
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class UserRegister(BaseModel):
    """Self-registration payload. Role, activation and page assignment are not caller-controlled."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., max_length=64)
    email: str | None = Field(default=None, max_length=320)


class UserCreate(UserRegister):
    """Privileged create: the caller picks the role and initial state."""

    phone: str | None = Field(default=None, max_length=64)
    role: Role = "user"
    is_active: bool = True
    assigned_pages: list[str] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Partial update; only fields that are set are written."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=320)
    role: Role | None = None
    is_active: bool | None = None
    assigned_pages: list[str] | None = None


class PasswordUpdate(BaseModel):
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class StatusUpdate(BaseModel):
    is_active: bool


class PageAssignment(BaseModel):
    page_ids: list[str] = Field(default_factory=list)


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    users: list[UserOut]
