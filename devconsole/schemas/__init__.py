"""Pydantic request/response schemas."""

from devconsole.schemas.activity import (
    ActivityLogOut,
    ActivityLogsResponse,
    DashboardStats,
)
from devconsole.schemas.auth import CurrentUser, LoginRequest, TokenResponse
from devconsole.schemas.catalog import CatalogListResponse, CatalogPage
from devconsole.schemas.dashboard import (
    ActivityFeedItem,
    DashboardSnapshot,
    SummaryCard,
)
from devconsole.schemas.health import HealthResponse
from devconsole.schemas.pages import (
    PAGE_SUB_TYPES,
    PageCreate,
    PageOut,
    PagesListResponse,
    PageType,
    PageUpdate,
)
from devconsole.schemas.users import (
    PageAssignment,
    PasswordUpdate,
    Role,
    StatusUpdate,
    UserCreate,
    UserOut,
    UserRegister,
    UsersListResponse,
    UserUpdate,
)

__all__ = [
    "ActivityFeedItem",
    "ActivityLogOut",
    "ActivityLogsResponse",
    "CatalogListResponse",
    "CatalogPage",
    "CurrentUser",
    "DashboardSnapshot",
    "DashboardStats",
    "HealthResponse",
    "LoginRequest",
    "PAGE_SUB_TYPES",
    "PageAssignment",
    "PageCreate",
    "PageOut",
    "PagesListResponse",
    "PageType",
    "PageUpdate",
    "PasswordUpdate",
    "Role",
    "StatusUpdate",
    "SummaryCard",
    "TokenResponse",
    "UserCreate",
    "UserOut",
    "UserRegister",
    "UsersListResponse",
    "UserUpdate",
]
