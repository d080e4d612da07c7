"""SQLAlchemy ORM models."""

from devconsole.models.activity_log import ActivityLog
from devconsole.models.base import Base
from devconsole.models.page import Page
from devconsole.models.user import User

__all__ = ["ActivityLog", "Base", "Page", "User"]
