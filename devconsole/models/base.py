"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Primary key for users and pages (string UUID, assigned at insert)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)
