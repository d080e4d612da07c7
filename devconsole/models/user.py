"""ORM model for console users (auth and RBAC)."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String, func

from devconsole.models.base import Base, new_id, utcnow


class User(Base):
    """
    Console account.

    role: 'user', 'admin' or 'developer'
    assigned_pages: ids of pages the user may open
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=True, index=True)
    email = Column(String(320), nullable=True)
    role = Column(String(32), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    assigned_pages = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    last_login = Column(DateTime(timezone=True), nullable=True)
