"""ORM model for the append-only activity audit trail."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from devconsole.models.base import Base, utcnow


class ActivityLog(Base):
    """
    One audited action. Rows are only ever inserted.

    user_id is a user id or the literal 'system'; it is not a foreign key so the
    trail survives user deletion.
    """

    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False, index=True)
    action = Column(String(64), nullable=False, index=True)
    details = Column(Text, nullable=False, default="")
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    ip_address = Column(String(64), nullable=True)
