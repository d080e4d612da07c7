"""Activity audit trail: best-effort append and newest-first reads."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devconsole.models import ActivityLog
from devconsole.schemas.activity import ActivityLogOut
from devconsole.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

# Actor recorded for actions not taken by a signed-in user.
SYSTEM_ACTOR = "system"

# Origin recorded when the caller has no client address (scripts, background work).
LOCAL_ORIGIN = "127.0.0.1"


def log_activity(
    session: Session,
    user_id: str,
    action: str,
    details: str,
    ip_address: str | None = None,
) -> Result[None]:
    """
    Append one audit entry and commit it. Without an ip_address the entry is
    stamped with LOCAL_ORIGIN.

    Never raises: a failed write is rolled back, logged, and reported as
    STORE_ERROR so the caller's own mutation is not affected.
    """
    try:
        session.add(
            ActivityLog(
                user_id=user_id,
                action=action,
                details=details,
                ip_address=ip_address or LOCAL_ORIGIN,
            )
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(
            "Activity log write failed: action=%s user_id=%s error=%s",
            action,
            user_id,
            e,
        )
        return Result.failure(ErrorKind.STORE_ERROR, "Could not record activity.")
    return Result.success()


def get_activity_logs(session: Session, limit: int = 50) -> Result[list[ActivityLogOut]]:
    """Return at most `limit` entries, newest first."""
    try:
        rows = (
            session.query(ActivityLog)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Fetching activity logs failed: %s", e)
        return Result.failure(ErrorKind.STORE_ERROR, "Could not fetch activity logs.")
    return Result.success([ActivityLogOut.model_validate(r) for r in rows])
