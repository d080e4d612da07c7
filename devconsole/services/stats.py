"""Dashboard statistics: count-only aggregate queries over users, pages and logins."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devconsole.models import ActivityLog, Page, User
from devconsole.schemas.activity import DashboardStats
from devconsole.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)


def get_dashboard_stats(
    session: Session,
    window_days: int = 30,
    now: datetime | None = None,
) -> Result[DashboardStats]:
    """
    Count users, pages and recent traffic.

    Traffic counts `login` activities: daily over the last 24 hours, monthly over
    the last `window_days`. Recent registrations are users created in the same
    window. last_activity falls back to `now` when the log is empty.
    """
    now = now or datetime.now(UTC)
    day_ago = now - timedelta(days=1)
    window_start = now - timedelta(days=window_days)

    def logins_since(cutoff: datetime) -> int:
        return (
            session.query(func.count(ActivityLog.id))
            .filter(ActivityLog.action == "login", ActivityLog.timestamp >= cutoff)
            .scalar()
        )

    try:
        total_users = session.query(func.count(User.id)).scalar()
        active_users = (
            session.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar()
        )
        total_pages = session.query(func.count(Page.id)).scalar()
        active_pages = (
            session.query(func.count(Page.id)).filter(Page.is_active.is_(True)).scalar()
        )
        recent_registrations = (
            session.query(func.count(User.id))
            .filter(User.created_at >= window_start)
            .scalar()
        )
        daily_traffic = logins_since(day_ago)
        monthly_traffic = logins_since(window_start)
        last_activity = session.query(func.max(ActivityLog.timestamp)).scalar()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Fetching dashboard stats failed: %s", e)
        return Result.failure(ErrorKind.STORE_ERROR, "Could not fetch dashboard stats.")

    return Result.success(
        DashboardStats(
            total_users=total_users or 0,
            active_users=active_users or 0,
            total_pages=total_pages or 0,
            active_pages=active_pages or 0,
            daily_traffic=daily_traffic or 0,
            monthly_traffic=monthly_traffic or 0,
            recent_registrations=recent_registrations or 0,
            last_activity=last_activity or now,
        )
    )
