"""Activity log and dashboard statistics endpoints (staff only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from devconsole.api.v1.auth import require_staff
from devconsole.api.v1.errors import unwrap
from devconsole.core.config import get_settings
from devconsole.core.database import get_db
from devconsole.schemas.activity import ActivityLogsResponse, DashboardStats
from devconsole.schemas.auth import CurrentUser
from devconsole.services import activity as activity_service
from devconsole.services import stats as stats_service

router = APIRouter()


@router.get("/activity", response_model=ActivityLogsResponse)
def list_activity(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> ActivityLogsResponse:
    """Most recent activity first; limit defaults to ACTIVITY_LOG_DEFAULT_LIMIT."""
    limit = limit or get_settings().ACTIVITY_LOG_DEFAULT_LIMIT
    return ActivityLogsResponse(
        activities=unwrap(activity_service.get_activity_logs(db, limit=limit))
    )


@router.get("/stats", response_model=DashboardStats)
def read_stats(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardStats:
    return unwrap(
        stats_service.get_dashboard_stats(
            db, window_days=get_settings().STATS_WINDOW_DAYS
        )
    )
