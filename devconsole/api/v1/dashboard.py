"""Developer dashboard snapshot: one full reload through the dashboard controller."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, sessionmaker

from devconsole.api.v1.auth import require_staff
from devconsole.api.v1.errors import unwrap
from devconsole.core.config import get_settings
from devconsole.core.database import get_db, get_session_factory
from devconsole.schemas.auth import CurrentUser
from devconsole.schemas.dashboard import DashboardSnapshot
from devconsole.services import users as users_service
from devconsole.services.dashboard_controller import DashboardController

router = APIRouter()


@router.get("", response_model=DashboardSnapshot)
async def get_dashboard(
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> DashboardSnapshot:
    """
    Users, pages, the recent activity window and stats, fetched concurrently,
    plus the summary cards derived from them.
    """
    settings = get_settings()
    me = unwrap(users_service.get_user_by_id(db, staff.id))
    controller = DashboardController(
        session_factory,
        current_user=me,
        activity_limit=settings.DASHBOARD_ACTIVITY_LIMIT,
        stats_window_days=settings.STATS_WINDOW_DAYS,
    )
    state = await controller.load_data()
    return DashboardSnapshot(
        users=state.users,
        pages=state.pages,
        activities=controller.activity_feed(),
        stats=state.stats,
        cards=controller.summary_cards(),
    )
