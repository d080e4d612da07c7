"""
Developer dashboard controller: view state plus the actions that drive it.

Every mutation goes through the data-access layer as the signed-in user and is
followed by a full reload; the snapshot is never patched in place.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from devconsole.schemas.activity import ActivityLogOut, DashboardStats
from devconsole.schemas.dashboard import ActivityFeedItem, SummaryCard
from devconsole.schemas.pages import PageCreate, PageOut, PageUpdate
from devconsole.schemas.users import UserCreate, UserOut
from devconsole.services import activity, pages, stats, users
from devconsole.services.result import Result

logger = logging.getLogger(__name__)

DELETE_USER_PROMPT = "Are you sure you want to delete this user?"
DELETE_PAGE_PROMPT = "Are you sure you want to delete this page?"


class DeveloperView(str, Enum):
    DASHBOARD = "dashboard"
    USERS = "users"
    PAGES = "pages"
    EDITOR = "editor"
    USER_DETAIL = "user-detail"
    PAGE_DETAIL = "page-detail"
    PAGE_VIEW = "page-view"
    PAGE_EDIT = "page-edit"
    USER_PAGES = "user-pages"
    USER_PAGE_VIEW = "user-page-view"
    USER_PAGE_EDIT = "user-page-edit"


@dataclass(frozen=True)
class ViewState:
    """Read-only copy of what the dashboard renders."""

    current_view: DeveloperView = DeveloperView.DASHBOARD
    is_loading: bool = True
    users: list[UserOut] = field(default_factory=list)
    pages: list[PageOut] = field(default_factory=list)
    activities: list[ActivityLogOut] = field(default_factory=list)
    stats: DashboardStats | None = None
    selected_user: UserOut | None = None
    selected_page: PageOut | None = None
    viewing_page: PageOut | None = None
    editing_page: PageOut | None = None
    viewing_user_page: tuple[UserOut, PageOut] | None = None
    editing_user_page: tuple[UserOut, PageOut] | None = None


def _deny(message: str) -> bool:
    return False


class DashboardController:
    """
    Mediates between dashboard actions and the data-access layer.

    session_factory opens one short-lived session per data-access call so the
    reload's four reads can run concurrently. confirm is asked before any
    delete; the default refuses.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        current_user: UserOut,
        confirm: Callable[[str], bool] = _deny,
        activity_limit: int = 20,
        stats_window_days: int = 30,
    ) -> None:
        self.session_factory = session_factory
        self.current_user = current_user
        self.confirm = confirm
        self.activity_limit = activity_limit
        self.stats_window_days = stats_window_days
        self.state = ViewState()

    def _run(self, fn: Callable[..., Result[Any]], *args: Any) -> Result[Any]:
        session: Session = self.session_factory()
        try:
            return fn(session, *args)
        finally:
            session.close()

    async def _call(self, fn: Callable[..., Result[Any]], *args: Any) -> Result[Any]:
        return await asyncio.to_thread(self._run, fn, *args)

    async def load_data(self) -> ViewState:
        """Re-fetch users, pages, recent activity and stats together, then swap the snapshot."""
        self.state = replace(self.state, is_loading=True)
        users_result, pages_result, activity_result, stats_result = await asyncio.gather(
            self._call(users.get_all_users),
            self._call(pages.get_all_pages),
            self._call(activity.get_activity_logs, self.activity_limit),
            self._call(stats.get_dashboard_stats, self.stats_window_days),
        )
        for name, result in (
            ("users", users_result),
            ("pages", pages_result),
            ("activity", activity_result),
            ("stats", stats_result),
        ):
            if not result.ok:
                logger.warning("Dashboard reload: %s unavailable (%s)", name, result.error.value)
        self.state = replace(
            self.state,
            is_loading=False,
            users=users_result.value or [],
            pages=pages_result.value or [],
            activities=activity_result.value or [],
            stats=stats_result.value,
        )
        return self.state

    # Navigation: pure state writes.

    def navigate(self, view: DeveloperView) -> None:
        self.state = replace(self.state, current_view=view)

    def view_page_content(self, page: PageOut) -> None:
        self.state = replace(self.state, viewing_page=page, current_view=DeveloperView.PAGE_VIEW)

    def edit_page_content(self, page: PageOut) -> None:
        self.state = replace(self.state, editing_page=page, current_view=DeveloperView.PAGE_EDIT)

    def view_user_page(self, user: UserOut, page: PageOut) -> None:
        self.state = replace(
            self.state,
            viewing_user_page=(user, page),
            current_view=DeveloperView.USER_PAGE_VIEW,
        )

    def edit_user_page(self, user: UserOut, page: PageOut) -> None:
        self.state = replace(
            self.state,
            editing_user_page=(user, page),
            current_view=DeveloperView.USER_PAGE_EDIT,
        )

    async def view_user(self, user_id: str) -> None:
        result = await self._call(users.get_user_by_id, user_id)
        self.state = replace(
            self.state, selected_user=result.value, current_view=DeveloperView.USER_DETAIL
        )

    async def view_page(self, page_id: str) -> None:
        result = await self._call(pages.get_page_by_id, page_id)
        self.state = replace(
            self.state, selected_page=result.value, current_view=DeveloperView.PAGE_DETAIL
        )

    # Mutations: data-access call, then full reload.

    async def toggle_user_status(self, user_id: str, current_status: bool) -> Result[None]:
        result = await self._call(
            users.update_user_status, user_id, not current_status, self.current_user.id
        )
        await self.load_data()
        return result

    async def delete_user(self, user_id: str) -> Result[None] | None:
        """Returns None when the confirmation was declined."""
        if not self.confirm(DELETE_USER_PROMPT):
            return None
        result = await self._call(users.delete_user, user_id, self.current_user.id)
        await self.load_data()
        return result

    async def delete_page(self, page_id: str) -> Result[None] | None:
        """Returns None when the confirmation was declined."""
        if not self.confirm(DELETE_PAGE_PROMPT):
            return None
        result = await self._call(pages.delete_page, page_id, self.current_user.id)
        await self.load_data()
        return result

    async def create_user(self, data: UserCreate) -> Result[UserOut]:
        result = await self._call(users.create_user, data, self.current_user.id)
        await self.load_data()
        return result

    async def assign_pages(self, user_id: str, page_ids: list[str]) -> Result[None]:
        result = await self._call(
            users.assign_pages_to_user, user_id, page_ids, self.current_user.id
        )
        await self.load_data()
        return result

    async def create_page(self, data: PageCreate) -> Result[PageOut]:
        result = await self._call(pages.create_page, data, self.current_user.id)
        await self.load_data()
        return result

    async def update_page(self, page_id: str, updates: PageUpdate) -> Result[PageOut]:
        result = await self._call(pages.update_page, page_id, updates, self.current_user.id)
        await self.load_data()
        return result

    # Derived figures. These only see the fetched activity window
    # (activity_limit entries), not lifetime totals.

    def code_commits(self) -> int:
        return sum(
            1 for a in self.state.activities if "edit" in a.action or "create" in a.action
        )

    def live_edits(self) -> int:
        return sum(1 for a in self.state.activities if a.action == "page_edit")

    def summary_cards(self) -> list[SummaryCard]:
        s = self.state.stats
        return [
            SummaryCard(
                title="Total Users",
                value=s.total_users if s else 0,
                change=f"+{s.recent_registrations if s else 0} this month",
            ),
            SummaryCard(
                title="Active Pages",
                value=s.total_pages if s else 0,
                change=f"{s.active_pages if s else 0} active",
            ),
            SummaryCard(title="Code Commits", value=self.code_commits(), change="Auto-saved"),
            SummaryCard(title="Live Edits", value=self.live_edits(), change="Real-time"),
        ]

    def activity_feed(self) -> list[ActivityFeedItem]:
        names = {u.id: u.name for u in self.state.users}
        return [
            ActivityFeedItem(activity=a, actor_name=names.get(a.user_id, "System"))
            for a in self.state.activities
        ]

    def assigned_pages_for(self, user: UserOut) -> list[PageOut]:
        assigned = set(user.assigned_pages)
        return [p for p in self.state.pages if p.id in assigned]
