"""Response schema for the developer dashboard snapshot."""

from pydantic import BaseModel

from devconsole.schemas.activity import ActivityLogOut, DashboardStats
from devconsole.schemas.pages import PageOut
from devconsole.schemas.users import UserOut


class SummaryCard(BaseModel):
    """One headline tile on the dashboard summary."""

    title: str
    value: int
    change: str


class ActivityFeedItem(BaseModel):
    activity: ActivityLogOut
    actor_name: str


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders after a full reload."""

    users: list[UserOut]
    pages: list[PageOut]
    activities: list[ActivityFeedItem]
    stats: DashboardStats | None = None
    cards: list[SummaryCard]
