"""Pydantic schemas for the activity log and dashboard statistics."""

from datetime import datetime

from pydantic import BaseModel, Field


class ActivityLogOut(BaseModel):
    """One audit trail entry."""

    id: int
    user_id: str
    action: str
    details: str
    timestamp: datetime
    ip_address: str | None = None

    class Config:
        from_attributes = True


class ActivityLogsResponse(BaseModel):
    """Response for GET /activity (newest first)."""

    activities: list[ActivityLogOut]


class DashboardStats(BaseModel):
    """Aggregate counts shown on the dashboard summary."""

    total_users: int = Field(default=0, ge=0)
    active_users: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    active_pages: int = Field(default=0, ge=0)
    daily_traffic: int = Field(default=0, ge=0, description="Logins in the last 24 hours")
    monthly_traffic: int = Field(
        default=0, ge=0, description="Logins within STATS_WINDOW_DAYS"
    )
    recent_registrations: int = Field(
        default=0, ge=0, description="Users created within STATS_WINDOW_DAYS"
    )
    last_activity: datetime
