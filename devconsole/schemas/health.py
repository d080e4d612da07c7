"""Pydantic schemas for the console health check."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database and schema readiness."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    schema_ready: bool | None = Field(
        default=None,
        description="Whether users, pages and activity_logs exist; None when the database is unreachable",
    )
    missing_tables: list[str] = Field(
        default_factory=list,
        description="Console tables not found (run `alembic upgrade head`)",
    )
