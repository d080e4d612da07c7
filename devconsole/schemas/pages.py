"""Pydantic schemas for content pages, including per-type sub-type validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from devconsole.schemas.users import Role

PageType = Literal["powerbi", "spreadsheet", "html"]

# Sub-types a page of each type may declare.
PAGE_SUB_TYPES: dict[str, tuple[str, ...]] = {
    "powerbi": ("dashboard", "report", "analytics"),
    "spreadsheet": ("report", "analytics", "data-entry"),
    "html": ("custom", "widget", "form", "landing"),
}


def validate_sub_type(page_type: str, sub_type: str | None) -> None:
    """Raise ValueError when sub_type is not allowed for page_type."""
    if sub_type is None:
        return
    allowed = PAGE_SUB_TYPES.get(page_type, ())
    if sub_type not in allowed:
        raise ValueError(
            f"sub_type {sub_type!r} is not valid for {page_type!r} pages; expected one of {list(allowed)}"
        )


class PageOut(BaseModel):
    """Page as stored."""

    id: str
    title: str
    type: PageType
    sub_type: str | None = None
    content: str = ""
    embed_url: str | None = None
    html_content: str | None = None
    created_by: str
    is_active: bool
    allowed_roles: list[Role] | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PageCreate(BaseModel):
    """New page. The owner is the acting user, not part of the payload."""

    title: str = Field(..., min_length=1, max_length=255)
    type: PageType
    sub_type: str | None = None
    content: str = ""
    embed_url: str | None = Field(default=None, max_length=2048)
    html_content: str | None = None
    is_active: bool = True
    allowed_roles: list[Role] | None = None

    @model_validator(mode="after")
    def check_sub_type(self) -> "PageCreate":
        validate_sub_type(self.type, self.sub_type)
        return self


class PageUpdate(BaseModel):
    """Partial page update; only fields that are set are written."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    type: PageType | None = None
    sub_type: str | None = None
    content: str | None = None
    embed_url: str | None = Field(default=None, max_length=2048)
    html_content: str | None = None
    is_active: bool | None = None
    allowed_roles: list[Role] | None = None


class PagesListResponse(BaseModel):
    """Response for GET /pages."""

    pages: list[PageOut]
