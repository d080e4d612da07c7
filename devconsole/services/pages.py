"""Content page data access: CRUD over embeddable pages with audit side writes."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devconsole.models import Page
from devconsole.schemas.pages import (
    PAGE_SUB_TYPES,
    PageCreate,
    PageOut,
    PageUpdate,
    validate_sub_type,
)
from devconsole.services.activity import log_activity
from devconsole.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

# Optional page fields an update may clear by sending null.
NULLABLE_PAGE_FIELDS = frozenset({"sub_type", "embed_url", "html_content", "allowed_roles"})


def get_page_sub_types() -> dict[str, list[str]]:
    """Sub-types selectable for each page type."""
    return {page_type: list(sub_types) for page_type, sub_types in PAGE_SUB_TYPES.items()}


def _store_error(session: Session, what: str, e: Exception) -> Result[Any]:
    session.rollback()
    logger.exception("%s failed: %s", what, e)
    return Result.failure(ErrorKind.STORE_ERROR, f"{what} failed.")


def _page_not_found(page_id: str) -> Result[Any]:
    return Result.failure(ErrorKind.NOT_FOUND, f"Page {page_id} not found.")


def get_all_pages(session: Session) -> Result[list[PageOut]]:
    try:
        pages = session.query(Page).order_by(Page.created_at).all()
    except SQLAlchemyError as e:
        return _store_error(session, "Fetching pages", e)
    return Result.success([PageOut.model_validate(p) for p in pages])


def get_page_by_id(session: Session, page_id: str) -> Result[PageOut]:
    try:
        page = session.query(Page).filter(Page.id == page_id).first()
    except SQLAlchemyError as e:
        return _store_error(session, "Fetching page", e)
    if page is None:
        return _page_not_found(page_id)
    return Result.success(PageOut.model_validate(page))


def create_page(session: Session, data: PageCreate, actor_id: str) -> Result[PageOut]:
    """Insert a page owned by actor_id and return the stored row."""
    page = Page(**data.model_dump(), created_by=actor_id)
    try:
        session.add(page)
        session.commit()
        session.refresh(page)
    except SQLAlchemyError as e:
        return _store_error(session, "Creating page", e)
    out = PageOut.model_validate(page)
    log_activity(session, actor_id, "page_create", f"Created page: {out.title}")
    return Result.success(out)


def update_page(
    session: Session,
    page_id: str,
    updates: PageUpdate,
    actor_id: str,
) -> Result[PageOut]:
    """
    Apply the fields set on `updates` plus a fresh updated_at.

    The resulting type/sub_type pair must still be valid; otherwise nothing is
    written and the result is INVALID.
    """
    fields = {
        k: v
        for k, v in updates.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_PAGE_FIELDS
    }
    try:
        page = session.query(Page).filter(Page.id == page_id).first()
    except SQLAlchemyError as e:
        return _store_error(session, "Updating page", e)
    if page is None:
        return _page_not_found(page_id)

    try:
        validate_sub_type(
            fields.get("type", page.type),
            fields.get("sub_type", page.sub_type),
        )
    except ValueError as e:
        return Result.failure(ErrorKind.INVALID, str(e))

    fields["updated_at"] = datetime.now(UTC)
    try:
        for key, value in fields.items():
            setattr(page, key, value)
        session.commit()
        session.refresh(page)
    except SQLAlchemyError as e:
        return _store_error(session, "Updating page", e)
    out = PageOut.model_validate(page)
    log_activity(session, actor_id, "page_update", f"Updated page: {out.title}")
    return Result.success(out)


def delete_page(session: Session, page_id: str, actor_id: str) -> Result[None]:
    """Delete a page; the audit entry names it by the title read just before deletion."""
    existing = get_page_by_id(session, page_id)
    label = existing.value.title if existing.ok else page_id
    try:
        deleted = (
            session.query(Page)
            .filter(Page.id == page_id)
            .delete(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        return _store_error(session, "Deleting page", e)
    if deleted == 0:
        return _page_not_found(page_id)
    log_activity(session, actor_id, "page_delete", f"Deleted page: {label}")
    return Result.success()
