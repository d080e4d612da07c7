"""Content page endpoints. Reads need a session; writes need staff."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from devconsole.api.v1.auth import get_current_user, require_staff
from devconsole.api.v1.errors import unwrap
from devconsole.core.database import get_db
from devconsole.schemas.auth import CurrentUser
from devconsole.schemas.pages import PageCreate, PageOut, PagesListResponse, PageUpdate
from devconsole.services import pages as pages_service

router = APIRouter()


@router.get("", response_model=PagesListResponse)
def list_pages(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PagesListResponse:
    return PagesListResponse(pages=unwrap(pages_service.get_all_pages(db)))


@router.get("/sub-types")
def list_sub_types(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> dict[str, list[str]]:
    """Sub-types selectable for each page type."""
    return pages_service.get_page_sub_types()


@router.get("/{page_id}", response_model=PageOut)
def get_page(
    page_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PageOut:
    return unwrap(pages_service.get_page_by_id(db, page_id))


@router.post("", response_model=PageOut, status_code=status.HTTP_201_CREATED)
def create_page(
    body: PageCreate,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> PageOut:
    return unwrap(pages_service.create_page(db, body, actor_id=staff.id))


@router.patch("/{page_id}", response_model=PageOut)
def update_page(
    page_id: str,
    body: PageUpdate,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> PageOut:
    return unwrap(pages_service.update_page(db, page_id, body, actor_id=staff.id))


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(
    page_id: str,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    unwrap(pages_service.delete_page(db, page_id, actor_id=staff.id))
