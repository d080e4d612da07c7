"""User management endpoints (staff only, except changing one's own password)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from devconsole.api.v1.auth import get_current_user, require_staff
from devconsole.api.v1.errors import unwrap
from devconsole.core.database import get_db
from devconsole.schemas.auth import CurrentUser
from devconsole.schemas.users import (
    STAFF_ROLES,
    PageAssignment,
    PasswordUpdate,
    StatusUpdate,
    UserCreate,
    UserOut,
    UsersListResponse,
    UserUpdate,
)
from devconsole.services import users as users_service

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users. Password hashes are never included."""
    return UsersListResponse(users=unwrap(users_service.get_all_users(db)))


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return unwrap(users_service.create_user(db, body, actor_id=staff.id))


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return unwrap(users_service.get_user_by_id(db, user_id))


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    body: UserUpdate,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return unwrap(users_service.update_user(db, user_id, body, actor_id=staff.id))


@router.put("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    user_id: str,
    body: PasswordUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """Staff may reset anyone's password; other users only their own."""
    if current_user.id != user_id and current_user.role not in STAFF_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot change another user's password",
        )
    unwrap(
        users_service.update_user_password(
            db, user_id, body.new_password, actor_id=current_user.id
        )
    )


@router.put("/{user_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def set_status(
    user_id: str,
    body: StatusUpdate,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    unwrap(users_service.update_user_status(db, user_id, body.is_active, actor_id=staff.id))


@router.put("/{user_id}/pages", status_code=status.HTTP_204_NO_CONTENT)
def assign_pages(
    user_id: str,
    body: PageAssignment,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    unwrap(
        users_service.assign_pages_to_user(db, user_id, body.page_ids, actor_id=staff.id)
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    unwrap(users_service.delete_user(db, user_id, actor_id=staff.id))
