"""User data access: authentication, registration, admin CRUD and page assignment."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from devconsole.core.security import hash_password, verify_password
from devconsole.models import User
from devconsole.schemas.users import UserCreate, UserOut, UserRegister, UserUpdate
from devconsole.services.activity import log_activity
from devconsole.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

# Profile fields an update may clear by sending null.
NULLABLE_USER_FIELDS = frozenset({"phone", "email"})


def _store_error(session: Session, what: str, e: Exception) -> Result[Any]:
    session.rollback()
    logger.exception("%s failed: %s", what, e)
    return Result.failure(ErrorKind.STORE_ERROR, f"{what} failed.")


def _user_not_found(user_id: str) -> Result[Any]:
    return Result.failure(ErrorKind.NOT_FOUND, f"User {user_id} not found.")


def authenticate(
    session: Session,
    username: str,
    password: str,
    ip_address: str | None = None,
) -> Result[UserOut]:
    """
    Verify credentials; on success stamp last_login and record a `login` activity.

    Unknown usernames and wrong passwords are both INVALID_CREDENTIALS and leave
    no trace in the activity log. A deactivated account with the right password
    is INACTIVE; last_login is not touched and no `login` is recorded.
    """
    try:
        user = session.query(User).filter(User.username == username).first()
    except SQLAlchemyError as e:
        return _store_error(session, "Authentication", e)
    if user is None or not verify_password(password, user.password_hash):
        return Result.failure(
            ErrorKind.INVALID_CREDENTIALS, "Invalid username or password."
        )
    if not user.is_active:
        logger.info("Login refused for deactivated user %s", user.id)
        return Result.failure(ErrorKind.INACTIVE, "Account is deactivated.")

    try:
        user.last_login = datetime.now(UTC)
        session.commit()
        session.refresh(user)
    except SQLAlchemyError as e:
        return _store_error(session, "Authentication", e)

    out = UserOut.model_validate(user)
    log_activity(session, out.id, "login", f"{out.name} logged in", ip_address=ip_address)
    return Result.success(out)


def _insert_user(session: Session, fields: dict[str, Any], what: str) -> Result[UserOut]:
    password = fields.pop("password")
    user = User(**fields, password_hash=hash_password(password))
    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except IntegrityError:
        session.rollback()
        logger.info("%s rejected: username %r already exists", what, fields["username"])
        return Result.failure(
            ErrorKind.CONFLICT, f"Username {fields['username']!r} is already taken."
        )
    except SQLAlchemyError as e:
        return _store_error(session, what, e)
    return Result.success(UserOut.model_validate(user))


def register_user(session: Session, data: UserRegister) -> Result[UserOut]:
    """Self-registration: always a plain active `user` with no pages assigned."""
    fields = data.model_dump()
    fields.update(role="user", assigned_pages=[], is_active=True)
    result = _insert_user(session, fields, "Registration")
    if result.ok:
        user = result.value
        log_activity(session, user.id, "register", f"New user {user.name} registered")
    return result


def create_user(session: Session, data: UserCreate, actor_id: str) -> Result[UserOut]:
    """Privileged create with caller-chosen role; audited as `user_create` by actor_id."""
    result = _insert_user(session, data.model_dump(), "Creating user")
    if result.ok:
        user = result.value
        log_activity(
            session,
            actor_id,
            "user_create",
            f"New user {user.name} created with role {user.role}",
        )
    return result


def _update_user_fields(
    session: Session,
    user_id: str,
    fields: dict[str, Any],
    what: str,
) -> Result[None]:
    try:
        updated = (
            session.query(User)
            .filter(User.id == user_id)
            .update(fields, synchronize_session=False)
        )
        session.commit()
    except IntegrityError:
        session.rollback()
        return Result.failure(ErrorKind.CONFLICT, f"{what} conflicts with an existing user.")
    except SQLAlchemyError as e:
        return _store_error(session, what, e)
    if updated == 0:
        return _user_not_found(user_id)
    return Result.success()


def update_user(
    session: Session,
    user_id: str,
    updates: UserUpdate,
    actor_id: str,
) -> Result[UserOut]:
    """Write only the fields set on `updates`; a new password is hashed first."""
    fields = {
        k: v
        for k, v in updates.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_USER_FIELDS
    }
    if "password" in fields:
        fields["password_hash"] = hash_password(fields.pop("password"))
    if not fields:
        return get_user_by_id(session, user_id)

    result = _update_user_fields(session, user_id, fields, "Updating user")
    if not result.ok:
        return result
    log_activity(session, actor_id, "user_update", f"User data updated for user ID {user_id}")
    return get_user_by_id(session, user_id)


def update_user_password(
    session: Session,
    user_id: str,
    new_password: str,
    actor_id: str,
) -> Result[None]:
    result = _update_user_fields(
        session,
        user_id,
        {"password_hash": hash_password(new_password)},
        "Updating password",
    )
    if result.ok:
        log_activity(session, actor_id, "password_change", f"Password changed for user ID {user_id}")
    return result


def update_user_status(
    session: Session,
    user_id: str,
    is_active: bool,
    actor_id: str,
) -> Result[None]:
    result = _update_user_fields(
        session, user_id, {"is_active": is_active}, "Updating user status"
    )
    if result.ok:
        state = "active" if is_active else "inactive"
        log_activity(
            session,
            actor_id,
            "status_change",
            f"User {user_id} status changed to {state}",
        )
    return result


def assign_pages_to_user(
    session: Session,
    user_id: str,
    page_ids: list[str],
    actor_id: str,
) -> Result[None]:
    """Replace the user's assigned page list."""
    result = _update_user_fields(
        session, user_id, {"assigned_pages": list(page_ids)}, "Assigning pages"
    )
    if result.ok:
        log_activity(
            session,
            actor_id,
            "page_assignment",
            f"Pages assigned to user ID {user_id}: {', '.join(page_ids)}",
        )
    return result


def delete_user(session: Session, user_id: str, actor_id: str) -> Result[None]:
    """Delete by id. Deleting a missing user is NOT_FOUND, not an error."""
    try:
        deleted = (
            session.query(User)
            .filter(User.id == user_id)
            .delete(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        return _store_error(session, "Deleting user", e)
    if deleted == 0:
        return _user_not_found(user_id)
    log_activity(session, actor_id, "user_delete", f"User ID {user_id} deleted")
    return Result.success()


def get_all_users(session: Session) -> Result[list[UserOut]]:
    try:
        users = session.query(User).order_by(User.created_at).all()
    except SQLAlchemyError as e:
        return _store_error(session, "Fetching users", e)
    return Result.success([UserOut.model_validate(u) for u in users])


def get_user_by_id(session: Session, user_id: str) -> Result[UserOut]:
    try:
        user = session.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        return _store_error(session, "Fetching user", e)
    if user is None:
        return _user_not_found(user_id)
    return Result.success(UserOut.model_validate(user))


def get_user_by_phone(session: Session, phone: str) -> Result[UserOut]:
    """Look a user up by phone number (used by account recovery flows)."""
    try:
        user = session.query(User).filter(User.phone == phone).first()
    except SQLAlchemyError as e:
        return _store_error(session, "Fetching user by phone", e)
    if user is None:
        return Result.failure(ErrorKind.NOT_FOUND, "No user with that phone number.")
    return Result.success(UserOut.model_validate(user))
