"""Unit tests for devconsole.services.users: registration, authentication, admin CRUD."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from devconsole.models import Base, User
from devconsole.schemas.users import UserCreate, UserRegister, UserUpdate
from devconsole.services.activity import get_activity_logs
from devconsole.services.result import ErrorKind, Result
from devconsole.services.users import (
    assign_pages_to_user,
    authenticate,
    create_user,
    delete_user,
    get_all_users,
    get_user_by_id,
    get_user_by_phone,
    register_user,
    update_user,
    update_user_password,
    update_user_status,
)


def _session() -> Session:
    """Fresh in-memory database with the console schema."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False)()


def _register(db: Session, username: str = "alice", password: str = "x", **kwargs: object):
    defaults = {"name": username.title(), "phone": "123"}
    defaults.update(kwargs)
    return register_user(db, UserRegister(username=username, password=password, **defaults))


class TestRegisterUser(unittest.TestCase):
    """register_user always creates an active plain user with no pages."""

    def setUp(self) -> None:
        self.db = _session()

    def tearDown(self) -> None:
        self.db.close()

    def test_register_alice(self) -> None:
        result = _register(self.db, "alice", "x", name="Alice", phone="123")
        self.assertTrue(result)
        matches = [u for u in get_all_users(self.db).value if u.username == "alice"]
        self.assertEqual(len(matches), 1)
        alice = matches[0]
        self.assertEqual(alice.role, "user")
        self.assertTrue(alice.is_active)
        self.assertEqual(alice.assigned_pages, [])

    def test_register_logs_activity_for_new_user(self) -> None:
        user = _register(self.db).value
        latest = get_activity_logs(self.db, limit=1).value[0]
        self.assertEqual(latest.action, "register")
        self.assertEqual(latest.user_id, user.id)
        self.assertIn("Alice", latest.details)

    def test_password_is_hashed_in_store(self) -> None:
        user = _register(self.db, password="plain-secret").value
        row = self.db.query(User).filter(User.id == user.id).one()
        self.assertNotEqual(row.password_hash, "plain-secret")
        self.assertTrue(row.password_hash.startswith("$2"))

    def test_duplicate_username_is_conflict(self) -> None:
        self.assertTrue(_register(self.db, "alice"))
        result = _register(self.db, "alice")
        self.assertFalse(result)
        self.assertEqual(result.error, ErrorKind.CONFLICT)
        self.assertEqual(len(get_all_users(self.db).value), 1)

    def test_registration_succeeds_when_activity_write_fails(self) -> None:
        failed = Result.failure(ErrorKind.STORE_ERROR, "down")
        with patch("devconsole.services.users.log_activity", return_value=failed):
            result = _register(self.db)
        self.assertTrue(result)


class TestReadsStripPassword(unittest.TestCase):
    """No read result exposes a password or its hash."""

    def test_get_all_users_has_no_password_fields(self) -> None:
        db = _session()
        _register(db, "alice")
        _register(db, "bob")
        for user in get_all_users(db).value:
            dumped = user.model_dump()
            self.assertNotIn("password", dumped)
            self.assertNotIn("password_hash", dumped)
        db.close()


class TestAuthenticate(unittest.TestCase):
    """authenticate verifies bcrypt hashes and audits successful logins only."""

    def setUp(self) -> None:
        self.db = _session()
        self.user = _register(self.db, "alice", "correct-horse").value

    def tearDown(self) -> None:
        self.db.close()

    def test_wrong_password_fails_without_activity(self) -> None:
        before = len(get_activity_logs(self.db).value)
        result = authenticate(self.db, "alice", "wrong")
        self.assertFalse(result)
        self.assertIsNone(result.value)
        self.assertEqual(result.error, ErrorKind.INVALID_CREDENTIALS)
        self.assertEqual(len(get_activity_logs(self.db).value), before)

    def test_unknown_user_fails(self) -> None:
        result = authenticate(self.db, "mallory", "correct-horse")
        self.assertEqual(result.error, ErrorKind.INVALID_CREDENTIALS)

    def test_success_returns_user_and_logs_login(self) -> None:
        result = authenticate(self.db, "alice", "correct-horse", ip_address="10.0.0.5")
        self.assertTrue(result)
        self.assertEqual(result.value.id, self.user.id)
        self.assertNotIn("password_hash", result.value.model_dump())
        latest = get_activity_logs(self.db, limit=1).value[0]
        self.assertEqual(latest.action, "login")
        self.assertEqual(latest.user_id, self.user.id)
        self.assertEqual(latest.ip_address, "10.0.0.5")

    def test_last_login_strictly_increases(self) -> None:
        first = authenticate(self.db, "alice", "correct-horse").value.last_login
        second = authenticate(self.db, "alice", "correct-horse").value.last_login
        self.assertIsNotNone(first)
        self.assertGreater(second, first)

    def test_deactivated_account_is_refused_without_audit(self) -> None:
        update_user_status(self.db, self.user.id, False, "admin-1")
        before = get_user_by_id(self.db, self.user.id).value.last_login
        result = authenticate(self.db, "alice", "correct-horse")
        self.assertFalse(result)
        self.assertEqual(result.error, ErrorKind.INACTIVE)
        self.assertEqual(get_activity_logs(self.db, limit=1).value[0].action, "status_change")
        self.assertEqual(get_user_by_id(self.db, self.user.id).value.last_login, before)

    def test_deactivated_account_with_wrong_password_is_invalid_credentials(self) -> None:
        update_user_status(self.db, self.user.id, False, "admin-1")
        result = authenticate(self.db, "alice", "wrong")
        self.assertEqual(result.error, ErrorKind.INVALID_CREDENTIALS)

    def test_store_error_is_reported(self) -> None:
        session = MagicMock()
        session.query.side_effect = SQLAlchemyError("connection lost")
        result = authenticate(session, "alice", "correct-horse")
        self.assertEqual(result.error, ErrorKind.STORE_ERROR)
        session.rollback.assert_called_once()


class TestCreateUser(unittest.TestCase):
    """create_user honours the requested role and audits the acting user."""

    def test_creates_with_role_and_logs_actor(self) -> None:
        db = _session()
        result = create_user(
            db,
            UserCreate(username="dev", password="secret-pass", name="Dev", role="developer"),
            actor_id="admin-1",
        )
        self.assertTrue(result)
        self.assertEqual(result.value.role, "developer")
        latest = get_activity_logs(db, limit=1).value[0]
        self.assertEqual(latest.action, "user_create")
        self.assertEqual(latest.user_id, "admin-1")
        self.assertIn("developer", latest.details)
        db.close()

    def test_create_succeeds_when_activity_write_fails(self) -> None:
        db = _session()
        failed = Result.failure(ErrorKind.STORE_ERROR, "down")
        with patch("devconsole.services.users.log_activity", return_value=failed) as log:
            result = create_user(
                db,
                UserCreate(username="ops", password="secret-pass", name="Ops", role="admin"),
                actor_id="admin-1",
            )
        self.assertTrue(result)
        log.assert_called_once()
        self.assertEqual(get_user_by_id(db, result.value.id).value.role, "admin")
        db.close()


class TestUserMutations(unittest.TestCase):
    """Targeted updates keyed by id: audit on success, NOT_FOUND without audit."""

    def setUp(self) -> None:
        self.db = _session()
        self.user = _register(self.db, "alice", "old-password").value

    def tearDown(self) -> None:
        self.db.close()

    def _latest_action(self) -> str:
        return get_activity_logs(self.db, limit=1).value[0].action

    def test_update_user_writes_only_set_fields(self) -> None:
        result = update_user(self.db, self.user.id, UserUpdate(name="Alice B"), actor_id="admin-1")
        self.assertTrue(result)
        self.assertEqual(result.value.name, "Alice B")
        self.assertEqual(result.value.phone, "123")
        self.assertEqual(self._latest_action(), "user_update")

    def test_update_user_hashes_new_password(self) -> None:
        update_user(self.db, self.user.id, UserUpdate(password="new-password"), actor_id="admin-1")
        self.assertFalse(authenticate(self.db, "alice", "old-password"))
        self.assertTrue(authenticate(self.db, "alice", "new-password"))

    def test_update_user_missing_id(self) -> None:
        before = len(get_activity_logs(self.db).value)
        result = update_user(self.db, "nope", UserUpdate(name="X"), actor_id="admin-1")
        self.assertEqual(result.error, ErrorKind.NOT_FOUND)
        self.assertEqual(len(get_activity_logs(self.db).value), before)

    def test_update_password(self) -> None:
        self.assertTrue(update_user_password(self.db, self.user.id, "fresh-pass", "admin-1"))
        self.assertEqual(self._latest_action(), "password_change")
        self.assertTrue(authenticate(self.db, "alice", "fresh-pass"))

    def test_update_status(self) -> None:
        self.assertTrue(update_user_status(self.db, self.user.id, False, "admin-1"))
        self.assertFalse(get_user_by_id(self.db, self.user.id).value.is_active)
        latest = get_activity_logs(self.db, limit=1).value[0]
        self.assertEqual(latest.action, "status_change")
        self.assertIn("inactive", latest.details)

    def test_assign_pages_replaces_list(self) -> None:
        assign_pages_to_user(self.db, self.user.id, ["p1", "p2"], "admin-1")
        self.assertTrue(assign_pages_to_user(self.db, self.user.id, ["p3"], "admin-1"))
        self.assertEqual(get_user_by_id(self.db, self.user.id).value.assigned_pages, ["p3"])
        self.assertEqual(self._latest_action(), "page_assignment")

    def test_delete_then_delete_again(self) -> None:
        self.assertTrue(delete_user(self.db, self.user.id, "admin-1"))
        ids = [u.id for u in get_all_users(self.db).value]
        self.assertNotIn(self.user.id, ids)
        again = delete_user(self.db, self.user.id, "admin-1")
        self.assertFalse(again)
        self.assertEqual(again.error, ErrorKind.NOT_FOUND)

    def test_get_user_by_phone(self) -> None:
        self.assertEqual(get_user_by_phone(self.db, "123").value.id, self.user.id)
        self.assertEqual(get_user_by_phone(self.db, "999").error, ErrorKind.NOT_FOUND)

    def test_delete_store_error_does_not_log(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.delete.side_effect = SQLAlchemyError("x")
        with patch("devconsole.services.users.log_activity") as log:
            result = delete_user(session, "u1", "admin-1")
        self.assertEqual(result.error, ErrorKind.STORE_ERROR)
        log.assert_not_called()
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
