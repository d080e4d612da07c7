"""Unit tests for the activity log and dashboard statistics."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from devconsole.models import ActivityLog, Base, Page, User
from devconsole.services.activity import (
    LOCAL_ORIGIN,
    SYSTEM_ACTOR,
    get_activity_logs,
    log_activity,
)
from devconsole.services.result import ErrorKind
from devconsole.services.stats import get_dashboard_stats
from devconsole.services.users import get_all_users


def _session() -> Session:
    """Fresh in-memory database with the console schema."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False)()


def _user(username: str, is_active: bool = True, **kwargs: object) -> User:
    return User(
        username=username,
        password_hash="$2b$12$notarealhash",
        name=username.title(),
        is_active=is_active,
        **kwargs,
    )


class TestLogActivity(unittest.TestCase):
    """log_activity appends rows and never raises."""

    def test_appends_entry(self) -> None:
        db = _session()
        self.assertTrue(log_activity(db, SYSTEM_ACTOR, "maintenance", "Nightly check"))
        entry = get_activity_logs(db).value[0]
        self.assertEqual(entry.user_id, "system")
        self.assertEqual(entry.action, "maintenance")
        self.assertEqual(entry.ip_address, LOCAL_ORIGIN)
        db.close()

    def test_write_failure_is_swallowed(self) -> None:
        session = MagicMock()
        session.commit.side_effect = SQLAlchemyError("disk full")
        result = log_activity(session, "u1", "login", "Alice logged in")
        self.assertFalse(result)
        self.assertEqual(result.error, ErrorKind.STORE_ERROR)
        session.rollback.assert_called_once()


class TestGetActivityLogs(unittest.TestCase):
    """Reads are newest first and capped."""

    def setUp(self) -> None:
        self.db = _session()
        base = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
        for i in range(5):
            self.db.add(
                ActivityLog(
                    user_id="u1",
                    action=f"action_{i}",
                    details="",
                    timestamp=base + timedelta(minutes=i),
                )
            )
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def test_newest_first_with_limit(self) -> None:
        logs = get_activity_logs(self.db, limit=3).value
        self.assertEqual([l.action for l in logs], ["action_4", "action_3", "action_2"])

    def test_equal_timestamps_fall_back_to_insertion_order(self) -> None:
        stamp = datetime(2025, 3, 2, tzinfo=UTC)
        self.db.add(ActivityLog(user_id="u1", action="first", details="", timestamp=stamp))
        self.db.commit()
        self.db.add(ActivityLog(user_id="u1", action="second", details="", timestamp=stamp))
        self.db.commit()
        self.assertEqual(get_activity_logs(self.db, limit=1).value[0].action, "second")

    def test_store_error(self) -> None:
        session = MagicMock()
        session.query.side_effect = SQLAlchemyError("down")
        self.assertEqual(get_activity_logs(session).error, ErrorKind.STORE_ERROR)


class TestDashboardStats(unittest.TestCase):
    """Counts match the stored rows; traffic counts recent logins."""

    def setUp(self) -> None:
        self.db = _session()
        self.now = datetime.now(UTC)
        self.db.add_all(
            [
                _user("alice"),
                _user("bob", is_active=False),
                _user("carol", created_at=self.now - timedelta(days=90)),
                Page(title="A", type="powerbi", content="", created_by="u1"),
                Page(title="B", type="html", content="", created_by="u1", is_active=False),
                ActivityLog(user_id="u1", action="login", details="", timestamp=self.now - timedelta(hours=2)),
                ActivityLog(user_id="u1", action="login", details="", timestamp=self.now - timedelta(days=3)),
                ActivityLog(user_id="u1", action="login", details="", timestamp=self.now - timedelta(days=60)),
                ActivityLog(user_id="u1", action="page_create", details="", timestamp=self.now - timedelta(hours=1)),
            ]
        )
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def test_counts(self) -> None:
        stats = get_dashboard_stats(self.db, window_days=30, now=self.now).value
        self.assertEqual(stats.total_users, 3)
        self.assertEqual(stats.active_users, 2)
        self.assertEqual(stats.total_pages, 2)
        self.assertEqual(stats.active_pages, 1)

    def test_total_users_matches_user_list(self) -> None:
        stats = get_dashboard_stats(self.db).value
        self.assertEqual(stats.total_users, len(get_all_users(self.db).value))

    def test_traffic_and_registrations(self) -> None:
        stats = get_dashboard_stats(self.db, window_days=30, now=self.now).value
        self.assertEqual(stats.daily_traffic, 1)
        self.assertEqual(stats.monthly_traffic, 2)
        self.assertEqual(stats.recent_registrations, 2)

    def test_empty_log_uses_now_for_last_activity(self) -> None:
        db = _session()
        now = datetime(2025, 3, 1, tzinfo=UTC)
        stats = get_dashboard_stats(db, now=now).value
        self.assertEqual(stats.last_activity, now)
        self.assertEqual(stats.total_users, 0)
        db.close()

    def test_store_error(self) -> None:
        session = MagicMock()
        session.query.side_effect = SQLAlchemyError("down")
        result = get_dashboard_stats(session)
        self.assertEqual(result.error, ErrorKind.STORE_ERROR)
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
