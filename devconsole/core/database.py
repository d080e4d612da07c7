"""PostgreSQL connection and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import Session, sessionmaker

from devconsole.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Dependency for callers that open their own sessions (e.g. the dashboard controller)."""
    return SessionLocal


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


# Tables the console cannot serve requests without.
CONSOLE_TABLES = ("users", "pages", "activity_logs")


def missing_console_tables(db: Session) -> list[str]:
    """Return the console tables absent from the connected database (migrations not applied)."""
    inspector = inspect(db.get_bind())
    return [name for name in CONSOLE_TABLES if not inspector.has_table(name)]
