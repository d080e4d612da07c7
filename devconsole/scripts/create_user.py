"""
Create a console user (e.g. the first developer). Run from project root:
  python -m devconsole.scripts.create_user USERNAME PASSWORD NAME [role]
Example:
  python -m devconsole.scripts.create_user dev your-secure-password "Dev Team" developer
"""
import argparse
import logging
import sys

from devconsole.core.database import SessionLocal
from devconsole.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from devconsole.schemas.users import UserCreate
from devconsole.services.activity import SYSTEM_ACTOR
from devconsole.services.result import ErrorKind
from devconsole.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a developer console user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument(
        "role", nargs="?", default="user", choices=["user", "admin", "developer"]
    )
    parser.add_argument("--phone", default=None)
    parser.add_argument("--email", default=None)
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    data = UserCreate(
        username=username,
        password=args.password,
        name=args.name,
        phone=args.phone,
        email=args.email,
        role=args.role,
    )
    db = SessionLocal()
    try:
        result = create_user(db, data, actor_id=SYSTEM_ACTOR)
    finally:
        db.close()

    if result.error is ErrorKind.CONFLICT:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    if not result.ok:
        logger.error("Creating user failed: %s", result.message)
        return 1
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
