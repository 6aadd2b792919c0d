"""
Create a user (e.g. the first admin). Run from project root:
  python -m taskboard.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m taskboard.scripts.create_user boss@example.com boss your-secure-password admin
"""
import argparse
import logging
import sys

from taskboard.core.config import get_settings
from taskboard.core.database import build_engine, build_session_factory
from taskboard.core.errors import ServiceError
from taskboard.models import Base
from taskboard.models.user import ROLES, ROLE_EMPLOYEE
from taskboard.schemas.user import AddUserRequest
from taskboard.services.directory import build_user_directory
from taskboard.services.users import create_account


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Taskboard user through the normal account path.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("username", help="Display name (1-255 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_EMPLOYEE, choices=list(ROLES))
    args = parser.parse_args(argv)

    try:
        body = AddUserRequest(
            email=args.email, username=args.username, password=args.password, role=args.role
        )
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    engine = build_engine(settings)
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(engine)
    session_factory = build_session_factory(engine)
    directory = build_user_directory(settings, session_factory)
    db = session_factory()
    try:
        user = create_account(
            db,
            directory,
            username=body.username,
            email=body.email,
            password=body.password,
            role=body.role,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    print(f"Created user '{user.email}' with role '{user.role}' (uid {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
