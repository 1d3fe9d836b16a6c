"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin

Registration over HTTP always creates role 'user'; this is the only way to create an admin.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.models.user import USER_ROLES
from app.services.auth import AuthService
from app.services.errors import DuplicateError, ValidationError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Bookshelf user.")
    parser.add_argument("username", help="Username (unique)")
    parser.add_argument("email", help="Email used to log in (unique)")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=USER_ROLES)
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        service = AuthService(
            db,
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
        try:
            user = service.register(args.username, args.email, args.password, role=args.role)
        except (ValidationError, DuplicateError) as e:
            print(f"Could not create user: {e.message}", file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' <{user.email}> with role '{user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
