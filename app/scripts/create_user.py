"""
Register a user from the command line. Run from project root:
  python -m app.scripts.create_user EMAIL NAME PASSWORD
Example:
  python -m app.scripts.create_user admin@example.com "Site Admin" your-secure-password

Same rules as POST /api/v1/auth/register: the first account ever created is admin.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import DuplicateCredentialError
from app.services.auth import AuthService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Register a Snapshelf user.")
    parser.add_argument("email", help="Email (stored exactly as given)")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    args = parser.parse_args(argv)

    email = args.email.strip()
    name = args.name.strip()
    if "@" not in email or len(email) > 255:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    auth = AuthService(get_settings())
    db = SessionLocal()
    try:
        user = auth.register(db, email=email, name=name, password=args.password)
    except DuplicateCredentialError as e:
        print(f"{e.message}: '{email}'.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
