"""
create_admin.py — Create (or re-key) a user and print a fresh API key.

The plain key is printed once and never stored; only its hash is saved.

Run from backend/:
    python scripts/create_admin.py ops@example.com
    python scripts/create_admin.py analyst@example.com --role user
    python scripts/create_admin.py ops@example.com --rotate
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.authorization import ROLE_ADMIN, ROLE_USER
from core.security import generate_api_key
from db.database import SessionLocal, init_db
from db.models import User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("create_admin")


def issue_key(session: Session, email: str, role: str = ROLE_ADMIN, rotate: bool = False) -> tuple[User, str]:
    """Create the user, or re-key an existing one when ``rotate`` is set.

    Raises:
        ValueError: the user exists and ``rotate`` is not set.
    """
    user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is not None and not rotate:
        raise ValueError(f"user {email} already exists; pass --rotate to issue a new key")

    key = generate_api_key()
    if user is None:
        user = User(email=email, role=role, sign_in_count=0)
        session.add(user)
    else:
        user.role = role
    user.api_key_hash = key.hashed
    session.commit()
    session.refresh(user)
    return user, key.plain


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create a user and print its API key.")
    parser.add_argument("email", help="Email address of the user")
    parser.add_argument(
        "--role",
        choices=[ROLE_ADMIN, ROLE_USER],
        default=ROLE_ADMIN,
        help="Role to grant (default: admin)",
    )
    parser.add_argument(
        "--rotate",
        action="store_true",
        help="Replace the key of an existing user instead of failing",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    init_db()
    session = SessionLocal()
    try:
        user, plain = issue_key(session, args.email, role=args.role, rotate=args.rotate)
    except ValueError as exc:
        log.error("%s", exc)
        sys.exit(1)
    finally:
        session.close()

    log.info("issued key for user id=%s email=%s role=%s", user.id, user.email, user.role)
    print(plain)


if __name__ == "__main__":
    main()
