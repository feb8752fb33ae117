"""
Create a user account from the command line. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user "Ada Lovelace" ada@example.com your-secure-password
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
)
from app.models import User
from app.services.auth import normalize_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a SynergySphere user account.")
    parser.add_argument("name", help=f"Display name ({NAME_MIN_LEN}-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = normalize_email(args.email)
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(name=name, email=email, password_hash=hash_password(args.password))
        db.add(user)
        db.commit()
        print(f"Created user '{email}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
