#!/usr/bin/env python3
"""Create a user account. Usage: python -m scripts.create_user <username> --password <pw> [--admin]"""
import argparse
import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ideaboard.database import SessionLocal, init_db
from ideaboard.errors import IdeaBoardError
from ideaboard.models.user import Role
from ideaboard.services.users import create_user


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a user")
    parser.add_argument("username")
    parser.add_argument("--password", required=True)
    parser.add_argument("--admin", action="store_true")
    args = parser.parse_args(argv)

    init_db()
    role = Role.ADMIN if args.admin else Role.USER
    with SessionLocal() as db:
        try:
            user = create_user(db, args.username, args.password, role=role)
        except IdeaBoardError as exc:
            print(exc.detail)
            return 1
    print(f"Created {user.role} user: {user.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
