"""Utility script to create a user and print an access token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from social_api.application.use_cases.users.create_user import create_user
from social_api.infrastructure.database import SessionLocal, initialize_database
from social_api.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the Social API and print a bearer token.",
    )
    parser.add_argument("username", help="Unique username, also shown in notifications")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument(
        "--full-name",
        default="",
        help="Full name displayed on the profile (optional)",
    )
    parser.add_argument(
        "--role",
        default="user",
        choices=("user", "admin"),
        help="Role assigned to the user (default: user)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            email=args.email,
            full_name=args.full_name,
            role=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}\n"
            f"  Token: {create_access_token(user.id)}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
