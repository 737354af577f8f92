"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create an admin account (idempotent: skips if username or email exists)
  - Hash passwords with Argon2
  - Store the account in PostgreSQL through the regular user repository

Usage:
  DATABASE_URL=postgresql://... python scripts/create_admin.py \
      --username admin --email admin@example.com
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys
from uuid import uuid4

from employee_api.domain.entities import PASSWORD_MIN_LENGTH, UserAccount
from employee_api.identity.passwords import hash_password
from employee_api.identity.users import UserRole
from employee_api.infrastructure.db.pool import close_pool, init_pool
from employee_api.infrastructure.repositories import PostgresUserRepository


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt(label: str) -> str:
    value = input(f"{label}: ").strip()
    if not value:
        raise SystemExit(f"{label} is required.")
    return value


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise SystemExit(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters."
        )
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create an admin account (idempotent)."
    )
    parser.add_argument("--username", help="Account username (4-20 chars)")
    parser.add_argument("--email", help="Account email (will be normalized)")
    parser.add_argument(
        "--password",
        help="Account password (omit to be prompted securely)",
    )
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[role.value for role in UserRole],
        help="Primary role (default: admin)",
    )
    return parser.parse_args(argv)


def create_account(
    repo: PostgresUserRepository,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str,
) -> UserAccount | None:
    """Crea la cuenta o devuelve None si ya existe (username o email)."""
    existing = repo.find_by_username_or_email(username=username, email=email)
    if existing is not None:
        print(
            "User already exists: "
            f"id={existing.id} username={existing.username} roles={existing.roles}"
        )
        return None

    created = repo.create_user(
        UserAccount(
            id=uuid4(),
            first_name=first_name,
            last_name=last_name,
            username=username,
            email=email,
            password_hash=hash_password(password),
            roles=[role],
        )
    )
    print(f"Created user: id={created.id} username={created.username} role={role}")
    return created


def main() -> None:
    args = _parse_args()
    db_url = _require_database_url()
    username = (args.username or _prompt("Username")).strip()
    email = (args.email or _prompt("Email")).strip().lower()
    password = args.password or _prompt_password()

    init_pool(db_url, min_size=1, max_size=1)
    try:
        create_account(
            PostgresUserRepository(),
            username=username,
            email=email,
            password=password,
            first_name=args.first_name,
            last_name=args.last_name,
            role=args.role,
        )
    finally:
        close_pool()


if __name__ == "__main__":
    main()
