# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (development-only)
===============================================================================

Name:
    Dev Seed Admin

Qué es:
    Asegura que exista una cuenta con roles ["admin"] para desarrollo cuando
    DEV_SEED_ADMIN=true.

Seguridad:
    - Guard estricto: solo corre con app_env == "development".

Patrones:
    - Task orchestration (seed)
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (crea solo si falta)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Resolver credenciales del seed desde Settings
      - Crear la cuenta si no existe (username OR email)
    Collaborators:
      - UserRepository
      - password_hasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import UserAccount
from ..domain.repositories import UserRepository
from ..identity.users import UserRole


@dataclass(frozen=True, slots=True)
class _AdminSeedSpec:
    """Resolved seed configuration (no I/O)."""

    username: str
    email: str
    password: str


def _resolve_seed_spec(settings: Settings) -> _AdminSeedSpec:
    return _AdminSeedSpec(
        username=(settings.dev_seed_admin_username or "").strip(),
        email=(settings.dev_seed_admin_email or "").strip().lower(),
        password=settings.dev_seed_admin_password or "",
    )


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != "development":
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but APP_ENV is '{env}' "
            "(must be 'development'). Safety guard prevents accidental seeding."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> UserAccount | None:
    """
    Ensure a development admin account exists if configured.

    Behavior:
      - If disabled: no-op (returns None)
      - If enabled: create the account if missing, otherwise skip

    Safety:
      - Non-development environments fail fast.
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    spec = _resolve_seed_spec(settings)
    if not spec.username or not spec.email or not spec.password:
        raise ValueError(
            "Dev seed admin is enabled but username/email/password are empty"
        )

    existing = user_repo.find_by_username_or_email(
        username=spec.username, email=spec.email
    )
    if existing is not None:
        logger.info(
            "Dev seed admin: account exists; skipping",
            extra={"username": existing.username},
        )
        return existing

    created = user_repo.create_user(
        UserAccount(
            id=uuid4(),
            first_name="Dev",
            last_name="Admin",
            username=spec.username,
            email=spec.email,
            password_hash=password_hasher(spec.password),
            roles=[UserRole.ADMIN.value],
        )
    )
    logger.info(
        "Dev seed admin: account created",
        extra={"username": created.username, "user_id": str(created.id)},
    )
    return created
