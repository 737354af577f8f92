"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar cuentas en memoria (tests / APP_ENV=test).
  - Replicar el contrato de unicidad del store real: username y email únicos,
    verificados bajo lock en el momento de escribir.
  - Replicar la búsqueda de login (username OR email en minúsculas).

Collaborators:
  - domain.entities.UserAccount
  - crosscutting.exceptions.DuplicateRecordError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: el caller nunca comparte instancias con el store.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....crosscutting.exceptions import DuplicateRecordError
from ....domain.entities import UserAccount


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para cuentas de usuario."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, UserAccount] = {}

    @staticmethod
    def _copy(user: UserAccount) -> UserAccount:
        return replace(user, roles=list(user.roles))

    def find_by_username_or_email(
        self, *, username: str, email: str
    ) -> Optional[UserAccount]:
        with self._lock:
            for user in self._users.values():
                if user.username == username or user.email == email:
                    return self._copy(user)
        return None

    def find_by_login(self, identifier: str) -> Optional[UserAccount]:
        lowered = identifier.lower()
        with self._lock:
            by_email = None
            for user in self._users.values():
                if user.username == identifier:
                    return self._copy(user)
                if by_email is None and user.email == lowered:
                    by_email = user
            return self._copy(by_email) if by_email else None

    def get_user(self, user_id: UUID) -> Optional[UserAccount]:
        with self._lock:
            user = self._users.get(user_id)
            return self._copy(user) if user else None

    def create_user(self, user: UserAccount) -> UserAccount:
        now = datetime.now(timezone.utc)
        with self._lock:
            for existing in self._users.values():
                if existing.username == user.username:
                    raise DuplicateRecordError(
                        "username already taken", constraint="uq_users_username"
                    )
                if existing.email == user.email:
                    raise DuplicateRecordError(
                        "email already taken", constraint="uq_users_email"
                    )
            stored = replace(
                user,
                roles=list(user.roles),
                created_at=user.created_at or now,
                updated_at=user.updated_at or now,
            )
            self._users[stored.id] = stored
            return self._copy(stored)
