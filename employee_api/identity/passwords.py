"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Responsabilidades:
    - Hashear passwords (Argon2) antes de construir el registro persistido.
    - Verificar password vs hash sin filtrar el motivo del fallo.

Colaboradores:
    - argon2.PasswordHasher
    - application/usecases/accounts (signup / login)
    - application/dev_seed_admin.py, scripts/create_admin.py

Notas:
    - El hashing es un paso explícito del caso de uso, no un hook del store.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2 (salt aleatorio por hash)."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado. Hash corrupto cuenta como mismatch."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
