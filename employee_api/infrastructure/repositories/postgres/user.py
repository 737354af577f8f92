"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar cuentas para signup (existencia) y login (username OR email).
  - Insertar cuentas con password ya hasheado.
  - Ejecutar SQL parametrizado contra la tabla `users` (contrato con migraciones).
  - Traducir violaciones de UNIQUE (uq_users_username / uq_users_email) a
    DuplicateRecordError; cualquier otro fallo a DatabaseError.

Collaborators:
  - psycopg_pool.ConnectionPool (vía infrastructure.db.pool.get_pool)
  - domain.entities.UserAccount
  - crosscutting.exceptions.DatabaseError / DuplicateRecordError
  - crosscutting.logger

Constraints / Notes:
  - Repositorio puro: NO hashea, NO normaliza (eso es del caso de uso).
  - Retorna None cuando no existe el recurso.
  - SQL parametrizado siempre (nunca interpolar input de usuario).
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.entities import UserAccount

# ============================================================
# Constantes y contratos de SQL
# ============================================================
# R: Lista explícita de columnas: si el esquema cambia, se ajusta en un solo lugar.
_USER_COLUMNS = (
    "id, first_name, last_name, username, email, password_hash, roles, "
    "created_at, updated_at"
)


def _get_pool() -> ConnectionPool:
    from ...db.pool import get_pool

    return get_pool()


# ============================================================
# Helpers internos: mapping + ejecución
# ============================================================
def _row_to_user(row: tuple) -> UserAccount:
    return UserAccount(
        id=row[0],
        first_name=row[1],
        last_name=row[2],
        username=row[3],
        email=row[4],
        password_hash=row[5],
        roles=list(row[6] or []),
        created_at=row[7],
        updated_at=row[8],
    )


def _fetchone(
    *,
    query: str,
    params: Iterable[object],
    log_msg: str,
    log_extra: dict[str, object],
    pool: ConnectionPool | None = None,
) -> tuple | None:
    """
    Ejecuta una sentencia y devuelve fetchone() con manejo consistente de errores.

    - UniqueViolation -> DuplicateRecordError (el caso de uso lo traduce a 400)
    - Cualquier otro fallo -> DatabaseError (500)
    """
    try:
        with (pool or _get_pool()).connection() as conn:
            return conn.execute(query, tuple(params)).fetchone()
    except pg_errors.UniqueViolation as exc:
        constraint = getattr(getattr(exc, "diag", None), "constraint_name", None)
        logger.warning(log_msg, extra={**log_extra, "constraint": constraint})
        raise DuplicateRecordError(
            f"{log_msg}: unique violation", constraint=constraint, original_error=exc
        ) from exc
    except Exception as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc


# ============================================================
# Repositorio
# ============================================================
class PostgresUserRepository:
    """
    Repositorio de cuentas sobre PostgreSQL.

    El pool es inyectable (tests); si es None se usa el global del proceso.
    """

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    def find_by_username_or_email(
        self, *, username: str, email: str
    ) -> Optional[UserAccount]:
        row = _fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s OR email = %s
                LIMIT 1
            """,
            params=(username, email),
            log_msg="PostgresUserRepository: find_by_username_or_email failed",
            log_extra={"username": username},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None

    def find_by_login(self, identifier: str) -> Optional[UserAccount]:
        # R: si el identificador matchea username de una cuenta y email de otra,
        #    gana el match por username.
        row = _fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s OR email = %s
                ORDER BY (username = %s) DESC
                LIMIT 1
            """,
            params=(identifier, identifier.lower(), identifier),
            log_msg="PostgresUserRepository: find_by_login failed",
            log_extra={"identifier": identifier},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None

    def get_user(self, user_id: UUID) -> Optional[UserAccount]:
        row = _fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            log_msg="PostgresUserRepository: get_user failed",
            log_extra={"user_id": str(user_id)},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None

    def create_user(self, user: UserAccount) -> UserAccount:
        row = _fetchone(
            query=f"""
                INSERT INTO users
                    (id, first_name, last_name, username, email, password_hash, roles)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                user.id,
                user.first_name,
                user.last_name,
                user.username,
                user.email,
                user.password_hash,
                list(user.roles),
            ),
            log_msg="PostgresUserRepository: create_user failed",
            log_extra={"user_id": str(user.id), "username": user.username},
            pool=self._pool,
        )
        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed (no row returned)"
            )
        return _row_to_user(row)
