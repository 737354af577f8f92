"""
===============================================================================
USE CASE: Signup (Create Account + Issue Token)
===============================================================================

Business Goal:
    Registrar una cuenta nueva y devolver un token listo para usar.

Flujo:
    1) Existencia combinada (username OR email) -> DUPLICATE temprano.
    2) Hash explícito del password ANTES de construir el registro.
    3) Persistir; si el store rechaza por UNIQUE (carrera) -> DUPLICATE.
    4) Emitir token (sub = id, roles) y devolver perfil público.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    SignupUseCase

Collaborators:
    - UserRepository: find_by_username_or_email, create_user
    - TokenService: issue
    - password_hasher: Callable[[str], str] (default: argon2 hash_password)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.entities import DEFAULT_ROLE, UserAccount
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password
from ....identity.tokens import TokenService
from .account_results import AccountError, AccountErrorCode, AuthResult, PublicProfile

_MSG_USER_EXISTS: Final[str] = "User already exists"


@dataclass
class SignupInput:
    """Input ya validado por el schema HTTP (trim, longitudes, email)."""

    first_name: str
    last_name: str
    username: str
    email: str
    password: str


class SignupUseCase:
    """Use Case (Command): alta de cuenta + emisión de token."""

    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._users = user_repository
        self._tokens = token_service
        self._hash = password_hasher

    def execute(self, input_data: SignupInput) -> AuthResult:
        email = input_data.email.strip().lower()
        username = input_data.username.strip()

        # R: early-exit; la garantía real es el UNIQUE del store.
        existing = self._users.find_by_username_or_email(
            username=username, email=email
        )
        if existing is not None:
            return self._duplicate()

        user = UserAccount(
            id=uuid4(),
            first_name=input_data.first_name,
            last_name=input_data.last_name,
            username=username,
            email=email,
            password_hash=self._hash(input_data.password),
            roles=[DEFAULT_ROLE],
        )

        try:
            created = self._users.create_user(user)
        except DuplicateRecordError as exc:
            logger.info(
                "Signup: unique constraint hit after existence check",
                extra={"constraint": exc.constraint},
            )
            return self._duplicate()

        token = self._tokens.issue(str(created.id), created.roles)
        logger.info("Signup: account created", extra={"user_id": str(created.id)})
        return AuthResult(token=token, user=PublicProfile.from_account(created))

    @staticmethod
    def _duplicate() -> AuthResult:
        return AuthResult(
            error=AccountError(code=AccountErrorCode.DUPLICATE, message=_MSG_USER_EXISTS)
        )
