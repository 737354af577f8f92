"""
===============================================================================
USE CASE: Login (Verify Credentials + Issue Token)
===============================================================================

Business Goal:
    Autenticar por username o email y devolver token + perfil público.

Reglas:
    - Un único campo `username` sirve para ambos (email se compara en minúsculas).
    - Usuario inexistente y password incorrecto devuelven EXACTAMENTE el mismo
      error/mensaje (sin oráculo).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    LoginUseCase

Collaborators:
    - UserRepository: find_by_login
    - TokenService: issue
    - password_verifier: Callable[[str, str], bool] (default: argon2)
    - crosscutting.metrics.record_login_attempt
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_login_attempt
from ....domain.repositories import UserRepository
from ....identity.passwords import verify_password
from ....identity.tokens import TokenService
from .account_results import AccountError, AccountErrorCode, AuthResult, PublicProfile

_MSG_INVALID_CREDENTIALS: Final[str] = "Invalid Credentials"


@dataclass
class LoginInput:
    username: str
    password: str


class LoginUseCase:
    """Use Case (Query + token): login por username o email."""

    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self._users = user_repository
        self._tokens = token_service
        self._verify = password_verifier

    def execute(self, input_data: LoginInput) -> AuthResult:
        user = self._users.find_by_login(input_data.username.strip())
        if user is None or not self._verify(input_data.password, user.password_hash):
            logger.warning(
                "Login: invalid credentials",
                extra={"user_found": user is not None},
            )
            record_login_attempt("failure")
            return AuthResult(
                error=AccountError(
                    code=AccountErrorCode.INVALID_CREDENTIALS,
                    message=_MSG_INVALID_CREDENTIALS,
                )
            )

        record_login_attempt("success")
        token = self._tokens.issue(str(user.id), user.roles)
        return AuthResult(token=token, user=PublicProfile.from_account(user))
