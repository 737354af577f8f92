"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Token Service (JWT HS256)

Responsabilidades:
    - Emitir access tokens firmados con expiración fija (iat + TTL).
    - Verificar firma, claims mínimos y expiración.
    - Devolver la Identity embebida SIN consultar el store: los claims se
      confían tal como estaban al momento de emisión.

Colaboradores:
    - PyJWT (firma / decodificación)
    - identity.users.Identity
    - container.get_token_service (inyecta secret + TTL desde Settings)

Decisiones de diseño:
    - Stateless: no hay revocación; válido = firma ok ∧ now < exp.
    - Reloj inyectable (clock) para poder testear bordes de expiración.
    - Errores tipados: el gate decide cómo responder, este módulo no sabe de HTTP.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from .users import Identity

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------
JWT_ALGORITHM: str = "HS256"
DEFAULT_TTL = timedelta(hours=1)

CLAIM_SUB: str = "sub"
CLAIM_ROLES: str = "roles"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_ROLES, CLAIM_IAT, CLAIM_EXP]


class TokenError(Exception):
    """Base de fallos de verificación."""


class InvalidTokenSignatureError(TokenError):
    """Firma inválida, token mal formado o claims faltantes/incorrectos."""


class TokenExpiredError(TokenError):
    """now >= exp."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenService

    Responsabilidades:
      - issue(identity_id, roles) -> token
      - verify(token) -> Identity

    Colaboradores:
      - jwt (PyJWT)
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identity_id: str, roles: list[str] | tuple[str, ...]) -> str:
        """Firma un token para la identidad. Sin efectos secundarios."""
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: str(identity_id),
            CLAIM_ROLES: list(roles),
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + self._ttl).timestamp()),
            CLAIM_TYP: TOKEN_TYPE_ACCESS,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> Identity:
        """
        Valida el token y devuelve la Identity embebida.

        Errores:
            - InvalidTokenSignatureError: firma/forma/claims inválidos.
            - TokenExpiredError: el reloj alcanzó exp.
        """
        try:
            # R: exp se valida a mano contra el reloj inyectado (leeway 0).
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenSignatureError(str(exc)) from exc

        token_type = payload.get(CLAIM_TYP)
        if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
            raise InvalidTokenSignatureError("unexpected token type")

        exp = payload[CLAIM_EXP]
        if not isinstance(exp, (int, float)):
            raise InvalidTokenSignatureError("exp claim must be numeric")
        if self._clock().timestamp() >= exp:
            raise TokenExpiredError("token expired")

        user_id = payload[CLAIM_SUB]
        roles = payload[CLAIM_ROLES]
        if not user_id or not isinstance(user_id, str):
            raise InvalidTokenSignatureError("sub claim must be a non-empty string")
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise InvalidTokenSignatureError("roles claim must be a list of strings")

        return Identity(user_id=user_id, roles=tuple(roles))
