"""
===============================================================================
TARJETA CRC — identity/auth_gate.py
===============================================================================

Módulo:
    Authentication Gate (dependencia FastAPI)

Responsabilidades:
    - Leer Authorization, extraer el credential y verificarlo con TokenService.
    - Rechazar con 401 (mensajes estables) o adjuntar la Identity a
      request.state.identity y continuar.
    - Registrar el user_id en el contexto de logs.

Colaboradores:
    - identity.tokens.TokenService (inyectado vía container.get_token_service)
    - crosscutting.error_responses.unauthorized
    - crosscutting.metrics.record_auth_rejection
    - context.set_identity_context

Máquina de estados (por request):
    1) header ausente/vacío          -> 401 "No token provided, authorization denied"
    2) header.split(" ")[1] vacío    -> 401 "Invalid token, authorization denied"
    3) verify() falla (cualquier motivo) -> 401 "Token is not valid"
    4) ok -> request.state.identity = Identity(...) -> continue

Notas:
    - Nunca toca el store ni loguea el token.
    - No valida el esquema ("Bearer"): se toma el segundo segmento tal cual.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_token_service
from ..context import set_identity_context
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_rejection
from .tokens import TokenError, TokenService
from .users import Identity

MSG_NO_TOKEN = "No token provided, authorization denied"
MSG_INVALID_TOKEN = "Invalid token, authorization denied"
MSG_TOKEN_NOT_VALID = "Token is not valid"


def extract_credential(authorization: str) -> str | None:
    """Segundo segmento de `Authorization` separado por espacios (o None)."""
    parts = authorization.split(" ")
    if len(parts) < 2:
        return None
    return parts[1] or None


def require_identity() -> Callable:
    """Dependency FastAPI: requiere un token válido y adjunta la Identity."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        token_service: TokenService = Depends(get_token_service),
    ) -> Identity:
        if not authorization:
            record_auth_rejection("missing_token")
            raise unauthorized(MSG_NO_TOKEN)

        token = extract_credential(authorization)
        if token is None:
            record_auth_rejection("malformed_header")
            raise unauthorized(MSG_INVALID_TOKEN)

        try:
            identity = token_service.verify(token)
        except TokenError as exc:
            logger.warning(
                "Auth gate: token rejected",
                extra={"reason": type(exc).__name__},
            )
            record_auth_rejection("invalid_token")
            raise unauthorized(MSG_TOKEN_NOT_VALID) from exc

        request.state.identity = identity
        set_identity_context(identity.user_id)
        return identity

    return dependency
