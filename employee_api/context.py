"""
===============================================================================
TARJETA CRC — employee_api/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Mantener contexto request-scoped usando ContextVars (async-safe).
  - Permitir correlación de logs sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_request_context(), set_identity_context(),
    get_context_dict(), clear_context().

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path al inicio del request.
  - identity.auth_gate: setea user_id cuando el token es válido.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo strings (serialización segura en JSON).
  - Defaults vacíos ("") en lugar de None.
  - La identidad vive acá solo para logging; la fuente de verdad para
    autorización es request.state.identity.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

_CTX_KEYS: Final[tuple[tuple[str, ContextVar[str]], ...]] = (
    ("request_id", request_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
    ("user_id", user_id_var),
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Setea el contexto mínimo del request (vacío = no disponible)."""
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_identity_context(user_id: str) -> None:
    user_id_var.set(user_id or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    return {key: val for key, var in _CTX_KEYS if (val := var.get())}


def clear_context() -> None:
    """
    Limpia el contexto al final del request.

    Evita filtración de contexto entre requests atendidos por el mismo worker.
    """
    for _, var in _CTX_KEYS:
        var.set("")
