"""
===============================================================================
MÓDULO: Security headers (hardening de respuestas)
===============================================================================

Objetivo
--------
Agregar a todas las respuestas los headers de hardening habituales:
- CSP (más estricta en producción)
- HSTS (solo producción + HTTPS)
- Anti-clickjacking, anti-sniffing, aislamiento de origen

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SecurityHeadersMiddleware

Responsabilidades:
  - Añadir headers sin romper /docs en desarrollo
  - Ocultar el header Server

Colaboradores:
  - crosscutting.config.get_settings
===============================================================================
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_STATIC_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=()",
}


def _build_csp(is_production: bool) -> str:
    # En dev se permite inline para swagger (/docs).
    inline = "" if is_production else " 'unsafe-inline'"
    return (
        "default-src 'self'; "
        f"script-src 'self'{inline}; "
        f"style-src 'self'{inline}; "
        "img-src 'self' data:; "
        "font-src 'self'; "
        "connect-src 'self'; "
        "frame-ancestors 'none'; "
        "object-src 'none'"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Headers de seguridad en todas las respuestas (incluidos errores)."""

    def __init__(self, app):
        super().__init__(app)
        from .config import get_settings

        self._is_production = get_settings().is_production()
        self._csp = _build_csp(self._is_production)

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in _STATIC_HEADERS.items():
            response.headers[name] = value
        response.headers["Content-Security-Policy"] = self._csp
        if "server" in response.headers:
            del response.headers["server"]

        if self._is_production:
            proto = (
                request.headers.get("x-forwarded-proto") or request.url.scheme or ""
            ).lower()
            if proto == "https":
                response.headers["Strict-Transport-Security"] = (
                    "max-age=15552000; includeSubDomains"
                )

        return response
