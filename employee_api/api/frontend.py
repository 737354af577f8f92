"""
===============================================================================
TARJETA CRC — employee_api/api/frontend.py (SPA estática en producción)
===============================================================================

Responsabilidades:
  - En producción, servir los archivos del build del frontend.
  - Fallback SPA: cualquier GET que no sea de API ni archivo existente
    devuelve index.html.

Colaboradores:
  - starlette FileResponse
  - crosscutting.config.Settings (app_env, frontend_build_dir)

Notas:
  - Debe registrarse DESPUÉS de los routers: la ruta catch-all es la última.
  - Paths fuera del directorio de build se ignoran (sin path traversal).
===============================================================================
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import FileResponse

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger

_API_PREFIX = "api/"
_INDEX_FILE = "index.html"


def resolve_asset(build_dir: Path, requested: str) -> Path:
    """Archivo pedido si existe dentro de build_dir; si no, index.html."""
    root = build_dir.resolve()
    candidate = (root / requested).resolve()
    if requested and candidate.is_file() and candidate.is_relative_to(root):
        return candidate
    return root / _INDEX_FILE


def mount_frontend(app: FastAPI, settings: Settings) -> bool:
    """Registra el catch-all de la SPA. Devuelve True si quedó montado."""
    if not settings.is_production():
        return False

    build_dir = Path(settings.frontend_build_dir)
    if not (build_dir / _INDEX_FILE).is_file():
        logger.warning(
            "Frontend build not found; static serving disabled",
            extra={"frontend_build_dir": str(build_dir)},
        )
        return False

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa(full_path: str):
        if full_path.startswith(_API_PREFIX):
            raise StarletteHTTPException(status_code=404, detail="Not Found")
        return FileResponse(resolve_asset(build_dir, full_path))

    logger.info("Frontend static serving enabled", extra={"dir": str(build_dir)})
    return True
