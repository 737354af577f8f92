"""
===============================================================================
MÓDULO: Sanitización de texto libre (anti-XSS almacenado)
===============================================================================

Responsabilidades:
  - Neutralizar markup en campos de texto libre antes de persistirlos.
  - Exponer un helper puro, reutilizable desde validators de pydantic.

Colaboradores:
  - interfaces/api/http/schemas/* (field_validator de nombres, position, etc.)

Notas:
  - Se escapa, no se borra: "<b>" -> "&lt;b&gt;". El valor sigue siendo legible
    y un cliente que lo renderice como HTML no ejecuta nada.
  - Passwords NO pasan por acá (se hashean tal cual llegan).
===============================================================================
"""

from __future__ import annotations

import re

_MARKUP_CHARS = re.compile(r"[<>]")
_REPLACEMENTS = {"<": "&lt;", ">": "&gt;"}


def escape_markup(value: str) -> str:
    """Escapa < y > en un string."""
    return _MARKUP_CHARS.sub(lambda m: _REPLACEMENTS[m.group(0)], value)


def clean_text(value: str | None) -> str | None:
    """strip() + escape_markup(); None pasa sin cambios."""
    if value is None:
        return None
    return escape_markup(value.strip())
