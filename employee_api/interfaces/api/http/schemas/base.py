"""
===============================================================================
TARJETA CRC — schemas/base.py
===============================================================================

Responsabilidades:
    - Base de todos los DTOs: alias camelCase en JSON, snake_case en Python.
    - Validadores reutilizables con los mensajes estables de la API.

Colaboradores:
    - domain.entities (constantes de reglas de campo)
    - crosscutting.sanitize (escape de < y >)
===============================================================================
"""

from __future__ import annotations

from employee_api.crosscutting.sanitize import clean_text
from employee_api.domain.entities import EMAIL_PATTERN, NAME_MAX_LENGTH
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def required_text(value: str | None, message: str) -> str:
    """strip + escape; vacío o null -> ValueError(message)."""
    cleaned = clean_text(value)
    if not cleaned:
        raise ValueError(message)
    return cleaned


def name_text(value: str | None, label: str) -> str:
    cleaned = required_text(value, f"{label} is required")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError(f"{label} cannot exceed {NAME_MAX_LENGTH} characters")
    return cleaned


def email_text(value: str | None) -> str:
    cleaned = (value or "").strip().lower()
    if not EMAIL_PATTERN.fullmatch(cleaned):
        raise ValueError("Please include a valid email")
    return cleaned
