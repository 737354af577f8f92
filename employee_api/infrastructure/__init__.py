"""
============================================================
TARJETA CRC — infrastructure/__init__.py
============================================================
Module: infrastructure (adapters)

Responsibilities:
  - Agrupar adaptadores concretos: pool PostgreSQL y repositorios
    (Postgres para runtime, in-memory para tests / dev local).

Policy:
  - Sin side effects al importar: el pool se abre en el lifespan de la app.
============================================================
"""
