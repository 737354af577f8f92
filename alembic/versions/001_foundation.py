"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (migración fundacional).
  - Definir tablas `users` y `employees` con sus constraints UNIQUE: la
    unicidad de username/email/employee_id la garantiza la DB, no el servicio.
  - Índices para las búsquedas por department / position.

Collaborators:
  - PostgreSQL 16+
  - Alembic (framework de migraciones)
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Esta es una migración BASELINE. Downgrade NO soportado.
  - Toda evolución futura del esquema debe hacerse con migraciones aditivas (002+).
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      ck_<tabla>_<col>                   - Check constraints
  - employees.manager_id NO tiene FK: borrar un manager deja la referencia
    colgando (se resuelve como "sin manager" al expandir).
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# ============================================================
# Alembic identifiers
# ============================================================
revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """
    Crea el esquema fundacional completo.

    Orden:
      1) Identity (users)
      2) Employees
    """

    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("username", sa.String(20), nullable=False),
        # email se persiste en minúsculas (normalizado por el caso de uso).
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        # roles ordenado: roles[1] (Postgres, 1-based) es el rol primario.
        sa.Column(
            "roles",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default=sa.text("ARRAY['user']::varchar[]"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # =========================================================
    # 2) EMPLOYEES
    # =========================================================
    op.create_table(
        "employees",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("employee_id", sa.String(100), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(10), nullable=False),
        sa.Column("department", sa.String(50), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("salary", sa.Float, nullable=False),
        sa.Column("date_of_hire", sa.Date, nullable=False),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Active'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
        sa.UniqueConstraint("employee_id", name="uq_employees_employee_id"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
        sa.CheckConstraint(
            "department IN ('Engineering','Sales','Marketing','HR','Finance')",
            name="ck_employees_department",
        ),
        sa.CheckConstraint(
            "status IN ('Active','On Leave','Resigned')",
            name="ck_employees_status",
        ),
        sa.CheckConstraint("salary >= 30000", name="ck_employees_salary"),
    )

    # Índices según queries reales (search por igualdad, listado ordenado).
    op.create_index("ix_employees_department", "employees", ["department"])
    op.create_index("ix_employees_position", "employees", ["position"])
    op.create_index("ix_employees_manager_id", "employees", ["manager_id"])
    op.create_index("ix_employees_created_at", "employees", ["created_at"])


def downgrade() -> None:
    """
    Downgrade NO soportado para la migración fundacional.

    Política: esta es la base del esquema.
    Para resetear el entorno local: recrear la base y correr `alembic upgrade head`.
    """
    raise NotImplementedError(
        "Baseline: downgrade no soportado por política. "
        "Para resetear la base de datos, recrearla y correr: alembic upgrade head"
    )
