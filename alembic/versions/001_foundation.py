"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (users, tasks, reports).
  - Definir constraints e índices según las queries de los repositorios.

Collaborators:
  - PostgreSQL 16+
  - infrastructure.repositories.postgres (usa este esquema como contrato)

Policy:
  - Migración BASELINE. Downgrade NO soportado.
  - Referencias a usuarios (supervisor/manager/assignee/creator) son débiles:
    sin FK, un usuario borrado se resuelve como null en lectura.
  - Convención de nombres:
      pk_<tabla>        - Primary keys
      ix_<tabla>_<col>  - Indexes
      ck_<tabla>_<col>  - Check constraints
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, *, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.DateTime(timezone=True), nullable=True)
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """
    Orden:
      1) Identity (users)
      2) Tasks
      3) Reports
    """

    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'member'"),
        ),
        sa.Column(
            "status",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'pending_approval'"),
        ),
        sa.Column("avatar_url", sa.String(2048), nullable=True),
        sa.Column("supervisor_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _timestamp("approved_at", nullable=True),
        sa.Column("approved_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.CheckConstraint(
            "role IN ('super_admin','manager','supervisor','member')",
            name="ck_users_role",
        ),
        sa.CheckConstraint(
            "status IN ('active','pending_approval')",
            name="ck_users_status",
        ),
    )

    # Email único case-insensitive (get_user_by_email usa LOWER).
    op.execute("CREATE UNIQUE INDEX uq_users_lower_email ON users (lower(email))")
    op.create_index("ix_users_status", "users", ["status"])
    op.create_index("ix_users_supervisor_id", "users", ["supervisor_id"])
    op.create_index("ix_users_manager_id", "users", ["manager_id"])

    # =========================================================
    # 2) TASKS
    # =========================================================
    op.create_table(
        "tasks",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("assignee_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("creator_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "status",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'not-started'"),
        ),
        sa.Column("remarks", sa.Text, nullable=True),
        _timestamp("assigned_date"),
        sa.Column("target_date", sa.DateTime(timezone=True), nullable=False),
        _timestamp("last_updated"),
        _timestamp("completed_date", nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
        sa.CheckConstraint(
            "status IN ('not-started','in-progress','completed')",
            name="ck_tasks_status",
        ),
    )

    op.create_index("ix_tasks_assignee_id", "tasks", ["assignee_id"])
    op.create_index("ix_tasks_creator_id", "tasks", ["creator_id"])
    op.create_index("ix_tasks_status", "tasks", ["status"])
    # Reportes filtran por last_updated >= since.
    op.create_index("ix_tasks_last_updated", "tasks", ["last_updated"])

    # =========================================================
    # 3) REPORTS
    # =========================================================
    op.create_table(
        "reports",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        _timestamp("generated_at"),
        sa.Column("period_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "task_ids",
            postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
            nullable=False,
            server_default=sa.text("ARRAY[]::uuid[]"),
        ),
        sa.Column("total_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("in_progress_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("not_started_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("overdue_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_reports"),
        sa.CheckConstraint(
            "type IN ('daily','weekly','monthly')",
            name="ck_reports_type",
        ),
    )

    op.create_index("ix_reports_generated_at", "reports", ["generated_at"])


def downgrade() -> None:
    raise RuntimeError("001_foundation is a baseline migration; downgrade not supported")
