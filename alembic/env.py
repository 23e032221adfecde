"""
============================================================
TARJETA CRC - alembic/env.py
============================================================
Responsibilities:
  - Correr las migraciones de teamtasks (users, tasks, reports).
  - Tomar la URL de DATABASE_URL (misma variable que la API) y forzar el
    driver psycopg 3 para SQLAlchemy.

Collaborators:
  - alembic.context
  - sqlalchemy.engine_from_config (solo para la conexión de migración)

Policy:
  - Los repositorios usan SQL crudo: no hay metadata ORM, las revisiones se
    escriben a mano (target_metadata = None, sin autogenerate).
============================================================
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

_DRIVER_PREFIXES = ("postgresql://", "postgres://")


def database_url() -> str:
    raw = os.environ.get("DATABASE_URL") or config.get_main_option("sqlalchemy.url") or ""
    for prefix in _DRIVER_PREFIXES:
        if raw.startswith(prefix):
            return "postgresql+psycopg://" + raw[len(prefix):]
    return raw


def run_offline() -> None:
    """Emite SQL sin conectarse (alembic upgrade --sql)."""
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    section = dict(config.get_section(config.config_ini_section) or {})
    section["sqlalchemy.url"] = database_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=None)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
