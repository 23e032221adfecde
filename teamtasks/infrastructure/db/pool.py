"""
===============================================================================
TARJETA CRC - infrastructure/db/pool.py
===============================================================================
Componente:
  Pool de conexiones PostgreSQL del proceso (uno solo).

Responsabilidades:
  - Abrirlo en el arranque de la API y cerrarlo al apagar.
  - Aplicar statement_timeout a cada conexión nueva.
  - Entregarlo a los repositorios Postgres que no recibieron uno inyectado.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py (lifespan)
  - repositories/postgres/base.py

Notas:
  - Ciclo de vida estricto: doble apertura o uso sin abrir -> PoolStateError.
  - psycopg_pool se importa al abrir: con APP_ENV=test|ci nunca se carga.
===============================================================================
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Optional

from ...crosscutting.exceptions import PoolStateError
from ...crosscutting.logger import logger

if TYPE_CHECKING:
    from psycopg_pool import ConnectionPool

_state_lock = threading.Lock()
_active_pool: Optional["ConnectionPool"] = None


def statement_timeout_hook(timeout_ms: int) -> Callable[[object], None]:
    """Hook `configure` del pool: fija statement_timeout (0 = sin límite)."""

    def configure(conn) -> None:
        if timeout_ms <= 0:
            return
        conn.execute(f"SET statement_timeout = {int(timeout_ms)}")
        conn.commit()

    return configure


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
) -> "ConnectionPool":
    global _active_pool

    with _state_lock:
        if _active_pool is not None:
            raise PoolStateError("Database pool is already open.")

        from psycopg_pool import ConnectionPool

        logger.info(
            "Opening database pool",
            extra={
                "min_size": min_size,
                "max_size": max_size,
                "statement_timeout_ms": statement_timeout_ms,
            },
        )
        _active_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=statement_timeout_hook(statement_timeout_ms),
            open=True,
        )
        return _active_pool


def get_pool() -> "ConnectionPool":
    pool = _active_pool
    if pool is None:
        raise PoolStateError("Database pool is not open; call init_pool() first.")
    return pool


def close_pool() -> None:
    """Idempotente: sin pool abierto no hace nada."""
    global _active_pool

    with _state_lock:
        pool, _active_pool = _active_pool, None

    if pool is not None:
        logger.info("Closing database pool")
        pool.close()
