"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
- Resolver el pool: el inyectado (tests) o el del proceso (db.pool).
- Correr SQL parametrizado y traducir cualquier falla del driver a
  DatabaseError, logueando el contexto de la operación.

Collaborators:
- psycopg_pool.ConnectionPool
- infrastructure.db.pool.get_pool
- crosscutting.exceptions.DatabaseError

Constraints:
- Los valores viajan siempre como parámetros (%s); en el SQL solo se
  interpolan fragmentos armados por los propios repositorios.
============================================================
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger

T = TypeVar("T")


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            from ...db.pool import get_pool

            return get_pool()
        return self._pool

    def _run(
        self,
        query: str,
        params: Iterable[object],
        read: Callable[[Any], T],
        *,
        context_msg: str,
        extra: dict,
    ) -> T:
        try:
            with self._get_pool().connection() as conn:
                return read(conn.execute(query, tuple(params)))
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "db_error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        return self._run(
            query, params, lambda cur: cur.fetchall(), context_msg=context_msg, extra=extra
        )

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        return self._run(
            query, params, lambda cur: cur.fetchone(), context_msg=context_msg, extra=extra
        )

    def _execute(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """DML sin RETURNING: devuelve las filas afectadas."""
        return self._run(
            query, params, lambda cur: cur.rowcount or 0, context_msg=context_msg, extra=extra
        )

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1", params=(), context_msg="Database ping failed", extra={}
        )
        return row is not None
