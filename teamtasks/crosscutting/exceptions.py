# teamtasks/crosscutting/exceptions.py
"""
===============================================================================
TARJETA CRC - crosscutting/exceptions.py
===============================================================================
Componente:
  TeamTasksError y sus subclases (fallas internas, no de negocio)

Responsabilidades:
  - Un error_code fijo por clase, para logs y para el mapeo a HTTP.
  - Un error_id por instancia: el cliente lo recibe y se busca en los logs.
  - Conservar la excepción original del driver cuando la hay.

Notas:
  - Validación, permisos, not found y conflictos NO son excepciones: viajan
    como ServiceError dentro del resultado de cada caso de uso.

Colaboradores:
  - api/exception_handlers.py (problem+json 500/503)
  - infrastructure/db/pool.py, repositories/postgres/*
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class TeamTasksError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "TEAMTASKS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(TeamTasksError):
    """Falla del driver o del pool de PostgreSQL."""

    error_code: str = "DATABASE_ERROR"


class ConfigurationError(TeamTasksError):
    """Configuración inválida detectada en runtime (ej: zona horaria)."""

    error_code: str = "CONFIGURATION_ERROR"


class PoolStateError(DatabaseError):
    """Uso del pool fuera de su ciclo de vida (doble init, uso antes de init)."""

    error_code: str = "DB_POOL_STATE"
