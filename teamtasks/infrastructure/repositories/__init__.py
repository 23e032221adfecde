"""
============================================================
TARJETA CRC
============================================================
Class: teamtasks.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo, psycopg)
- Repositorios InMemory (tests / CI)
============================================================
"""

from .in_memory import (
    InMemoryReportRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresReportRepository,
    PostgresTaskRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresUserRepository",
    "PostgresTaskRepository",
    "PostgresReportRepository",
    # In-memory
    "InMemoryUserRepository",
    "InMemoryTaskRepository",
    "InMemoryReportRepository",
]
