"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over the shared psycopg pool.
"""

from .report import PostgresReportRepository
from .task import PostgresTaskRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresTaskRepository",
    "PostgresReportRepository",
]
