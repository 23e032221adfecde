"""
In-Memory Repository Implementations.

For testing and CI. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .report import InMemoryReportRepository
from .task import InMemoryTaskRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryTaskRepository",
    "InMemoryReportRepository",
]
