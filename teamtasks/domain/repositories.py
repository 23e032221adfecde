"""
CRC - domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, tasks and reports (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: User, Task, Report
- domain.value_objects: TaskFilter
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- typing.Protocol for structural subtyping.
- Outputs are concrete lists for predictable iteration/serialization.
- No multi-record transactions: concurrent task updates are last-write-wins.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from .entities import Report, Task, User, UserStatus
from .roles import UserRole
from .value_objects import TaskFilter


class UserRepository(Protocol):
    """R: Interface for user persistence."""

    def get_user(self, user_id: UUID) -> Optional[User]:
        """R: Fetch a user by id (any status)."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by email (case-insensitive)."""
        ...

    def list_users(
        self,
        *,
        status: UserStatus | None = None,
        role: UserRole | None = None,
    ) -> List[User]:
        """R: List users ordered by name, optionally filtered."""
        ...

    def create_user(self, user: User) -> User:
        """
        R: Persist a new user.

        Email uniqueness is checked by the caller (CONFLICT); the store keeps
        a unique index on lower(email) as a last line.
        """
        ...

    def update_user(self, user: User) -> Optional[User]:
        """R: Overwrite a stored user. Returns None if it no longer exists."""
        ...

    def delete_user(self, user_id: UUID) -> bool:
        """R: Hard delete. Returns True if a row was removed."""
        ...


class TaskRepository(Protocol):
    """R: Interface for task persistence."""

    def get_task(self, task_id: UUID) -> Optional[Task]: ...

    def list_tasks(self, task_filter: TaskFilter | None = None) -> List[Task]:
        """R: List tasks ordered by last_updated desc."""
        ...

    def list_tasks_updated_since(self, since: datetime) -> List[Task]:
        """R: Tasks whose last_updated >= since (report snapshots)."""
        ...

    def create_task(self, task: Task) -> Task: ...

    def update_task(self, task: Task) -> Optional[Task]: ...

    def delete_task(self, task_id: UUID) -> bool: ...


class ReportRepository(Protocol):
    """R: Interface for report persistence (append-only)."""

    def get_report(self, report_id: UUID) -> Optional[Report]: ...

    def list_reports(self) -> List[Report]:
        """R: Newest first (generated_at desc)."""
        ...

    def create_report(self, report: Report) -> Report: ...
