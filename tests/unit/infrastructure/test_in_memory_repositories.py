"""
Name: In-Memory Repository Tests

Responsibilities:
  - Same semantics as the Postgres adapters (email case, ordering)
  - Copies returned to callers, never the stored instance
  - Report window query (last_updated >= since)
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from teamtasks.domain.entities import (
    Report,
    ReportType,
    Task,
    TaskStatus,
    User,
    UserStatus,
)
from teamtasks.domain.roles import UserRole
from teamtasks.domain.value_objects import TaskFilter
from teamtasks.infrastructure.repositories.in_memory import (
    InMemoryReportRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit

T0 = datetime(2024, 5, 12, tzinfo=timezone.utc)


def _user(name, *, email=None, status=UserStatus.ACTIVE, role=UserRole.MEMBER):
    return User(
        id=uuid4(),
        name=name,
        email=email or f"{name.lower()}@example.com",
        password_hash="x",
        role=role,
        status=status,
    )


def _task(*, last_updated, assignee_id=None, status=TaskStatus.NOT_STARTED):
    return Task(
        id=uuid4(),
        title="t",
        description="d",
        assignee_id=assignee_id or uuid4(),
        target_date=T0 + timedelta(days=10),
        status=status,
        last_updated=last_updated,
    )


class TestInMemoryUserRepository:
    def test_email_is_normalized_and_case_insensitive(self):
        repo = InMemoryUserRepository()
        stored = repo.create_user(_user("Ana", email="  Ana@Example.COM "))

        assert stored.email == "ana@example.com"
        assert stored.created_at is not None
        assert repo.get_user_by_email("ANA@example.com").id == stored.id

    def test_list_filters_and_sorts_by_name(self):
        repo = InMemoryUserRepository()
        repo.create_user(_user("zoe"))
        repo.create_user(_user("Bruno"))
        repo.create_user(_user("Carla", status=UserStatus.PENDING_APPROVAL))
        repo.create_user(_user("Mora", role=UserRole.MANAGER))

        active = repo.list_users(status=UserStatus.ACTIVE)
        assert [u.name for u in active] == ["Bruno", "Mora", "zoe"]

        managers = repo.list_users(role=UserRole.MANAGER)
        assert [u.name for u in managers] == ["Mora"]

    def test_returns_copies(self):
        repo = InMemoryUserRepository()
        stored = repo.create_user(_user("Ana"))

        fetched = repo.get_user(stored.id)
        fetched.name = "Changed"

        assert repo.get_user(stored.id).name == "Ana"

    def test_update_missing_user_returns_none(self):
        repo = InMemoryUserRepository()
        assert repo.update_user(_user("Ghost")) is None

    def test_update_and_delete(self):
        repo = InMemoryUserRepository()
        stored = repo.create_user(_user("Ana"))
        stored.role = UserRole.SUPERVISOR

        updated = repo.update_user(stored)
        assert updated.role == UserRole.SUPERVISOR
        assert repo.get_user(stored.id).role == UserRole.SUPERVISOR

        assert repo.delete_user(stored.id) is True
        assert repo.delete_user(stored.id) is False
        assert repo.get_user(stored.id) is None

    def test_ping(self):
        assert InMemoryUserRepository().ping() is True


class TestInMemoryTaskRepository:
    def test_filter_by_assignee_and_status(self):
        repo = InMemoryTaskRepository()
        assignee = uuid4()
        mine = repo.create_task(_task(last_updated=T0, assignee_id=assignee))
        repo.create_task(
            _task(last_updated=T0, assignee_id=assignee, status=TaskStatus.COMPLETED)
        )
        repo.create_task(_task(last_updated=T0))

        found = repo.list_tasks(
            TaskFilter(assignee_id=assignee, status=TaskStatus.NOT_STARTED)
        )
        assert [t.id for t in found] == [mine.id]
        assert len(repo.list_tasks()) == 3

    def test_updated_since_includes_boundary(self):
        repo = InMemoryTaskRepository()
        on_boundary = repo.create_task(_task(last_updated=T0))
        later = repo.create_task(_task(last_updated=T0 + timedelta(hours=5)))
        repo.create_task(_task(last_updated=T0 - timedelta(microseconds=1)))

        found = repo.list_tasks_updated_since(T0)
        assert [t.id for t in found] == [later.id, on_boundary.id]

    def test_ordering_newest_first(self):
        repo = InMemoryTaskRepository()
        old = repo.create_task(_task(last_updated=T0))
        new = repo.create_task(_task(last_updated=T0 + timedelta(days=1)))

        assert [t.id for t in repo.list_tasks()] == [new.id, old.id]

    def test_update_missing_and_delete(self):
        repo = InMemoryTaskRepository()
        assert repo.update_task(_task(last_updated=T0)) is None

        task = repo.create_task(_task(last_updated=T0))
        task.title = "renamed"
        assert repo.update_task(task).title == "renamed"
        assert repo.delete_task(task.id) is True
        assert repo.get_task(task.id) is None


class TestInMemoryReportRepository:
    def test_list_newest_first(self):
        repo = InMemoryReportRepository()
        first = repo.create_report(
            Report(
                id=uuid4(),
                title="a",
                type=ReportType.DAILY,
                generated_at=T0,
                period_start=T0,
            )
        )
        second = repo.create_report(
            Report(
                id=uuid4(),
                title="b",
                type=ReportType.WEEKLY,
                generated_at=T0 + timedelta(minutes=1),
                period_start=T0,
            )
        )

        assert [r.id for r in repo.list_reports()] == [second.id, first.id]
        assert repo.get_report(first.id).title == "a"
        assert repo.get_report(uuid4()) is None
