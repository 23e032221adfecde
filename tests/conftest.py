"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory storage)
  - Provide in-memory repositories and a frozen clock
  - Setup user factories and a ready-made org hierarchy

Collaborators:
  - pytest: Test framework
  - teamtasks.infrastructure.repositories: in-memory adapters
  - teamtasks.domain: entities, roles and policy snapshots

Notes:
  - Settings/container singletons are reset around every test
  - The org fixture builds two independent teams under one super_admin
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"

from teamtasks.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from teamtasks.container import reset_repositories  # noqa: E402
from teamtasks.domain.entities import User, UserStatus  # noqa: E402
from teamtasks.domain.roles import UserRole  # noqa: E402
from teamtasks.infrastructure.repositories import (  # noqa: E402
    InMemoryReportRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Each test sees fresh settings and empty in-memory repositories."""
    app_config.get_settings.cache_clear()
    reset_repositories()
    yield
    app_config.get_settings.cache_clear()
    reset_repositories()


# ============================================================================
# Clock
# ============================================================================


class FrozenClock:
    """R: Deterministic clock; advance() moves time forward explicitly."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FrozenClock:
    # Wednesday
    return FrozenClock(datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc))


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def report_repo() -> InMemoryReportRepository:
    return InMemoryReportRepository()


# ============================================================================
# Test Data Factories
# ============================================================================


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


class UserFactory:
    """R: Factory for users stored straight into a repository."""

    def __init__(self, repo: InMemoryUserRepository) -> None:
        self.repo = repo

    def create(
        self,
        role: UserRole = UserRole.MEMBER,
        *,
        name: str | None = None,
        email: str | None = None,
        supervisor_id: UUID | None = None,
        manager_id: UUID | None = None,
        status: UserStatus = UserStatus.ACTIVE,
        password_hash: str = "hashed:secret",
    ) -> User:
        user_id = uuid4()
        user = User(
            id=user_id,
            name=name or f"{role.value}-{str(user_id)[:8]}",
            email=email or f"{str(user_id)[:8]}@example.com",
            password_hash=password_hash,
            role=role,
            status=status,
            supervisor_id=supervisor_id,
            manager_id=manager_id,
        )
        return self.repo.create_user(user)

    def pending(self, *, name: str = "Newcomer", email: str | None = None) -> User:
        return self.create(
            UserRole.MEMBER, name=name, email=email, status=UserStatus.PENDING_APPROVAL
        )


@pytest.fixture
def user_factory(user_repo: InMemoryUserRepository) -> UserFactory:
    return UserFactory(user_repo)


@pytest.fixture
def org(user_factory: UserFactory) -> SimpleNamespace:
    """
    R: Two teams under one super_admin.

        admin
        ├── manager   ── supervisor   ── member
        └── manager2  ── supervisor2  ── member2
    """
    admin = user_factory.create(UserRole.SUPER_ADMIN, name="Admin")
    manager = user_factory.create(UserRole.MANAGER, name="Manager")
    supervisor = user_factory.create(
        UserRole.SUPERVISOR, name="Supervisor", manager_id=manager.id
    )
    member = user_factory.create(
        UserRole.MEMBER,
        name="Member",
        supervisor_id=supervisor.id,
        manager_id=manager.id,
    )
    manager2 = user_factory.create(UserRole.MANAGER, name="Manager Two")
    supervisor2 = user_factory.create(
        UserRole.SUPERVISOR, name="Supervisor Two", manager_id=manager2.id
    )
    member2 = user_factory.create(
        UserRole.MEMBER,
        name="Member Two",
        supervisor_id=supervisor2.id,
        manager_id=manager2.id,
    )
    return SimpleNamespace(
        admin=admin,
        manager=manager,
        supervisor=supervisor,
        member=member,
        manager2=manager2,
        supervisor2=supervisor2,
        member2=member2,
    )


@pytest.fixture
def password_hasher():
    """R: Cheap deterministic hasher (argon2 is exercised in identity tests)."""
    return fake_hash
