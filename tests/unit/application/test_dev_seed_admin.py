from uuid import uuid4

import pytest

from teamtasks.application.dev_seed_admin import ensure_dev_super_admin
from teamtasks.crosscutting.config import Settings
from teamtasks.crosscutting.exceptions import ConfigurationError
from teamtasks.domain.entities import User, UserStatus
from teamtasks.domain.roles import UserRole

pytestmark = pytest.mark.unit


def _settings(**overrides) -> Settings:
    data = dict(
        database_url="postgresql://localhost/teamtasks",
        app_env="local",
        dev_seed_admin=True,
        dev_seed_admin_email="Root@Local.dev",
        dev_seed_admin_password="pass1234",
    )
    data.update(overrides)
    return Settings(**data)


def test_disabled_is_noop(user_repo, password_hasher):
    ensure_dev_super_admin(
        _settings(dev_seed_admin=False),
        user_repo=user_repo,
        password_hasher=password_hasher,
        env={},
    )
    assert user_repo.list_users() == []


def test_fail_fast_if_not_local(user_repo, password_hasher):
    with pytest.raises(RuntimeError, match="must be 'local'"):
        ensure_dev_super_admin(
            _settings(app_env="development"),
            user_repo=user_repo,
            password_hasher=password_hasher,
            env={},
        )


def test_creates_active_super_admin(user_repo, password_hasher):
    ensure_dev_super_admin(
        _settings(), user_repo=user_repo, password_hasher=password_hasher, env={}
    )

    admin = user_repo.get_user_by_email("root@local.dev")
    assert admin is not None
    assert admin.role == UserRole.SUPER_ADMIN
    assert admin.status == UserStatus.ACTIVE
    assert admin.password_hash == "hashed:pass1234"


def test_existing_user_is_left_alone(user_repo, password_hasher):
    existing = user_repo.create_user(
        User(
            id=uuid4(),
            name="Old",
            email="root@local.dev",
            password_hash="old",
            role=UserRole.MEMBER,
        )
    )

    ensure_dev_super_admin(
        _settings(), user_repo=user_repo, password_hasher=password_hasher, env={}
    )

    stored = user_repo.get_user(existing.id)
    assert stored.password_hash == "old"
    assert stored.role == UserRole.MEMBER


def test_force_reset_promotes_and_activates(user_repo, password_hasher):
    existing = user_repo.create_user(
        User(
            id=uuid4(),
            name="Old",
            email="root@local.dev",
            password_hash="old",
            role=UserRole.MEMBER,
        )
    )

    ensure_dev_super_admin(
        _settings(dev_seed_admin_force_reset=True),
        user_repo=user_repo,
        password_hasher=password_hasher,
        env={},
    )

    stored = user_repo.get_user(existing.id)
    assert stored.password_hash == "hashed:pass1234"
    assert stored.role == UserRole.SUPER_ADMIN
    assert stored.is_active


def test_e2e_override_bypasses_env_guard(user_repo, password_hasher):
    ensure_dev_super_admin(
        _settings(app_env="test", dev_seed_admin=False),
        user_repo=user_repo,
        password_hasher=password_hasher,
        env={"E2E_SEED_ADMIN": "1", "E2E_ADMIN_EMAIL": "e2e@ci.dev"},
    )
    admin = user_repo.get_user_by_email("e2e@ci.dev")
    assert admin.role == UserRole.SUPER_ADMIN
    assert admin.password_hash == "hashed:admin1234"


def test_empty_credentials_raise(user_repo, password_hasher):
    with pytest.raises(ConfigurationError):
        ensure_dev_super_admin(
            _settings(dev_seed_admin_password=""),
            user_repo=user_repo,
            password_hasher=password_hasher,
            env={},
        )
