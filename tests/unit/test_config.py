"""
Name: Settings Tests

Responsibilities:
  - In-memory storage for test/ci environments
  - DATABASE_URL required elsewhere
  - Production security guards
  - Field validators (pool bounds, timezone, log level)
"""

import pytest
from pydantic import ValidationError

from teamtasks.crosscutting.config import Settings, get_settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "x" * 40


@pytest.mark.parametrize("env", ["test", "testing", "ci", " CI "])
def test_in_memory_envs_need_no_database(env):
    settings = Settings(app_env=env, database_url="")
    assert settings.uses_in_memory_storage() is True


def test_database_url_required_outside_tests():
    with pytest.raises(ValidationError, match="DATABASE_URL is required"):
        Settings(app_env="development", database_url="")


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(
            app_env="production",
            database_url="postgresql://db/teamtasks",
            jwt_cookie_secure=True,
        )


def test_production_requires_secure_cookie():
    with pytest.raises(ValidationError, match="JWT_COOKIE_SECURE"):
        Settings(
            app_env="production",
            database_url="postgresql://db/teamtasks",
            jwt_secret=STRONG_SECRET,
        )


def test_production_forbids_dev_seed():
    with pytest.raises(ValidationError, match="DEV_SEED_ADMIN"):
        Settings(
            app_env="production",
            database_url="postgresql://db/teamtasks",
            jwt_secret=STRONG_SECRET,
            jwt_cookie_secure=True,
            dev_seed_admin=True,
        )


def test_valid_production_settings():
    settings = Settings(
        app_env="production",
        database_url="postgresql://db/teamtasks",
        jwt_secret=STRONG_SECRET,
        jwt_cookie_secure=True,
    )
    assert settings.is_production() is True
    assert settings.uses_in_memory_storage() is False


def test_pool_bounds():
    with pytest.raises(ValidationError, match="db_pool_min_size"):
        Settings(app_env="test", db_pool_min_size=5, db_pool_max_size=2)


def test_report_timezone():
    settings = Settings(app_env="test", report_timezone="America/Argentina/Cordoba")
    assert settings.get_report_zone().key == "America/Argentina/Cordoba"
    with pytest.raises(ValidationError, match="report_timezone"):
        Settings(app_env="test", report_timezone="Mars/Olympus")


def test_log_level_is_normalized():
    assert Settings(app_env="test", log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(app_env="test", log_level="loud")


def test_title_limit_cannot_exceed_the_column():
    assert Settings(app_env="test", max_title_chars=200).max_title_chars == 200
    with pytest.raises(ValidationError, match="max_title_chars"):
        Settings(app_env="test", max_title_chars=201)


def test_allowed_origins_list():
    settings = Settings(
        app_env="test", allowed_origins="http://a.dev, http://b.dev ,,"
    )
    assert settings.get_allowed_origins_list() == ["http://a.dev", "http://b.dev"]


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "ci")
    monkeypatch.setenv("MAX_TITLE_CHARS", "80")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.app_env == "ci"
    assert settings.max_title_chars == 80
