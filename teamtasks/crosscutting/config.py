"""
Name: Settings (pydantic-settings)

Responsibilities:
  - One typed object for every env var the service reads
  - Fail at startup on invalid combinations (pool bounds, missing DB, weak
    production secrets)
  - Local-development defaults

Collaborators:
  - api/main.py: CORS, pool sizing, dev seed
  - container.py: APP_ENV test/testing/ci => in-memory repositories
  - identity/auth_users.py: JWT secret, TTL and cookie
  - application/usecases/reports: report timezone

Notes:
  - Cached with lru_cache; tests call get_settings.cache_clear()
  - LOG_LEVEL / LOG_JSON are also read straight from the environment by
    crosscutting.logger, which is imported before Settings can be built
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_IN_MEMORY_ENVS = frozenset({"test", "testing", "ci"})
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_WEAK_SECRETS = frozenset({"dev-secret", "changeme", "change-me", "password"})
_MIN_PRODUCTION_SECRET_CHARS = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "development"
    # Required unless app_env is test/testing/ci.
    database_url: str = ""

    # HTTP
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = Field(default=60 * 24, gt=0)
    jwt_cookie_name: str = "access_token"
    jwt_cookie_secure: bool = False

    # psycopg pool
    db_pool_min_size: int = Field(default=2, gt=0)
    db_pool_max_size: int = Field(default=10, gt=0)
    db_statement_timeout_ms: int = Field(default=30_000, ge=0)

    report_timezone: str = "UTC"

    # Input limits (characters). tasks.title is VARCHAR(200).
    max_title_chars: int = Field(default=200, gt=0, le=200)
    max_description_chars: int = Field(default=5_000, gt=0)
    max_remarks_chars: int = Field(default=2_000, gt=0)

    log_level: str = "INFO"
    log_json: bool = True

    # Local super_admin bootstrap
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@teamtasks.local"
    dev_seed_admin_password: str = "admin1234"
    dev_seed_admin_name: str = "Local Admin"
    dev_seed_admin_force_reset: bool = False

    @field_validator("report_timezone")
    @classmethod
    def known_zone(cls, v: str) -> str:
        name = (v or "UTC").strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"report_timezone '{name}' is not a valid IANA zone") from exc
        return name

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def check_consistency(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        if not self.uses_in_memory_storage() and not self.database_url.strip():
            raise ValueError("DATABASE_URL is required unless APP_ENV is test/ci")
        if self.is_production():
            self._check_production()
        return self

    def _check_production(self) -> None:
        secret = (self.jwt_secret or "").strip()
        if not secret or secret in _WEAK_SECRETS:
            raise ValueError("JWT_SECRET must be set to a non-default value in production")
        if len(secret) < _MIN_PRODUCTION_SECRET_CHARS:
            raise ValueError(
                f"JWT_SECRET must be at least {_MIN_PRODUCTION_SECRET_CHARS} "
                "characters in production"
            )
        if not self.jwt_cookie_secure:
            raise ValueError("JWT_COOKIE_SECURE must be true in production")
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be disabled in production")

    def _env(self) -> str:
        return self.app_env.strip().lower()

    def is_production(self) -> bool:
        return self._env() == "production"

    def uses_in_memory_storage(self) -> bool:
        return self._env() in _IN_MEMORY_ENVS

    def get_allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def get_report_zone(self) -> ZoneInfo:
        return ZoneInfo(self.report_timezone)


@lru_cache
def get_settings() -> Settings:
    """Raises pydantic.ValidationError on invalid env."""
    return Settings()
