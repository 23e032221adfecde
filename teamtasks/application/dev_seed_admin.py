"""
===============================================================================
TARJETA CRC - application/dev_seed_admin.py
===============================================================================

Qué es:
    Asegura que exista un super_admin ACTIVO para desarrollo. Sin él no hay
    quién apruebe el primer registro (la aprobación es solo de super_admin).

Seguridad:
    - Fuera de E2E corre únicamente con APP_ENV=local.
    - Con E2E_SEED_ADMIN=1 corre en cualquier ambiente (CI define el suyo).

CRC:
    Component: ensure_dev_super_admin
    Responsibilities:
      - Rechazar ambientes no permitidos
      - Resolver credenciales (settings vs E2E env)
      - Asegurar usuario (create, o reset si force_reset)
    Collaborators:
      - UserRepository (get_user_by_email / create_user / update_user)
      - password_hasher
      - Settings + env mapping
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Mapping
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.exceptions import ConfigurationError
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.repositories import UserRepository
from ..domain.roles import UserRole
from .usecases.common import utcnow

_E2E_FLAG: Final[str] = "E2E_SEED_ADMIN"
_E2E_EMAIL_VAR: Final[str] = "E2E_ADMIN_EMAIL"
_E2E_PASSWORD_VAR: Final[str] = "E2E_ADMIN_PASSWORD"

_DEFAULT_E2E_EMAIL: Final[str] = "admin@e2e.local"
_DEFAULT_E2E_PASSWORD: Final[str] = "admin1234"


@dataclass(frozen=True, slots=True)
class _AdminSeedPlan:
    """Qué sembrar, resuelto antes de tocar el repositorio."""

    enabled: bool
    is_e2e: bool
    email: str = ""
    password: str = ""
    name: str = ""
    force_reset: bool = False


_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _resolve_seed_plan(settings: Settings, env: Mapping[str, str]) -> _AdminSeedPlan:
    is_e2e = _flag(env.get(_E2E_FLAG))

    if not (settings.dev_seed_admin or is_e2e):
        return _AdminSeedPlan(enabled=False, is_e2e=is_e2e)

    if is_e2e:
        return _AdminSeedPlan(
            enabled=True,
            is_e2e=True,
            email=env.get(_E2E_EMAIL_VAR, _DEFAULT_E2E_EMAIL).strip().lower(),
            password=env.get(_E2E_PASSWORD_VAR, _DEFAULT_E2E_PASSWORD),
            name="E2E Admin",
        )

    return _AdminSeedPlan(
        enabled=True,
        is_e2e=False,
        email=(settings.dev_seed_admin_email or "").strip().lower(),
        password=settings.dev_seed_admin_password or "",
        name=(settings.dev_seed_admin_name or "").strip() or "Local Admin",
        force_reset=bool(settings.dev_seed_admin_force_reset),
    )


def _guard_environment(settings: Settings, *, is_e2e: bool) -> None:
    app_env = (settings.app_env or "").strip().lower()
    if not is_e2e and app_env != "local":
        raise RuntimeError(
            f"DEV_SEED_ADMIN refused: APP_ENV is '{app_env}' but must be 'local'"
        )


def ensure_dev_super_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
    env: Mapping[str, str],
) -> None:
    """
    Ensure a development super_admin exists if configured.

    Behavior:
      - If disabled: no-op
      - If enabled:
          - Create user (active super_admin) if missing
          - If force_reset: reset password, role and status
          - Otherwise leave the existing account untouched
    """
    plan = _resolve_seed_plan(settings, env)
    if not plan.enabled:
        return

    _guard_environment(settings, is_e2e=plan.is_e2e)

    if not plan.email or not plan.password:
        raise ConfigurationError("Dev seed admin is enabled but email/password are empty")

    logger.info(
        "Dev seed admin: ensuring super_admin",
        extra={
            "email": plan.email,
            "force_reset": plan.force_reset,
            "is_e2e": plan.is_e2e,
        },
    )

    existing = user_repo.get_user_by_email(plan.email)
    now = utcnow()

    if existing is None:
        user = User(
            id=uuid4(),
            name=plan.name,
            email=plan.email,
            password_hash=password_hasher(plan.password),
            created_at=now,
            updated_at=now,
        )
        user.assign_hierarchy(UserRole.SUPER_ADMIN)
        user.activate(approved_by=None, at=now)
        user_repo.create_user(user)
        logger.info("Dev seed admin: user created", extra={"email": plan.email})
        return

    if plan.force_reset:
        existing.password_hash = password_hasher(plan.password)
        existing.assign_hierarchy(UserRole.SUPER_ADMIN)
        if not existing.is_active:
            existing.activate(approved_by=None, at=now)
        existing.updated_at = now
        user_repo.update_user(existing)
        logger.info("Dev seed admin: user reset applied", extra={"email": plan.email})
        return

    logger.info("Dev seed admin: user exists; skipping", extra={"email": plan.email})
