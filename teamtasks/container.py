"""
===============================================================================
TARJETA CRC - teamtasks/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios + casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons de repositorios con lru_cache.
  - Centralizar decisiones runtime basadas en Settings (in-memory vs Postgres,
    límites, zona horaria de reportes).

Colaboradores:
  - teamtasks.crosscutting.config.get_settings
  - teamtasks.domain.repositories (puertos)
  - teamtasks.infrastructure.repositories (implementaciones)
  - teamtasks.application.usecases (casos de uso)
  - teamtasks.identity.passwords (hasher Argon2)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    ApproveUserUseCase,
    CreateTaskUseCase,
    CreateUserUseCase,
    DeleteTaskUseCase,
    DeleteUserUseCase,
    GenerateReportUseCase,
    GetReportUseCase,
    GetTaskPermissionsUseCase,
    GetTaskUseCase,
    GetUserUseCase,
    ListAssignableUsersUseCase,
    ListPendingUsersUseCase,
    ListReportsUseCase,
    ListTasksUseCase,
    ListTeamUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    RejectUserUseCase,
    UpdateTaskUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import ReportRepository, TaskRepository, UserRepository
from .identity.passwords import hash_password
from .infrastructure.repositories import (
    InMemoryReportRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
    PostgresReportRepository,
    PostgresTaskRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => in-memory adapters."""
    return get_settings().uses_in_memory_storage()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Repositorio de tareas (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryTaskRepository()
    return PostgresTaskRepository()


@lru_cache(maxsize=1)
def get_report_repository() -> ReportRepository:
    """Repositorio de reportes (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryReportRepository()
    return PostgresReportRepository()


def reset_repositories() -> None:
    """Descarta los singletons (tests)."""
    get_user_repository.cache_clear()
    get_task_repository.cache_clear()
    get_report_repository.cache_clear()


# =============================================================================
# Casos de uso: usuarios
# =============================================================================


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_list_pending_users_use_case() -> ListPendingUsersUseCase:
    return ListPendingUsersUseCase(get_user_repository())


def get_list_assignable_users_use_case() -> ListAssignableUsersUseCase:
    return ListAssignableUsersUseCase(get_user_repository())


def get_list_team_use_case() -> ListTeamUseCase:
    return ListTeamUseCase(get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), password_hasher=hash_password)


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(get_user_repository(), password_hasher=hash_password)


def get_approve_user_use_case() -> ApproveUserUseCase:
    return ApproveUserUseCase(get_user_repository())


def get_reject_user_use_case() -> RejectUserUseCase:
    return RejectUserUseCase(get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository())


# =============================================================================
# Casos de uso: tareas
# =============================================================================


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(get_task_repository(), get_user_repository())


def get_get_task_use_case() -> GetTaskUseCase:
    return GetTaskUseCase(get_task_repository(), get_user_repository())


def get_task_permissions_use_case() -> GetTaskPermissionsUseCase:
    return GetTaskPermissionsUseCase(get_task_repository(), get_user_repository())


def get_create_task_use_case() -> CreateTaskUseCase:
    settings = get_settings()
    return CreateTaskUseCase(
        get_task_repository(),
        get_user_repository(),
        max_title_chars=settings.max_title_chars,
        max_description_chars=settings.max_description_chars,
        max_remarks_chars=settings.max_remarks_chars,
    )


def get_update_task_use_case() -> UpdateTaskUseCase:
    settings = get_settings()
    return UpdateTaskUseCase(
        get_task_repository(),
        get_user_repository(),
        max_title_chars=settings.max_title_chars,
        max_description_chars=settings.max_description_chars,
        max_remarks_chars=settings.max_remarks_chars,
    )


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(get_task_repository(), get_user_repository())


# =============================================================================
# Casos de uso: reportes
# =============================================================================


def get_generate_report_use_case() -> GenerateReportUseCase:
    return GenerateReportUseCase(
        get_report_repository(),
        get_task_repository(),
        zone=get_settings().get_report_zone(),
    )


def get_list_reports_use_case() -> ListReportsUseCase:
    return ListReportsUseCase(get_report_repository())


def get_get_report_use_case() -> GetReportUseCase:
    return GetReportUseCase(get_report_repository())
