"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── users/      # Registration, approval, roster, hierarchy changes
├── tasks/      # Task CRUD with field-level authorization
└── reports/    # Periodic report snapshots

Usage
-----
Import from subpackages for clarity:

    from teamtasks.application.usecases.tasks import UpdateTaskUseCase

Or use the barrel exports from this module:

    from teamtasks.application.usecases import UpdateTaskUseCase
"""

# Shared results
from .common import Clock, utcnow
from .results import (
    DeleteResult,
    ReportListResult,
    ReportResult,
    ServiceError,
    ServiceErrorCode,
    TaskListResult,
    TaskPermissionsResult,
    TaskResult,
    UserListResult,
    UserResult,
)

# Reports
from .reports import GenerateReportUseCase, GetReportUseCase, ListReportsUseCase

# Tasks
from .tasks import (
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskPermissionsUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
)

# Users
from .users import (
    ApproveUserInput,
    ApproveUserUseCase,
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListAssignableUsersUseCase,
    ListPendingUsersUseCase,
    ListTeamUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    RejectUserUseCase,
    UpdateUserUseCase,
)

__all__ = [
    # Shared
    "Clock",
    "utcnow",
    "DeleteResult",
    "ReportListResult",
    "ReportResult",
    "ServiceError",
    "ServiceErrorCode",
    "TaskListResult",
    "TaskPermissionsResult",
    "TaskResult",
    "UserListResult",
    "UserResult",
    # Reports
    "GenerateReportUseCase",
    "GetReportUseCase",
    "ListReportsUseCase",
    # Tasks
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "GetTaskPermissionsUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "UpdateTaskUseCase",
    # Users
    "ApproveUserInput",
    "ApproveUserUseCase",
    "CreateUserInput",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListAssignableUsersUseCase",
    "ListPendingUsersUseCase",
    "ListTeamUseCase",
    "ListUsersUseCase",
    "RegisterUserUseCase",
    "RejectUserUseCase",
    "UpdateUserUseCase",
]
