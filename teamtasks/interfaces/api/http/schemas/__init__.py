"""HTTP DTOs (Pydantic v2) by feature: users, tasks, reports."""

from .reports import GenerateReportReq, ReportRes, ReportsListRes
from .tasks import (
    CreateTaskReq,
    DeleteTaskRes,
    TaskPermissionsRes,
    TaskRes,
    TasksListRes,
    UpdateTaskReq,
)
from .users import (
    ApproveUserReq,
    CreateUserReq,
    DeleteUserRes,
    RejectUserReq,
    UpdateUserReq,
    UserRefRes,
    UserRes,
    UsersListRes,
)

__all__ = [
    "ApproveUserReq",
    "CreateTaskReq",
    "CreateUserReq",
    "DeleteTaskRes",
    "DeleteUserRes",
    "GenerateReportReq",
    "RejectUserReq",
    "ReportRes",
    "ReportsListRes",
    "TaskPermissionsRes",
    "TaskRes",
    "TasksListRes",
    "UpdateTaskReq",
    "UpdateUserReq",
    "UserRefRes",
    "UserRes",
    "UsersListRes",
]
