"""
===============================================================================
TARJETA CRC - schemas/tasks.py
===============================================================================

Módulo:
    Schemas HTTP para Tareas

Responsabilidades:
    - DTOs de request/response para endpoints de tareas.
    - Patch parcial: solo los campos enviados se consideran cambios candidatos.
    - Exponer permisos por campo para que la UI bloquee el formulario.

Colaboradores:
    - domain.entities.Task / TaskStatus
    - schemas.users.UserRefRes
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import Task, TaskStatus
from .....domain.value_objects import UserRef
from .users import UserRefRes


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateTaskReq(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    assignee_id: UUID
    target_date: datetime
    status: TaskStatus = TaskStatus.NOT_STARTED
    remarks: str | None = None


class UpdateTaskReq(BaseModel):
    """Patch de tarea (exclude_unset => solo campos enviados)."""

    title: str | None = None
    description: str | None = None
    target_date: datetime | None = None
    assignee_id: UUID | None = None
    status: TaskStatus | None = None
    remarks: str | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class TaskRes(BaseModel):
    id: UUID
    title: str
    description: str
    assignee_id: UUID
    creator_id: UUID | None = None
    assignee: UserRefRes | None = None
    creator: UserRefRes | None = None
    status: TaskStatus
    remarks: str | None = None
    assigned_date: datetime | None = None
    target_date: datetime
    last_updated: datetime | None = None
    completed_date: datetime | None = None

    @classmethod
    def from_task(cls, task: Task, refs: Mapping[UUID, UserRef]) -> "TaskRes":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            assignee_id=task.assignee_id,
            creator_id=task.creator_id,
            assignee=UserRefRes.from_ref(refs.get(task.assignee_id)),
            creator=UserRefRes.from_ref(refs.get(task.creator_id)),
            status=task.status,
            remarks=task.remarks,
            assigned_date=task.assigned_date,
            target_date=task.target_date,
            last_updated=task.last_updated,
            completed_date=task.completed_date,
        )


class TasksListRes(BaseModel):
    tasks: list[TaskRes]


class TaskPermissionsRes(BaseModel):
    task_id: UUID
    editable_fields: list[str]
    can_delete: bool


class DeleteTaskRes(BaseModel):
    task_id: UUID
    deleted: bool
