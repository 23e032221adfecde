"""
===============================================================================
TARJETA CRC - interfaces/api/http/routers/tasks.py
===============================================================================

Responsibilities:
    - Exponer endpoints HTTP de tareas (listado filtrado, detalle, permisos
      por campo, alta, patch, baja).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir ServiceError -> RFC7807.

Collaborators:
    - teamtasks.application.usecases.tasks
    - teamtasks.identity.auth_users.require_session
    - teamtasks.container (factories DI)
    - schemas.tasks (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskPermissionsUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    TaskResult,
    UpdateTaskUseCase,
)
from .....container import (
    get_create_task_use_case,
    get_delete_task_use_case,
    get_get_task_use_case,
    get_list_tasks_use_case,
    get_task_permissions_use_case,
    get_update_task_use_case,
)
from .....crosscutting.error_responses import internal_error
from .....domain.entities import TaskStatus
from .....domain.value_objects import TaskFilter
from .....identity.auth_users import AuthSession, require_session
from ..error_mapping import raise_service_error
from ..schemas.tasks import (
    CreateTaskReq,
    DeleteTaskRes,
    TaskPermissionsRes,
    TaskRes,
    TasksListRes,
    UpdateTaskReq,
)

router = APIRouter()


def _task_or_raise(result: TaskResult, task_id: UUID | None = None) -> TaskRes:
    if result.error is not None:
        raise_service_error(result.error, resource="Task", resource_id=task_id)
    if result.task is None:
        raise internal_error("Task result was empty.")
    return TaskRes.from_task(result.task, result.refs)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/tasks", response_model=TasksListRes, tags=["tasks"])
def list_tasks(
    assignee_id: UUID | None = Query(None),
    creator_id: UUID | None = Query(None),
    status: TaskStatus | None = Query(None),
    team_of: UUID | None = Query(
        None, description="Only tasks assigned to this user's team"
    ),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
    session: AuthSession = Depends(require_session()),
):
    task_filter = TaskFilter(
        assignee_id=assignee_id, creator_id=creator_id, status=status
    )
    result = use_case.execute(task_filter, session.actor, team_of_user=team_of)
    if result.error is not None:
        raise_service_error(result.error, resource="Task")
    return TasksListRes(tasks=[TaskRes.from_task(t, result.refs) for t in result.tasks])


@router.get("/tasks/{task_id}", response_model=TaskRes, tags=["tasks"])
def get_task(
    task_id: UUID,
    use_case: GetTaskUseCase = Depends(get_get_task_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _task_or_raise(use_case.execute(task_id, session.actor), task_id)


@router.get(
    "/tasks/{task_id}/permissions",
    response_model=TaskPermissionsRes,
    tags=["tasks"],
)
def get_task_permissions(
    task_id: UUID,
    use_case: GetTaskPermissionsUseCase = Depends(get_task_permissions_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(task_id, session.actor)
    if result.error is not None:
        raise_service_error(result.error, resource="Task", resource_id=task_id)
    return TaskPermissionsRes(
        task_id=task_id,
        editable_fields=sorted(result.editable_fields),
        can_delete=result.can_delete,
    )


@router.post("/tasks", response_model=TaskRes, status_code=201, tags=["tasks"])
def create_task(
    req: CreateTaskReq,
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(
        CreateTaskInput(
            title=req.title,
            description=req.description,
            assignee_id=req.assignee_id,
            target_date=req.target_date,
            status=req.status,
            remarks=req.remarks,
            actor=session.actor,
        )
    )
    return _task_or_raise(result)


@router.patch("/tasks/{task_id}", response_model=TaskRes, tags=["tasks"])
def update_task(
    task_id: UUID,
    req: UpdateTaskReq,
    use_case: UpdateTaskUseCase = Depends(get_update_task_use_case),
    session: AuthSession = Depends(require_session()),
):
    fields = req.model_dump(exclude_unset=True)
    return _task_or_raise(use_case.execute(task_id, fields, session.actor), task_id)


@router.delete("/tasks/{task_id}", response_model=DeleteTaskRes, tags=["tasks"])
def delete_task(
    task_id: UUID,
    use_case: DeleteTaskUseCase = Depends(get_delete_task_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(task_id, session.actor)
    if result.error is not None:
        raise_service_error(result.error, resource="Task", resource_id=task_id)
    return DeleteTaskRes(task_id=task_id, deleted=result.deleted)
