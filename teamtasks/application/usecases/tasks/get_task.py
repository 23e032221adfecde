"""
===============================================================================
USE CASES: Get Task / Get Task Permissions
===============================================================================

Business Goal:
    - Leer una tarea visible para el actor (policy view_task).
    - Informar qué campos puede editar el actor y si puede borrarla, para que
      la UI bloquee el formulario con la misma policy que aplica el backend.

Error Mapping:
    - NOT_FOUND: tarea inexistente.
    - FORBIDDEN: actor sin view_task.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import (
    Action,
    UserSnapshot,
    can_perform,
    editable_task_fields,
)
from ..results import TaskPermissionsResult, TaskResult
from .task_access import resolve_task, task_refs


class GetTaskUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(self, task_id: UUID, actor: UserSnapshot | None) -> TaskResult:
        task, _, error = resolve_task(
            task_id=task_id,
            actor=actor,
            action=Action.VIEW_TASK,
            tasks=self._tasks,
            users=self._users,
        )
        if error is not None:
            return TaskResult(error=error)
        return TaskResult(task=task, refs=task_refs(self._users, [task]))


class GetTaskPermissionsUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(
        self, task_id: UUID, actor: UserSnapshot | None
    ) -> TaskPermissionsResult:
        _, snapshot, error = resolve_task(
            task_id=task_id,
            actor=actor,
            action=Action.VIEW_TASK,
            tasks=self._tasks,
            users=self._users,
        )
        if error is not None:
            return TaskPermissionsResult(error=error)

        return TaskPermissionsResult(
            task_id=task_id,
            editable_fields=editable_task_fields(actor, snapshot),
            can_delete=can_perform(actor, Action.DELETE_TASK, snapshot),
        )
