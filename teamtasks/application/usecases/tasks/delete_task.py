"""
===============================================================================
USE CASE: Delete Task
===============================================================================

Business Goal:
    Borrado explícito de una tarea: solo su creador o super_admin.

Error Mapping:
    - NOT_FOUND: tarea inexistente.
    - FORBIDDEN: actor sin delete_task.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import Action, UserSnapshot
from ..results import DeleteResult
from .task_access import resolve_task


class DeleteTaskUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(self, task_id: UUID, actor: UserSnapshot | None) -> DeleteResult:
        _, _, error = resolve_task(
            task_id=task_id,
            actor=actor,
            action=Action.DELETE_TASK,
            tasks=self._tasks,
            users=self._users,
        )
        if error is not None:
            return DeleteResult(error=error)

        deleted = self._tasks.delete_task(task_id)
        logger.info(
            "task deleted",
            extra={"task_id": str(task_id), "actor_id": str(actor.user_id)},
        )
        return DeleteResult(deleted=deleted)
