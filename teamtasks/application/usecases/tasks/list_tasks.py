"""
===============================================================================
USE CASE: List Tasks
===============================================================================

Business Goal:
    Listar tareas aplicando filtros opcionales (asignado, creador, status) y
    restringiendo el resultado a lo que el actor puede ver (view_task).
    Con team_of, solo tareas asignadas al equipo de ese usuario (mismas
    reglas de acceso que ListTeamUseCase).

Notes:
    - Orden: last_updated desc (lo provee el repositorio).
    - Los asignados se resuelven una sola vez por id (cache local).
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import User
from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import Action, TaskSnapshot, UserSnapshot, can_perform
from ....domain.value_objects import TaskFilter
from ..results import ServiceError, TaskListResult
from ..users.team import can_view_team, team_of
from .task_access import task_refs


class ListTasksUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(
        self,
        task_filter: TaskFilter | None,
        actor: UserSnapshot | None,
        *,
        team_of_user: UUID | None = None,
    ) -> TaskListResult:
        if actor is None:
            return TaskListResult(
                error=ServiceError.forbidden("Actor is required to list tasks.")
            )

        task_filter = task_filter or TaskFilter()
        if team_of_user is not None:
            lead = self._users.get_user(team_of_user)
            if lead is None:
                return TaskListResult(
                    error=ServiceError.not_found(f"User {team_of_user} not found.")
                )
            if not can_view_team(actor, lead):
                return TaskListResult(
                    error=ServiceError.forbidden("Not allowed to view this team.")
                )
            members = frozenset(u.id for u in team_of(self._users, lead))
            task_filter = replace(task_filter, assignee_ids=members)

        assignees: Dict[UUID, Optional[User]] = {}

        def assignee_of(user_id: UUID) -> Optional[User]:
            if user_id not in assignees:
                assignees[user_id] = self._users.get_user(user_id)
            return assignees[user_id]

        visible = [
            task
            for task in self._tasks.list_tasks(task_filter)
            if can_perform(
                actor,
                Action.VIEW_TASK,
                TaskSnapshot.from_task(task, assignee_of(task.assignee_id)),
            )
        ]
        return TaskListResult(tasks=visible, refs=task_refs(self._users, visible))
