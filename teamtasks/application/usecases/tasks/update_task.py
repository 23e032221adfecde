"""
===============================================================================
USE CASE: Update Task
===============================================================================

Business Goal:
    Editar una tarea autorizando campo por campo:
      - title / description / target_date -> edit_task_details (creador)
      - assignee_id                       -> edit_task_assignee
      - status / remarks                  -> edit_task_status

Why (Context / Intención):
    - Solo se chequean los campos que efectivamente cambian: un formulario que
      reenvía todos los valores no exige permisos sobre campos bloqueados.
    - Policy antes que validación de valores: un actor sin permiso recibe
      FORBIDDEN aunque además el valor sea inválido.
    - Efecto de status sobre completed_date y avance estricto de last_updated
      viven en la entidad (Task.set_status / Task.touch).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateTaskUseCase

Responsibilities:
    - Detectar campos cambiados.
    - Autorizar cada acción requerida.
    - Validar valores (incluido el nuevo asignado).
    - Aplicar cambios y persistir.

Collaborators:
    - TaskRepository: get_task, update_task
    - UserRepository: get_user
    - domain.task_policy: required_actions_for_fields, can_perform

Error Mapping:
    - NOT_FOUND: tarea inexistente / nuevo asignado inexistente.
    - FORBIDDEN: falta alguna acción requerida.
    - VALIDATION_ERROR: campos desconocidos / vacíos / valores inválidos.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Task, TaskStatus
from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import (
    TASK_FIELD_ACTIONS,
    Action,
    UserSnapshot,
    can_perform,
    required_actions_for_fields,
)
from ..common import Clock, ensure_aware, utcnow
from ..results import ServiceError, TaskResult
from .create_task import (
    DEFAULT_MAX_DESCRIPTION_CHARS,
    DEFAULT_MAX_REMARKS_CHARS,
    DEFAULT_MAX_TITLE_CHARS,
)
from .task_access import task_refs, task_snapshot


def _normalize(name: str, value: Any) -> Any:
    """Normaliza un valor entrante para compararlo con el actual."""
    if name in ("title", "description"):
        return (value or "").strip()
    if name == "remarks":
        return (value or "").strip() or None
    if name == "target_date" and isinstance(value, datetime):
        return ensure_aware(value)
    if name == "status" and value is not None:
        try:
            return TaskStatus(value)
        except ValueError:
            return value
    return value


class UpdateTaskUseCase:
    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        *,
        clock: Clock = utcnow,
        max_title_chars: int = DEFAULT_MAX_TITLE_CHARS,
        max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS,
        max_remarks_chars: int = DEFAULT_MAX_REMARKS_CHARS,
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository
        self._clock = clock
        self._max_title = max_title_chars
        self._max_description = max_description_chars
        self._max_remarks = max_remarks_chars

    def execute(
        self, task_id: UUID, fields: Mapping[str, Any], actor: UserSnapshot | None
    ) -> TaskResult:
        # ---------------------------------------------------------------------
        # 1) Campos conocidos.
        # ---------------------------------------------------------------------
        if not fields:
            return self._validation_error("No fields to update.")
        unknown = set(fields) - TASK_FIELD_ACTIONS.keys()
        if unknown:
            return self._validation_error(
                f"Unknown fields: {', '.join(sorted(unknown))}."
            )

        task = self._tasks.get_task(task_id)
        if task is None:
            return TaskResult(error=ServiceError.not_found(f"Task {task_id} not found."))

        snapshot = task_snapshot(task, self._users)
        if not can_perform(actor, Action.VIEW_TASK, snapshot):
            return self._forbidden("Access denied.")

        # ---------------------------------------------------------------------
        # 2) Solo lo que cambia.
        # ---------------------------------------------------------------------
        changes: Dict[str, Any] = {}
        for name, raw in fields.items():
            value = _normalize(name, raw)
            if value != getattr(task, name):
                changes[name] = value

        if not changes:
            return TaskResult(task=task, refs=task_refs(self._users, [task]))

        # ---------------------------------------------------------------------
        # 3) Autorización por acción requerida.
        # ---------------------------------------------------------------------
        required = sorted(required_actions_for_fields(changes), key=lambda a: a.value)
        for action in required:
            if not can_perform(actor, action, snapshot):
                logger.info(
                    "update_task denied",
                    extra={
                        "task_id": str(task_id),
                        "action": action.value,
                        "actor_id": str(actor.user_id),
                    },
                )
                blocked = ", ".join(self._fields_for(action, changes))
                return self._forbidden(f"Not allowed to change: {blocked}.")

        # ---------------------------------------------------------------------
        # 4) Validar valores.
        # ---------------------------------------------------------------------
        problem = self._validate_values(changes, actor)
        if problem is not None:
            return TaskResult(error=problem)

        # ---------------------------------------------------------------------
        # 5) Aplicar y persistir.
        # ---------------------------------------------------------------------
        now = self._clock()
        self._apply(task, changes, now)

        updated = self._tasks.update_task(task)
        if updated is None:
            return TaskResult(error=ServiceError.not_found(f"Task {task_id} not found."))

        logger.info(
            "task updated",
            extra={
                "task_id": str(updated.id),
                "fields": sorted(changes),
                "actor_id": str(actor.user_id),
            },
        )
        return TaskResult(task=updated, refs=task_refs(self._users, [updated]))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _validate_values(
        self, changes: Mapping[str, Any], actor: UserSnapshot
    ) -> ServiceError | None:
        if "title" in changes:
            if not changes["title"]:
                return ServiceError.validation("Title is required.")
            if len(changes["title"]) > self._max_title:
                return ServiceError.validation(
                    f"Title must be at most {self._max_title} characters."
                )
        if "description" in changes:
            if not changes["description"]:
                return ServiceError.validation("Description is required.")
            if len(changes["description"]) > self._max_description:
                return ServiceError.validation(
                    f"Description must be at most {self._max_description} characters."
                )
        if "target_date" in changes and not isinstance(changes["target_date"], datetime):
            return ServiceError.validation("Target date is required.")
        if "remarks" in changes and changes["remarks"]:
            if len(changes["remarks"]) > self._max_remarks:
                return ServiceError.validation(
                    f"Remarks must be at most {self._max_remarks} characters."
                )
        if "status" in changes and not isinstance(changes["status"], TaskStatus):
            return ServiceError.validation("Invalid task status.")
        if "assignee_id" in changes:
            return self._validate_assignee(changes["assignee_id"], actor)
        return None

    def _validate_assignee(
        self, assignee_id: UUID | None, actor: UserSnapshot
    ) -> ServiceError | None:
        if assignee_id is None:
            return ServiceError.validation("Assignee is required.")
        assignee = self._users.get_user(assignee_id)
        if assignee is None:
            return ServiceError.not_found(f"User {assignee_id} not found.")
        if not assignee.is_active:
            return ServiceError.validation("Assignee must be an active user.")
        if not can_perform(actor, Action.CREATE_TASK, UserSnapshot.from_user(assignee)):
            return ServiceError.forbidden("Not allowed to assign tasks to this user.")
        return None

    def _apply(self, task: Task, changes: Mapping[str, Any], now: datetime) -> None:
        for name in ("title", "description", "target_date", "assignee_id", "remarks"):
            if name in changes:
                setattr(task, name, changes[name])
        if "assignee_id" in changes:
            task.assigned_date = now
        if "status" in changes:
            task.set_status(changes["status"], at=now)
        task.touch(at=now)

    @staticmethod
    def _fields_for(action: Action, changes: Mapping[str, Any]) -> list[str]:
        return sorted(name for name in changes if TASK_FIELD_ACTIONS[name] == action)

    @staticmethod
    def _forbidden(message: str) -> TaskResult:
        return TaskResult(error=ServiceError.forbidden(message))

    @staticmethod
    def _validation_error(message: str) -> TaskResult:
        return TaskResult(error=ServiceError.validation(message))
