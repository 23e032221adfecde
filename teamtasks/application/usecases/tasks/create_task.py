"""
===============================================================================
USE CASE: Create Task
===============================================================================

Business Goal:
    Crear una tarea asignada a alguien del conjunto "hacia abajo" del actor.

Why (Context / Intención):
    - title, description, assignee y target_date son obligatorios.
    - El asignado debe existir y estar ACTIVO.
    - completed_date queda coherente con el status inicial.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateTaskUseCase

Responsibilities:
    - Validar campos obligatorios y límites de longitud.
    - Resolver asignado y consultar policy create_task.
    - Construir Task (creator = actor) y persistir.

Collaborators:
    - TaskRepository.create_task
    - UserRepository.get_user
    - domain.task_policy.can_perform

Error Mapping:
    - VALIDATION_ERROR: campos faltantes / demasiado largos / asignado inválido.
    - NOT_FOUND: asignado inexistente.
    - FORBIDDEN: actor sin permiso de asignar a ese usuario.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Task, TaskStatus
from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import Clock, ensure_aware, utcnow
from ..results import ServiceError, TaskResult
from .task_access import task_refs

DEFAULT_MAX_TITLE_CHARS = 200
DEFAULT_MAX_DESCRIPTION_CHARS = 5_000
DEFAULT_MAX_REMARKS_CHARS = 2_000


@dataclass(frozen=True)
class CreateTaskInput:
    title: str
    description: str
    assignee_id: UUID | None
    target_date: datetime | None
    status: TaskStatus | str = TaskStatus.NOT_STARTED
    remarks: str | None = None
    actor: UserSnapshot | None = None


class CreateTaskUseCase:
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

    def execute(self, input_data: CreateTaskInput) -> TaskResult:
        actor = input_data.actor
        if actor is None:
            return self._forbidden("Actor is required to create tasks.")

        # ---------------------------------------------------------------------
        # 1) Campos obligatorios.
        # ---------------------------------------------------------------------
        title = (input_data.title or "").strip()
        description = (input_data.description or "").strip()
        if not title:
            return self._validation_error("Title is required.")
        if len(title) > self._max_title:
            return self._validation_error(
                f"Title must be at most {self._max_title} characters."
            )
        if not description:
            return self._validation_error("Description is required.")
        if len(description) > self._max_description:
            return self._validation_error(
                f"Description must be at most {self._max_description} characters."
            )
        if input_data.assignee_id is None:
            return self._validation_error("Assignee is required.")
        if input_data.target_date is None:
            return self._validation_error("Target date is required.")

        remarks = (input_data.remarks or "").strip() or None
        if remarks and len(remarks) > self._max_remarks:
            return self._validation_error(
                f"Remarks must be at most {self._max_remarks} characters."
            )

        try:
            status = TaskStatus(input_data.status)
        except ValueError:
            return self._validation_error("Invalid task status.")

        # ---------------------------------------------------------------------
        # 2) Asignado existente y activo.
        # ---------------------------------------------------------------------
        assignee = self._users.get_user(input_data.assignee_id)
        if assignee is None:
            return TaskResult(
                error=ServiceError.not_found(
                    f"User {input_data.assignee_id} not found."
                )
            )
        if not assignee.is_active:
            return self._validation_error("Assignee must be an active user.")

        # ---------------------------------------------------------------------
        # 3) Autorización (conjunto "hacia abajo" del actor).
        # ---------------------------------------------------------------------
        if not can_perform(actor, Action.CREATE_TASK, UserSnapshot.from_user(assignee)):
            logger.info(
                "create_task denied",
                extra={"actor_id": str(actor.user_id), "assignee_id": str(assignee.id)},
            )
            return self._forbidden("Not allowed to assign tasks to this user.")

        # ---------------------------------------------------------------------
        # 4) Construir y persistir.
        # ---------------------------------------------------------------------
        now = self._clock()
        task = Task(
            id=uuid4(),
            title=title,
            description=description,
            assignee_id=assignee.id,
            target_date=ensure_aware(input_data.target_date),
            creator_id=actor.user_id,
            remarks=remarks,
            assigned_date=now,
        )
        task.set_status(status, at=now)
        task.touch(at=now)

        created = self._tasks.create_task(task)
        logger.info(
            "task created",
            extra={
                "task_id": str(created.id),
                "assignee_id": str(created.assignee_id),
                "actor_id": str(actor.user_id),
            },
        )
        return TaskResult(task=created, refs=task_refs(self._users, [created]))

    @staticmethod
    def _forbidden(message: str) -> TaskResult:
        return TaskResult(error=ServiceError.forbidden(message))

    @staticmethod
    def _validation_error(message: str) -> TaskResult:
        return TaskResult(error=ServiceError.validation(message))
