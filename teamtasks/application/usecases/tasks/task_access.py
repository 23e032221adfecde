"""
===============================================================================
TASK ACCESS HELPERS (Snapshot / Resolution)
===============================================================================

Business Goal:
    Centralizar la carga de una tarea junto con el snapshot de su asignado,
    para que todos los casos de uso de tareas consulten la policy con los
    mismos datos.

Why (Context / Intención):
    - La policy de tareas depende del asignado actual (supervisor/manager del
      asignado). Resolverlo en un único lugar evita drift entre use cases.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    task_access helpers (module-level functions)

Responsibilities:
    - Construir TaskSnapshot (tarea + asignado).
    - Resolver tarea para una acción: (Task | None, TaskSnapshot | None,
      ServiceError | None).
    - Resolver refs (creador / asignado) para respuestas.

Collaborators:
    - TaskRepository.get_task
    - UserRepository.get_user
    - domain.task_policy.can_perform
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Final, Iterable, Tuple
from uuid import UUID

from ....domain.entities import Task
from ....domain.repositories import TaskRepository, UserRepository
from ....domain.task_policy import Action, TaskSnapshot, UserSnapshot, can_perform
from ....domain.value_objects import UserRef
from ..common import resolve_refs
from ..results import ServiceError

_MSG_FORBIDDEN: Final[str] = "Access denied."


def task_snapshot(task: Task, users: UserRepository) -> TaskSnapshot:
    """Snapshot de la tarea con su asignado actual (None si fue borrado)."""
    return TaskSnapshot.from_task(task, users.get_user(task.assignee_id))


def resolve_task(
    *,
    task_id: UUID,
    actor: UserSnapshot | None,
    action: Action,
    tasks: TaskRepository,
    users: UserRepository,
) -> Tuple[Task | None, TaskSnapshot | None, ServiceError | None]:
    """
    Carga la tarea y aplica la policy para `action`.

    Retorna:
      - (task, snapshot, None) si existe y hay permiso
      - (None, None, ServiceError) si no existe / forbidden
    """
    task = tasks.get_task(task_id)
    if task is None:
        return None, None, ServiceError.not_found(f"Task {task_id} not found.")

    snapshot = task_snapshot(task, users)
    if not can_perform(actor, action, snapshot):
        return None, None, ServiceError.forbidden(_MSG_FORBIDDEN)

    return task, snapshot, None


def task_refs(users: UserRepository, items: Iterable[Task]) -> Dict[UUID, UserRef]:
    """Refs de creador y asignado de cada tarea."""
    ids = []
    for task in items:
        ids.extend((task.assignee_id, task.creator_id))
    return resolve_refs(users, ids)
