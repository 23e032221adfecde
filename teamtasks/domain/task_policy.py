"""
===============================================================================
TARJETA CRC - domain/task_policy.py
===============================================================================

Módulo:
    Política de Autorización (usuarios y tareas)

Responsabilidades:
    - Definir reglas puras de acceso (sin DB, sin FastAPI).
    - Separar "policy" de "repos" (repos solo traen datos, policy decide).
    - Ser 100% testeable: funciones puras, inputs explícitos (snapshots).
    - Ser la ÚNICA fuente de permisos: la API y los casos de uso la consultan
      en lugar de comparar strings de rol por su cuenta.

Colaboradores:
    - domain.roles.UserRole
    - domain.entities.User / Task (para construir snapshots)
    - application: casos de uso de usuarios/tareas.
    - interfaces.api: expone editable_task_fields para bloquear campos en UI.

Reglas (intención):
    - super_admin puede casi todo (nunca borrarse a sí mismo).
    - manager opera sobre quienes le reportan (manager_id == actor).
    - supervisor opera sobre sus miembros (supervisor_id == actor).
    - member solo opera sobre lo que tiene asignado.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Union
from uuid import UUID

from .entities import Task, User, UserStatus
from .roles import UserRole


class Action(str, Enum):
    """Acciones sujetas a autorización."""

    VIEW_USER = "view_user"
    APPROVE_USER = "approve_user"
    REJECT_USER = "reject_user"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    CHANGE_HIERARCHY = "change_hierarchy"
    DELETE_USER = "delete_user"

    VIEW_TASK = "view_task"
    CREATE_TASK = "create_task"
    EDIT_TASK_DETAILS = "edit_task_details"
    EDIT_TASK_ASSIGNEE = "edit_task_assignee"
    EDIT_TASK_STATUS = "edit_task_status"
    DELETE_TASK = "delete_task"


@dataclass(frozen=True, slots=True)
class UserSnapshot:
    """Copia inmutable de los datos de un usuario relevantes para la policy."""

    user_id: UUID
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserSnapshot":
        return cls(
            user_id=user.id,
            role=user.role,
            status=user.status,
            supervisor_id=user.supervisor_id,
            manager_id=user.manager_id,
        )


@dataclass(frozen=True, slots=True)
class TaskSnapshot:
    """Copia inmutable de una tarea + snapshot de su asignado actual."""

    task_id: UUID
    creator_id: UUID | None
    assignee: UserSnapshot | None

    @classmethod
    def from_task(cls, task: Task, assignee: User | None) -> "TaskSnapshot":
        return cls(
            task_id=task.id,
            creator_id=task.creator_id,
            assignee=UserSnapshot.from_user(assignee) if assignee else None,
        )


PolicyTarget = Union[UserSnapshot, TaskSnapshot]

# -----------------------------------------------------------------------------
# Campos de tarea -> acción requerida para modificarlos
# -----------------------------------------------------------------------------
DETAIL_FIELDS: Final[frozenset[str]] = frozenset(
    {"title", "description", "target_date"}
)
ASSIGNEE_FIELDS: Final[frozenset[str]] = frozenset({"assignee_id"})
STATUS_FIELDS: Final[frozenset[str]] = frozenset({"status", "remarks"})

TASK_FIELD_ACTIONS: Final[dict[str, Action]] = {
    **{name: Action.EDIT_TASK_DETAILS for name in DETAIL_FIELDS},
    **{name: Action.EDIT_TASK_ASSIGNEE for name in ASSIGNEE_FIELDS},
    **{name: Action.EDIT_TASK_STATUS for name in STATUS_FIELDS},
}


# =============================================================================
# Helpers puros
# =============================================================================


def _is_super_admin(actor: UserSnapshot) -> bool:
    return actor.role == UserRole.SUPER_ADMIN


def _reports_to(actor: UserSnapshot, target: UserSnapshot | None) -> bool:
    """True si target es supervisado o gestionado directamente por actor."""
    if target is None:
        return False
    return actor.user_id in (target.supervisor_id, target.manager_id)


def in_reporting_set(actor: UserSnapshot, target: UserSnapshot) -> bool:
    """
    Conjunto "hacia abajo" del actor (a quién puede asignar tareas).

    - super_admin: cualquier usuario.
    - manager: quienes tienen manager_id == actor.
    - supervisor: él mismo y quienes tienen supervisor_id == actor.
    - member: nadie.
    """
    if actor.role == UserRole.SUPER_ADMIN:
        return True
    if actor.role == UserRole.MANAGER:
        return target.manager_id == actor.user_id
    if actor.role == UserRole.SUPERVISOR:
        return (
            target.user_id == actor.user_id or target.supervisor_id == actor.user_id
        )
    return False


def _can_view_user(actor: UserSnapshot, target: UserSnapshot) -> bool:
    if target.status != UserStatus.ACTIVE:
        return False
    if actor.role == UserRole.SUPER_ADMIN:
        return True
    if actor.role == UserRole.MANAGER:
        return target.manager_id == actor.user_id
    if actor.role == UserRole.SUPERVISOR:
        return target.supervisor_id == actor.user_id
    return False


def _can_create_user(actor: UserSnapshot, target: UserSnapshot) -> bool:
    if _is_super_admin(actor):
        return True
    if actor.role != UserRole.MANAGER:
        return False
    return (
        target.role in (UserRole.SUPERVISOR, UserRole.MEMBER)
        and target.manager_id == actor.user_id
    )


def _can_edit_assignee(actor: UserSnapshot, task: TaskSnapshot) -> bool:
    if _is_super_admin(actor) or task.creator_id == actor.user_id:
        return True
    if actor.role == UserRole.MEMBER:
        return False

    assignee = task.assignee
    is_assignee = assignee is not None and assignee.user_id == actor.user_id

    if actor.role == UserRole.SUPERVISOR:
        return is_assignee

    if actor.role == UserRole.MANAGER:
        return is_assignee or (
            assignee is not None and assignee.manager_id == actor.user_id
        )

    return False


def _can_edit_status(actor: UserSnapshot, task: TaskSnapshot) -> bool:
    if _is_super_admin(actor):
        return True
    assignee = task.assignee
    if assignee is not None and assignee.user_id == actor.user_id:
        return True
    return _reports_to(actor, assignee)


def _can_view_task(actor: UserSnapshot, task: TaskSnapshot) -> bool:
    if _is_super_admin(actor) or task.creator_id == actor.user_id:
        return True
    return _can_edit_status(actor, task)


# =============================================================================
# API pública
# =============================================================================


def can_perform(actor: UserSnapshot | None, action: Action, target: PolicyTarget) -> bool:
    """
    Decide si actor puede ejecutar action sobre target.

    Función total: para cualquier combinación devuelve bool (nunca lanza) y
    no tiene efectos colaterales. Mismos snapshots => mismo resultado.
    """
    if actor is None or actor.status != UserStatus.ACTIVE:
        return False

    if isinstance(target, UserSnapshot):
        return _decide_user_action(actor, action, target)
    if isinstance(target, TaskSnapshot):
        return _decide_task_action(actor, action, target)
    return False


def _decide_user_action(
    actor: UserSnapshot, action: Action, target: UserSnapshot
) -> bool:
    if action == Action.VIEW_USER:
        return _can_view_user(actor, target)

    if action in (Action.APPROVE_USER, Action.REJECT_USER):
        return _is_super_admin(actor)

    if action == Action.CREATE_USER:
        return _can_create_user(actor, target)

    if action == Action.UPDATE_USER:
        return _is_super_admin(actor) or target.user_id == actor.user_id

    if action in (Action.CHANGE_HIERARCHY, Action.DELETE_USER):
        return _is_super_admin(actor) and target.user_id != actor.user_id

    if action == Action.CREATE_TASK:
        return target.status == UserStatus.ACTIVE and in_reporting_set(actor, target)

    return False


def _decide_task_action(
    actor: UserSnapshot, action: Action, task: TaskSnapshot
) -> bool:
    if action == Action.VIEW_TASK:
        return _can_view_task(actor, task)

    if action in (Action.EDIT_TASK_DETAILS, Action.DELETE_TASK):
        return _is_super_admin(actor) or task.creator_id == actor.user_id

    if action == Action.EDIT_TASK_ASSIGNEE:
        return _can_edit_assignee(actor, task)

    if action == Action.EDIT_TASK_STATUS:
        return _can_edit_status(actor, task)

    return False


def required_actions_for_fields(fields: Iterable[str]) -> set[Action]:
    """Acciones necesarias para modificar los campos dados (ignora desconocidos)."""
    return {TASK_FIELD_ACTIONS[name] for name in fields if name in TASK_FIELD_ACTIONS}


def editable_task_fields(
    actor: UserSnapshot | None, task: TaskSnapshot
) -> frozenset[str]:
    """Campos de la tarea que el actor puede modificar (para bloquear el form)."""
    return frozenset(
        name
        for name, action in TASK_FIELD_ACTIONS.items()
        if can_perform(actor, action, task)
    )
