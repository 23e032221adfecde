"""
===============================================================================
TARJETA CRC - domain/value_objects.py
===============================================================================

Contenido:
    - UserRef: referencia explícita a un usuario (vínculos jerárquicos)
    - TaskFilter: filtro de listados de tareas

Notas:
    - frozen + slots: se comparan por valor y se pueden compartir.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .entities import Task, TaskStatus, User
from .roles import UserRole


@dataclass(frozen=True, slots=True)
class UserRef:
    """
    Referencia resuelta a otro usuario.

    Los vínculos supervisor_id/manager_id se guardan siempre como ids; al leer
    se resuelven a UserRef. Nunca se persiste un objeto embebido.
    """

    id: UUID
    name: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "UserRef":
        return cls(id=user.id, name=user.name, role=user.role)


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """Filtros opcionales para listar tareas (AND entre campos)."""

    assignee_id: Optional[UUID] = None
    creator_id: Optional[UUID] = None
    status: Optional[TaskStatus] = None
    # Conjunto de asignados admitidos (filtro por equipo).
    assignee_ids: Optional[frozenset[UUID]] = None

    def matches(self, task: Task) -> bool:
        if self.assignee_ids is not None and task.assignee_id not in self.assignee_ids:
            return False
        if self.assignee_id is not None and task.assignee_id != self.assignee_id:
            return False
        if self.creator_id is not None and task.creator_id != self.creator_id:
            return False
        if self.status is not None and task.status != self.status:
            return False
        return True
