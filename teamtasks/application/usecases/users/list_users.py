"""
===============================================================================
USE CASES: List Users (roster / pending / assignable)
===============================================================================

Business Goal:
    Listar usuarios según lo que el actor puede ver, sin re-derivar permisos:
      - Roster: usuarios activos visibles (policy view_user).
      - Pending: registros esperando aprobación (policy approve_user).
      - Assignable: usuarios activos a quienes el actor puede asignar tareas
        (policy create_task).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    ListUsersUseCase, ListPendingUsersUseCase, ListAssignableUsersUseCase

Responsibilities:
    - Traer candidatos del repositorio (filtro por status).
    - Filtrar con task_policy.can_perform (única fuente de permisos).
    - Resolver refs de supervisor/manager para la respuesta.

Collaborators:
    - UserRepository.list_users
    - domain.task_policy
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import UserStatus
from ....domain.repositories import UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import hierarchy_ids, resolve_refs
from ..results import ServiceError, UserListResult


class ListUsersUseCase:
    """Roster: super_admin ve todos; manager/supervisor su equipo directo."""

    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, actor: UserSnapshot | None) -> UserListResult:
        if actor is None:
            return UserListResult(error=ServiceError.forbidden("Actor is required."))

        candidates = self._users.list_users(status=UserStatus.ACTIVE)
        visible = [
            u
            for u in candidates
            if can_perform(actor, Action.VIEW_USER, UserSnapshot.from_user(u))
        ]
        return UserListResult(
            users=visible, refs=resolve_refs(self._users, hierarchy_ids(visible))
        )


class ListPendingUsersUseCase:
    """Registros pendientes de aprobación (solo quien puede aprobar)."""

    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, actor: UserSnapshot | None) -> UserListResult:
        if actor is None:
            return UserListResult(error=ServiceError.forbidden("Actor is required."))

        # R: la policy no depende del target para approve_user; se evalúa
        # contra el propio actor para decidir acceso al listado completo.
        if not can_perform(actor, Action.APPROVE_USER, actor):
            return UserListResult(
                error=ServiceError.forbidden("Not allowed to review registrations.")
            )

        pending = self._users.list_users(status=UserStatus.PENDING_APPROVAL)
        return UserListResult(users=pending)


class ListAssignableUsersUseCase:
    """Usuarios activos dentro del conjunto de reporte del actor."""

    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, actor: UserSnapshot | None) -> UserListResult:
        if actor is None:
            return UserListResult(error=ServiceError.forbidden("Actor is required."))

        candidates = self._users.list_users(status=UserStatus.ACTIVE)
        assignable = [
            u
            for u in candidates
            if can_perform(actor, Action.CREATE_TASK, UserSnapshot.from_user(u))
        ]
        return UserListResult(
            users=assignable,
            refs=resolve_refs(self._users, hierarchy_ids(assignable)),
        )
