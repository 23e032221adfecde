"""
===============================================================================
USE CASE: Get User
===============================================================================

Business Goal:
    Obtener un usuario por id con sus vínculos resueltos (UserRef).

Authorization:
    - El propio usuario.
    - Quien pueda view_user sobre el target (roster del actor).
    - Los superiores directos del actor (un miembro ve a su supervisor y
      a su manager).
    - super_admin: también usuarios pendientes (para revisar registros).

Error Mapping:
    - NOT_FOUND: id inexistente.
    - FORBIDDEN: fuera de las reglas anteriores.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import resolve_refs
from ..results import ServiceError, UserResult


class GetUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID, actor: UserSnapshot | None) -> UserResult:
        user = self._users.get_user(user_id)
        if user is None:
            return UserResult(error=ServiceError.not_found(f"User {user_id} not found."))

        if actor is None:
            return UserResult(error=ServiceError.forbidden("Actor is required."))

        target = UserSnapshot.from_user(user)
        allowed = (
            actor.user_id == user.id
            or user.id in (actor.supervisor_id, actor.manager_id)
            or can_perform(actor, Action.VIEW_USER, target)
            or (user.is_pending and can_perform(actor, Action.APPROVE_USER, target))
        )
        if not allowed:
            return UserResult(
                error=ServiceError.forbidden("Not allowed to view this user.")
            )

        return UserResult(
            user=user,
            refs=resolve_refs(self._users, (user.supervisor_id, user.manager_id)),
        )
