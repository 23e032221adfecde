"""
===============================================================================
USE CASE: Delete User
===============================================================================

Business Goal:
    Baja definitiva de un usuario. Solo super_admin, y nunca sobre sí mismo.

Notes:
    - supervisor_id/manager_id de otros usuarios y assignee_id de tareas son
      referencias débiles: si apuntan al usuario borrado, se resuelven a null
      al leer.

Error Mapping:
    - NOT_FOUND: usuario inexistente.
    - FORBIDDEN: actor sin permiso o intento de auto-borrado.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..results import DeleteResult, ServiceError


class DeleteUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID, actor: UserSnapshot | None) -> DeleteResult:
        user = self._users.get_user(user_id)
        if user is None:
            return DeleteResult(
                error=ServiceError.not_found(f"User {user_id} not found.")
            )

        if actor is not None and actor.user_id == user_id:
            return DeleteResult(
                error=ServiceError.forbidden("You cannot delete your own account.")
            )

        if not can_perform(actor, Action.DELETE_USER, UserSnapshot.from_user(user)):
            return DeleteResult(
                error=ServiceError.forbidden("Not allowed to delete users.")
            )

        deleted = self._users.delete_user(user_id)
        logger.info(
            "user deleted",
            extra={"user_id": str(user_id), "actor_id": str(actor.user_id)},
        )
        return DeleteResult(deleted=deleted)
