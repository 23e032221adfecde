"""
===============================================================================
USE CASE: Reject User
===============================================================================

Business Goal:
    Descartar un registro pendiente: se elimina el registro y se deja
    constancia del motivo en logs.

Error Mapping:
    - NOT_FOUND: usuario inexistente.
    - FORBIDDEN: actor sin permiso (reject_user).
    - VALIDATION_ERROR: el usuario no está pendiente.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..results import DeleteResult, ServiceError


class RejectUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(
        self, user_id: UUID, reason: str | None, actor: UserSnapshot | None
    ) -> DeleteResult:
        user = self._users.get_user(user_id)
        if user is None:
            return DeleteResult(
                error=ServiceError.not_found(f"User {user_id} not found.")
            )

        if not can_perform(actor, Action.REJECT_USER, UserSnapshot.from_user(user)):
            return DeleteResult(
                error=ServiceError.forbidden("Not allowed to reject users.")
            )

        if not user.is_pending:
            return DeleteResult(
                error=ServiceError.validation("User is not pending approval.")
            )

        deleted = self._users.delete_user(user_id)
        logger.info(
            "registration rejected",
            extra={
                "user_id": str(user_id),
                "actor_id": str(actor.user_id),
                "reason": (reason or "").strip() or None,
            },
        )
        return DeleteResult(deleted=deleted)
