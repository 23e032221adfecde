"""
===============================================================================
USE CASE: Approve User
===============================================================================

Business Goal:
    Convertir un registro PENDING_APPROVAL en usuario ACTIVO asignando, en el
    mismo paso, rol y vínculos jerárquicos.

Why (Context / Intención):
    - La aprobación es el ÚNICO camino de pending -> active.
    - La jerarquía se valida antes de escribir: un miembro sin supervisor o
      manager nunca queda activo.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ApproveUserUseCase

Responsibilities:
    - Resolver el registro pendiente.
    - Consultar policy approve_user.
    - Validar asignación (validate_assignment).
    - Activar (approved_at / approved_by) y persistir.

Collaborators:
    - UserRepository: get_user, update_user
    - domain.assignment, domain.task_policy

Error Mapping:
    - NOT_FOUND: usuario inexistente.
    - FORBIDDEN: actor sin permiso de aprobación.
    - VALIDATION_ERROR: usuario no pendiente / jerarquía inválida.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.assignment import INVALID_ROLE, validate_assignment
from ....domain.repositories import UserRepository
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import Clock, resolve_refs, utcnow
from ..results import ServiceError, UserResult


@dataclass(frozen=True)
class ApproveUserInput:
    user_id: UUID
    role: str
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None
    actor: UserSnapshot | None = None


class ApproveUserUseCase:
    def __init__(self, repository: UserRepository, *, clock: Clock = utcnow) -> None:
        self._users = repository
        self._clock = clock

    def execute(self, input_data: ApproveUserInput) -> UserResult:
        # ---------------------------------------------------------------------
        # 1) Resolver usuario.
        # ---------------------------------------------------------------------
        user = self._users.get_user(input_data.user_id)
        if user is None:
            return self._not_found(input_data.user_id)

        # ---------------------------------------------------------------------
        # 2) Autorización.
        # ---------------------------------------------------------------------
        actor = input_data.actor
        if not can_perform(actor, Action.APPROVE_USER, UserSnapshot.from_user(user)):
            return self._forbidden("Not allowed to approve users.")

        # ---------------------------------------------------------------------
        # 3) Solo registros pendientes.
        # ---------------------------------------------------------------------
        if not user.is_pending:
            return self._validation_error("User is not pending approval.")

        # ---------------------------------------------------------------------
        # 4) Validar jerarquía.
        # ---------------------------------------------------------------------
        check = validate_assignment(
            input_data.role,
            input_data.supervisor_id,
            input_data.manager_id,
            users=self._users,
            subject_id=user.id,
        )
        if not check.valid or check.role is None:
            return self._validation_error(check.error or INVALID_ROLE)

        # ---------------------------------------------------------------------
        # 5) Activar y persistir.
        # ---------------------------------------------------------------------
        user.assign_hierarchy(
            check.role,
            supervisor_id=input_data.supervisor_id,
            manager_id=input_data.manager_id,
        )
        user.activate(approved_by=actor.user_id, at=self._clock())

        updated = self._users.update_user(user)
        if updated is None:
            return self._not_found(input_data.user_id)

        logger.info(
            "user approved",
            extra={
                "user_id": str(updated.id),
                "role": updated.role.value,
                "actor_id": str(actor.user_id),
            },
        )
        return UserResult(
            user=updated,
            refs=resolve_refs(self._users, (updated.supervisor_id, updated.manager_id)),
        )

    @staticmethod
    def _not_found(user_id: UUID) -> UserResult:
        return UserResult(error=ServiceError.not_found(f"User {user_id} not found."))

    @staticmethod
    def _forbidden(message: str) -> UserResult:
        return UserResult(error=ServiceError.forbidden(message))

    @staticmethod
    def _validation_error(message: str) -> UserResult:
        return UserResult(error=ServiceError.validation(message))
