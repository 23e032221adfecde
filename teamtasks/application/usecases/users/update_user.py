"""
===============================================================================
USE CASE: Update User
===============================================================================

Business Goal:
    Editar un usuario existente. Dos familias de campos con reglas distintas:
      - perfil (name, avatar_url): el propio usuario o super_admin.
      - jerarquía (role, supervisor_id, manager_id): solo super_admin, nunca
        sobre sí mismo, y siempre re-validada con validate_assignment.

Why (Context / Intención):
    - Solo se autorizan los campos que efectivamente cambian: reenviar el
      mismo valor no exige permisos extra.
    - La jerarquía de un registro pendiente se asigna al aprobarlo, no acá.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateUserUseCase

Responsibilities:
    - Detectar campos cambiados.
    - Autorizar por familia (update_user / change_hierarchy).
    - Validar valores y jerarquía resultante.
    - Rechazar cambios de rol mientras otros usuarios dependan del rol actual.
    - Persistir y devolver refs resueltas.

Collaborators:
    - UserRepository: get_user, update_user
    - domain.assignment.validate_assignment / check_role_change
    - domain.task_policy.can_perform

Error Mapping:
    - NOT_FOUND: usuario inexistente.
    - FORBIDDEN: actor sin permiso para algún campo cambiado.
    - VALIDATION_ERROR: campos desconocidos / valores inválidos / jerarquía.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Final, Mapping
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.assignment import (
    INVALID_ROLE,
    check_role_change,
    validate_assignment,
)
from ....domain.repositories import UserRepository
from ....domain.roles import parse_role
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import Clock, resolve_refs, utcnow
from ..results import ServiceError, UserResult
from .validation import validate_name

PROFILE_FIELDS: Final[frozenset[str]] = frozenset({"name", "avatar_url"})
HIERARCHY_FIELDS: Final[frozenset[str]] = frozenset(
    {"role", "supervisor_id", "manager_id"}
)


class UpdateUserUseCase:
    def __init__(self, repository: UserRepository, *, clock: Clock = utcnow) -> None:
        self._users = repository
        self._clock = clock

    def execute(
        self, user_id: UUID, fields: Mapping[str, Any], actor: UserSnapshot | None
    ) -> UserResult:
        # ---------------------------------------------------------------------
        # 1) Campos conocidos.
        # ---------------------------------------------------------------------
        unknown = set(fields) - PROFILE_FIELDS - HIERARCHY_FIELDS
        if unknown:
            return self._validation_error(
                f"Unknown fields: {', '.join(sorted(unknown))}."
            )

        user = self._users.get_user(user_id)
        if user is None:
            return UserResult(error=ServiceError.not_found(f"User {user_id} not found."))

        # ---------------------------------------------------------------------
        # 2) Solo lo que cambia.
        # ---------------------------------------------------------------------
        current = {
            "name": user.name,
            "avatar_url": user.avatar_url,
            "role": user.role.value,
            "supervisor_id": user.supervisor_id,
            "manager_id": user.manager_id,
        }
        changes = {
            name: value for name, value in fields.items() if value != current[name]
        }
        if "role" in changes:
            parsed = parse_role(changes["role"])
            if parsed is None:
                return self._validation_error(INVALID_ROLE)
            if parsed == user.role:
                del changes["role"]

        if not changes:
            return UserResult(
                user=user,
                refs=resolve_refs(self._users, (user.supervisor_id, user.manager_id)),
            )

        # ---------------------------------------------------------------------
        # 3) Autorización por familia de campos.
        # ---------------------------------------------------------------------
        target = UserSnapshot.from_user(user)
        if PROFILE_FIELDS & changes.keys():
            if not can_perform(actor, Action.UPDATE_USER, target):
                return self._forbidden("Not allowed to update this user.")

        touches_hierarchy = bool(HIERARCHY_FIELDS & changes.keys())
        if touches_hierarchy:
            if not can_perform(actor, Action.CHANGE_HIERARCHY, target):
                return self._forbidden("Not allowed to change role or hierarchy.")
            if user.is_pending:
                return self._validation_error(
                    "Pending users get their role when approved."
                )

        # ---------------------------------------------------------------------
        # 4) Validar valores.
        # ---------------------------------------------------------------------
        name = user.name
        if "name" in changes:
            name, problem = validate_name(changes["name"])
            if problem:
                return self._validation_error(problem)

        role = user.role
        supervisor_id = changes.get("supervisor_id", user.supervisor_id)
        manager_id = changes.get("manager_id", user.manager_id)
        if touches_hierarchy:
            check = validate_assignment(
                changes.get("role", user.role),
                supervisor_id,
                manager_id,
                users=self._users,
                subject_id=user.id,
            )
            if not check.valid or check.role is None:
                return self._validation_error(check.error or INVALID_ROLE)
            role = check.role
            if role != user.role:
                # R: quien tenga a este usuario como supervisor/manager queda
                # colgado de un rol incorrecto.
                team = check_role_change(user.id, role, self._users.list_users())
                if not team.valid:
                    return self._validation_error(team.error or INVALID_ROLE)

        # ---------------------------------------------------------------------
        # 5) Aplicar y persistir.
        # ---------------------------------------------------------------------
        user.name = name
        if "avatar_url" in changes:
            user.avatar_url = changes["avatar_url"] or None
        if touches_hierarchy:
            user.assign_hierarchy(
                role, supervisor_id=supervisor_id, manager_id=manager_id
            )
        user.updated_at = self._clock()

        updated = self._users.update_user(user)
        if updated is None:
            return UserResult(error=ServiceError.not_found(f"User {user_id} not found."))

        logger.info(
            "user updated",
            extra={
                "user_id": str(updated.id),
                "fields": sorted(changes),
                "actor_id": str(actor.user_id),
            },
        )
        return UserResult(
            user=updated,
            refs=resolve_refs(self._users, (updated.supervisor_id, updated.manager_id)),
        )

    @staticmethod
    def _forbidden(message: str) -> UserResult:
        return UserResult(error=ServiceError.forbidden(message))

    @staticmethod
    def _validation_error(message: str) -> UserResult:
        return UserResult(error=ServiceError.validation(message))
