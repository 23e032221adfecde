"""
===============================================================================
USE CASE: Create User (alta directa)
===============================================================================

Business Goal:
    Crear un usuario ya ACTIVO (sin pasar por aprobación), garantizando:
      - actor autorizado (policy create_user)
      - email único
      - jerarquía bien formada (validate_assignment)

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Normalizar y validar campos básicos (name, email, password, role).
    - Consultar policy con un snapshot del usuario a crear.
    - Verificar unicidad de email.
    - Validar la asignación jerárquica.
    - Hashear password y persistir.

Collaborators:
    - UserRepository: get_user_by_email, get_user, create_user
    - domain.assignment.validate_assignment
    - domain.task_policy.can_perform
    - password_hasher: Callable[[str], str] (argon2 en runtime)

Error Mapping:
    - FORBIDDEN: actor ausente o sin permiso.
    - VALIDATION_ERROR: campos inválidos / jerarquía mal formada.
    - CONFLICT: email ya registrado.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.assignment import INVALID_ROLE, validate_assignment
from ....domain.entities import User, UserStatus
from ....domain.repositories import UserRepository
from ....domain.roles import parse_role
from ....domain.task_policy import Action, UserSnapshot, can_perform
from ..common import Clock, resolve_refs, utcnow
from ..results import ServiceError, UserResult
from .validation import validate_profile


@dataclass(frozen=True)
class CreateUserInput:
    name: str
    email: str
    password: str
    role: str
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None
    avatar_url: str | None = None
    actor: UserSnapshot | None = None


class CreateUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        *,
        password_hasher: Callable[[str], str],
        clock: Clock = utcnow,
    ) -> None:
        self._users = repository
        self._hash_password = password_hasher
        self._clock = clock

    def execute(self, input_data: CreateUserInput) -> UserResult:
        actor = input_data.actor
        if actor is None:
            return self._forbidden("Actor is required to create users.")

        # ---------------------------------------------------------------------
        # 1) Validar campos básicos.
        # ---------------------------------------------------------------------
        name, email, problem = validate_profile(
            input_data.name, input_data.email, input_data.password
        )
        if problem:
            return self._validation_error(problem)

        role = parse_role(input_data.role)
        if role is None:
            return self._validation_error(INVALID_ROLE)

        # ---------------------------------------------------------------------
        # 2) Autorización sobre el usuario propuesto.
        # ---------------------------------------------------------------------
        new_id = uuid4()
        proposed = UserSnapshot(
            user_id=new_id,
            role=role,
            status=UserStatus.ACTIVE,
            supervisor_id=input_data.supervisor_id,
            manager_id=input_data.manager_id,
        )
        if not can_perform(actor, Action.CREATE_USER, proposed):
            logger.info(
                "create_user denied",
                extra={"actor_id": str(actor.user_id), "role": role.value},
            )
            return self._forbidden("Not allowed to create this user.")

        # ---------------------------------------------------------------------
        # 3) Unicidad de email.
        # ---------------------------------------------------------------------
        if self._users.get_user_by_email(email) is not None:
            return UserResult(error=ServiceError.conflict("User already exists."))

        # ---------------------------------------------------------------------
        # 4) Jerarquía bien formada.
        # ---------------------------------------------------------------------
        check = validate_assignment(
            role,
            input_data.supervisor_id,
            input_data.manager_id,
            users=self._users,
            subject_id=new_id,
        )
        if not check.valid:
            return self._validation_error(check.error or INVALID_ROLE)

        # ---------------------------------------------------------------------
        # 5) Construir y persistir.
        # ---------------------------------------------------------------------
        now = self._clock()
        user = User(
            id=new_id,
            name=name,
            email=email,
            password_hash=self._hash_password(input_data.password),
            avatar_url=input_data.avatar_url,
            created_at=now,
            updated_at=now,
        )
        user.assign_hierarchy(
            role,
            supervisor_id=input_data.supervisor_id,
            manager_id=input_data.manager_id,
        )
        user.activate(approved_by=actor.user_id, at=now)

        created = self._users.create_user(user)
        logger.info(
            "user created",
            extra={
                "user_id": str(created.id),
                "role": created.role.value,
                "actor_id": str(actor.user_id),
            },
        )
        return UserResult(
            user=created,
            refs=resolve_refs(self._users, (created.supervisor_id, created.manager_id)),
        )

    @staticmethod
    def _forbidden(message: str) -> UserResult:
        return UserResult(error=ServiceError.forbidden(message))

    @staticmethod
    def _validation_error(message: str) -> UserResult:
        return UserResult(error=ServiceError.validation(message))
