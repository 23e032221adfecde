"""
===============================================================================
USE CASE: Register User (auto-registro)
===============================================================================

Business Goal:
    Alta pública: el usuario queda PENDING_APPROVAL, rol member y sin
    vínculos. Recién al aprobarlo se asignan rol y jerarquía.

Error Mapping:
    - VALIDATION_ERROR: nombre/email/password inválidos.
    - CONFLICT: email ya registrado.
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import User, UserStatus
from ....domain.repositories import UserRepository
from ....domain.roles import UserRole
from ..common import Clock, utcnow
from ..results import ServiceError, UserResult
from .validation import validate_profile


class RegisterUserUseCase:
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

    def execute(self, name: str, email: str, password: str) -> UserResult:
        clean_name, clean_email, problem = validate_profile(name, email, password)
        if problem:
            return UserResult(error=ServiceError.validation(problem))

        if self._users.get_user_by_email(clean_email) is not None:
            return UserResult(error=ServiceError.conflict("User already exists."))

        now = self._clock()
        user = User(
            id=uuid4(),
            name=clean_name,
            email=clean_email,
            password_hash=self._hash_password(password),
            role=UserRole.MEMBER,
            status=UserStatus.PENDING_APPROVAL,
            created_at=now,
            updated_at=now,
        )
        created = self._users.create_user(user)
        logger.info("registration received", extra={"user_id": str(created.id)})
        return UserResult(user=created)
