"""
===============================================================================
TARJETA CRC - schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para Usuarios

Responsabilidades:
    - Definir DTOs de request/response para endpoints de usuarios.
    - Exponer vínculos jerárquicos como UserRef resueltos (nunca ids ambiguos).
    - Nunca exponer password_hash.

Colaboradores:
    - domain.entities.UserStatus / domain.roles.UserRole
    - domain.value_objects.UserRef
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .....domain.entities import User, UserStatus
from .....domain.roles import UserRole
from .....domain.value_objects import UserRef


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateUserReq(BaseModel):
    """Alta directa (usuario activo)."""

    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)
    role: str = Field(..., description="super_admin | manager | supervisor | member")
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None
    avatar_url: str | None = Field(default=None, max_length=2048)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ApproveUserReq(BaseModel):
    """Aprobación: rol + vínculos en el mismo paso."""

    role: str
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None


class RejectUserReq(BaseModel):
    reason: str | None = Field(default=None, max_length=1000)


class UpdateUserReq(BaseModel):
    """
    Patch de usuario.

    Solo los campos presentes en el body se consideran (exclude_unset).
    """

    name: str | None = Field(default=None, max_length=120)
    avatar_url: str | None = Field(default=None, max_length=2048)
    role: str | None = None
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRefRes(BaseModel):
    id: UUID
    name: str
    role: UserRole

    @classmethod
    def from_ref(cls, ref: UserRef | None) -> "UserRefRes | None":
        if ref is None:
            return None
        return cls(id=ref.id, name=ref.name, role=ref.role)


class UserRes(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    status: UserStatus
    avatar_url: str | None = None
    supervisor_id: UUID | None = None
    manager_id: UUID | None = None
    supervisor: UserRefRes | None = None
    manager: UserRefRes | None = None
    created_at: datetime | None = None
    approved_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User, refs: Mapping[UUID, UserRef]) -> "UserRes":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
            avatar_url=user.avatar_url,
            supervisor_id=user.supervisor_id,
            manager_id=user.manager_id,
            supervisor=UserRefRes.from_ref(refs.get(user.supervisor_id)),
            manager=UserRefRes.from_ref(refs.get(user.manager_id)),
            created_at=user.created_at,
            approved_at=user.approved_at,
        )


class UsersListRes(BaseModel):
    users: list[UserRes]


class DeleteUserRes(BaseModel):
    user_id: UUID
    deleted: bool
