"""
===============================================================================
TARJETA CRC - domain/assignment.py
===============================================================================

Módulo:
    Validador de Asignación Jerárquica

Responsabilidades:
    - Ser la ÚNICA fuente de verdad sobre "jerarquía bien formada".
    - Verificar que un rol propuesto trae los vínculos (supervisor/manager)
      que exige, y que apuntan a usuarios activos del rol correcto.
    - Rechazar auto-referencias.
    - Impedir un cambio de rol que deje a sus reportes apuntando a un
      usuario del rol equivocado (check_role_change).
    - Devolver un resultado explícito (valid + mensaje), sin lanzar.

Colaboradores:
    - domain.roles: required_links / LINK_TARGET_ROLES / parse_role.
    - UserLookup: cualquier objeto con get_user(user_id) (repositorio).
    - application: approve_user, create_user, update_user.

Invocación:
    - Al aprobar un registro pendiente.
    - Al crear un usuario directamente.
    - Al cambiar rol/vínculos de un usuario existente.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Optional, Protocol
from uuid import UUID

from .entities import User
from .roles import (
    LINK_TARGET_ROLES,
    MANAGER_LINK,
    SUPERVISOR_LINK,
    UserRole,
    parse_role,
    required_links,
)

MEMBER_LINKS_REQUIRED: Final[str] = (
    "Team members must have both a supervisor and manager assigned"
)
SUPERVISOR_MANAGER_REQUIRED: Final[str] = "Supervisors must have a manager assigned"
INVALID_ROLE: Final[str] = "Invalid role specified"
INVALID_SUPERVISOR: Final[str] = "Assigned supervisor must be an active supervisor"
INVALID_MANAGER: Final[str] = "Assigned manager must be an active manager"
SELF_REFERENCE: Final[str] = "A user cannot be their own supervisor or manager"
TEAM_STILL_LINKED: Final[str] = (
    "Reassign this user's team before changing their role"
)

_MISSING_LINK_MESSAGES: Final[dict[UserRole, str]] = {
    UserRole.MEMBER: MEMBER_LINKS_REQUIRED,
    UserRole.SUPERVISOR: SUPERVISOR_MANAGER_REQUIRED,
}

_INVALID_TARGET_MESSAGES: Final[dict[str, str]] = {
    SUPERVISOR_LINK: INVALID_SUPERVISOR,
    MANAGER_LINK: INVALID_MANAGER,
}


class UserLookup(Protocol):
    def get_user(self, user_id: UUID) -> Optional[User]: ...


@dataclass(frozen=True, slots=True)
class AssignmentCheck:
    """Resultado de validar una asignación."""

    valid: bool
    error: Optional[str] = None
    role: Optional[UserRole] = None

    @classmethod
    def ok(cls, role: UserRole) -> "AssignmentCheck":
        return cls(valid=True, role=role)

    @classmethod
    def fail(cls, message: str) -> "AssignmentCheck":
        return cls(valid=False, error=message)


def validate_assignment(
    role: UserRole | str | None,
    supervisor_id: UUID | None = None,
    manager_id: UUID | None = None,
    *,
    users: UserLookup,
    subject_id: UUID | None = None,
) -> AssignmentCheck:
    """
    Valida rol + vínculos propuestos para un usuario.

    Orden de chequeos (el primero que falla define el mensaje):
      1) rol conocido
      2) vínculos requeridos presentes
      3) sin auto-referencia
      4) cada vínculo apunta a un usuario activo del rol esperado

    Para manager/super_admin los vínculos se ignoran (siempre válido).
    """
    parsed = parse_role(role)
    if parsed is None:
        return AssignmentCheck.fail(INVALID_ROLE)

    links = required_links(parsed)
    if not links:
        return AssignmentCheck.ok(parsed)

    proposed = {SUPERVISOR_LINK: supervisor_id, MANAGER_LINK: manager_id}

    if any(proposed[link] is None for link in links):
        return AssignmentCheck.fail(_MISSING_LINK_MESSAGES[parsed])

    if subject_id is not None and any(proposed[link] == subject_id for link in links):
        return AssignmentCheck.fail(SELF_REFERENCE)

    # R: orden fijo (supervisor antes que manager) para mensajes deterministas.
    for link in (SUPERVISOR_LINK, MANAGER_LINK):
        if link not in links:
            continue
        target = users.get_user(proposed[link])
        if (
            target is None
            or not target.is_active
            or target.role != LINK_TARGET_ROLES[link]
        ):
            return AssignmentCheck.fail(_INVALID_TARGET_MESSAGES[link])

    return AssignmentCheck.ok(parsed)


def check_role_change(
    subject_id: UUID, new_role: UserRole, others: Iterable[User]
) -> AssignmentCheck:
    """
    Los vínculos de terceros hacia `subject_id` tienen que seguir apuntando a
    un usuario del rol que exige cada vínculo después del cambio.
    """
    for user in others:
        if user.id == subject_id:
            continue
        for link, expected in LINK_TARGET_ROLES.items():
            if getattr(user, link) == subject_id and expected != new_role:
                return AssignmentCheck.fail(TEAM_STILL_LINKED)
    return AssignmentCheck.ok(new_role)
