"""
===============================================================================
TARJETA CRC - domain/roles.py
===============================================================================

Módulo:
    Modelo de Roles (jerarquía de reporte)

Responsabilidades:
    - Definir el catálogo de roles (UserRole) con orden total.
    - Exponer la relación "está por encima de" entre roles.
    - Declarar qué vínculos jerárquicos (supervisor_id / manager_id) exige
      cada rol.

Colaboradores:
    - domain.entities.User: usa UserRole y required_links para sus invariantes.
    - domain.assignment: valida asignaciones contra required_links.
    - domain.task_policy: decide permisos según rol.

Notas:
    - Módulo puro: sin DB, sin FastAPI.
    - Orden: super_admin > manager > supervisor > member.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class UserRole(str, Enum):
    """Roles soportados (de mayor a menor nivel)."""

    SUPER_ADMIN = "super_admin"
    MANAGER = "manager"
    SUPERVISOR = "supervisor"
    MEMBER = "member"


# R: nivel jerárquico; mayor número = más arriba en la cadena de reporte.
_LEVELS: Final[dict[UserRole, int]] = {
    UserRole.SUPER_ADMIN: 4,
    UserRole.MANAGER: 3,
    UserRole.SUPERVISOR: 2,
    UserRole.MEMBER: 1,
}

SUPERVISOR_LINK: Final[str] = "supervisor_id"
MANAGER_LINK: Final[str] = "manager_id"

_REQUIRED_LINKS: Final[dict[UserRole, frozenset[str]]] = {
    UserRole.SUPER_ADMIN: frozenset(),
    UserRole.MANAGER: frozenset(),
    UserRole.SUPERVISOR: frozenset({MANAGER_LINK}),
    UserRole.MEMBER: frozenset({SUPERVISOR_LINK, MANAGER_LINK}),
}

# R: rol esperado del usuario apuntado por cada vínculo.
LINK_TARGET_ROLES: Final[dict[str, UserRole]] = {
    SUPERVISOR_LINK: UserRole.SUPERVISOR,
    MANAGER_LINK: UserRole.MANAGER,
}


def level(role: UserRole) -> int:
    """Nivel numérico del rol en la jerarquía."""
    return _LEVELS[role]


def is_ancestor_of(role_a: UserRole, role_b: UserRole) -> bool:
    """True si role_a está estrictamente por encima de role_b."""
    return _LEVELS[role_a] > _LEVELS[role_b]


def required_links(role: UserRole) -> frozenset[str]:
    """Vínculos hacia arriba obligatorios para el rol."""
    return _REQUIRED_LINKS[role]


def parse_role(value: object) -> UserRole | None:
    """
    Parsea un rol de forma tolerante.

    Acepta variantes como "Super Admin", "super-admin" o "SUPER_ADMIN".
    Devuelve None si el valor no corresponde a ningún rol conocido.
    """
    if isinstance(value, UserRole):
        return value
    if not isinstance(value, str):
        return None

    cleaned = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return UserRole(cleaned)
    except ValueError:
        return None
