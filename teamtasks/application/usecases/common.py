"""
===============================================================================
USE CASE HELPERS (shared)
===============================================================================

Responsibilities:
    - Reloj inyectable (Clock) para tests deterministas.
    - Resolver ids de usuarios referenciados a UserRef (lectura).
    - Normalizar fechas naive a UTC.

Collaborators:
    - domain.repositories.UserRepository
    - domain.value_objects.UserRef
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional
from uuid import UUID

from ...domain.entities import User
from ...domain.repositories import UserRepository
from ...domain.value_objects import UserRef

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Fechas sin tzinfo se interpretan como UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_refs(
    users: UserRepository, user_ids: Iterable[Optional[UUID]]
) -> Dict[UUID, UserRef]:
    """
    Resuelve ids -> UserRef.

    Ids colgantes (usuario borrado) simplemente no aparecen en el dict.
    """
    refs: Dict[UUID, UserRef] = {}
    for user_id in user_ids:
        if user_id is None or user_id in refs:
            continue
        user = users.get_user(user_id)
        if user is not None:
            refs[user_id] = UserRef.from_user(user)
    return refs


def hierarchy_ids(items: Iterable[User]) -> list[Optional[UUID]]:
    """Ids de supervisor/manager de una colección de usuarios."""
    ids: list[Optional[UUID]] = []
    for user in items:
        ids.extend((user.supervisor_id, user.manager_id))
    return ids
