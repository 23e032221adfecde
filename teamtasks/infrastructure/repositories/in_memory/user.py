"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / APP_ENV=test|ci).
  - Implementar el contrato UserRepository con la misma semántica que Postgres:
      - email case-insensitive
      - listados ordenados por name ASC, id ASC

Collaborators:
  - domain.entities.User, UserStatus
  - domain.repositories.UserRepository

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca comparten la instancia almacenada.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import User, UserStatus
from ....domain.repositories import UserRepository
from ....domain.roles import UserRole


class InMemoryUserRepository(UserRepository):
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    def ping(self) -> bool:
        return True

    def get_user(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = self._normalize_email(email)
        with self._lock:
            for user in self._users.values():
                if self._normalize_email(user.email) == wanted:
                    return replace(user)
        return None

    def list_users(
        self,
        *,
        status: UserStatus | None = None,
        role: UserRole | None = None,
    ) -> List[User]:
        with self._lock:
            values = [replace(u) for u in self._users.values()]

        def predicate(u: User) -> bool:
            if status is not None and u.status != status:
                return False
            if role is not None and u.role != role:
                return False
            return True

        return sorted(
            (u for u in values if predicate(u)),
            key=lambda u: ((u.name or "").lower(), str(u.id)),
        )

    def create_user(self, user: User) -> User:
        now = self._now()
        stored = replace(
            user,
            email=self._normalize_email(user.email),
            created_at=user.created_at or now,
            updated_at=user.updated_at or now,
        )
        with self._lock:
            self._users[stored.id] = stored
            return replace(stored)

    def update_user(self, user: User) -> Optional[User]:
        with self._lock:
            if user.id not in self._users:
                return None
            stored = replace(
                user,
                email=self._normalize_email(user.email),
                updated_at=self._now(),
            )
            self._users[user.id] = stored
            return replace(stored)

    def delete_user(self, user_id: UUID) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None
