"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios (por id / por email) para auth y casos de uso.
  - Crear, sobrescribir y borrar usuarios.
  - Mapear filas crudas -> entidad de dominio `User` validando enums.

Collaborators:
  - PostgresRepositoryBase (pool + helpers de ejecución)
  - domain.entities.User / UserStatus, domain.roles.UserRole
  - Tabla: users (migración 001_foundation)

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio (política de roles, etc.).
  - Retorna None cuando no existe el recurso.
  - Enum inválido persistido -> DatabaseError (drift de esquema/datos).
  - Orden estable en listados: name ASC, id ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import User, UserStatus
from ....domain.roles import UserRole
from .base import PostgresRepositoryBase

_USER_COLUMNS = """
    id, name, email, password_hash, role, status, avatar_url,
    supervisor_id, manager_id, created_at, updated_at, approved_at, approved_by
"""

_USER_ORDER_BY = "ORDER BY LOWER(name) ASC, id ASC"


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        (
            user_id,
            name,
            email,
            password_hash,
            role,
            status,
            avatar_url,
            supervisor_id,
            manager_id,
            created_at,
            updated_at,
            approved_at,
            approved_by,
        ) = row

        try:
            parsed_role = UserRole(role)
            parsed_status = UserStatus(status)
        except ValueError as exc:
            raise DatabaseError(
                f"Invalid user role/status in database: {role}/{status}"
            ) from exc

        return User(
            id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=parsed_role,
            status=parsed_status,
            avatar_url=avatar_url,
            supervisor_id=supervisor_id,
            manager_id=manager_id,
            created_at=created_at,
            updated_at=updated_at,
            approved_at=approved_at,
            approved_by=approved_by,
        )

    def get_user(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=[user_id],
            context_msg="PostgresUserRepository: get_user failed",
            extra={"user_id": str(user_id)},
        )
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE LOWER(email) = LOWER(%s)",
            params=[(email or "").strip()],
            context_msg="PostgresUserRepository: get_user_by_email failed",
            extra={},
        )
        return self._row_to_user(row) if row else None

    def list_users(
        self,
        *,
        status: UserStatus | None = None,
        role: UserRole | None = None,
    ) -> List[User]:
        conditions: list[str] = []
        params: list[object] = []

        if status is not None:
            conditions.append("status = %s")
            params.append(status.value)
        if role is not None:
            conditions.append("role = %s")
            params.append(role.value)

        where_sql = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users {where_sql} {_USER_ORDER_BY}",
            params=params,
            context_msg="PostgresUserRepository: list_users failed",
            extra={"where_sql": where_sql},
        )
        return [self._row_to_user(r) for r in rows]

    def create_user(self, user: User) -> User:
        row = self._fetchone(
            query=f"""
                INSERT INTO users (
                    id, name, email, password_hash, role, status, avatar_url,
                    supervisor_id, manager_id, approved_at, approved_by
                )
                VALUES (%s, %s, LOWER(%s), %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=[
                user.id,
                user.name,
                user.email.strip(),
                user.password_hash,
                user.role.value,
                user.status.value,
                user.avatar_url,
                user.supervisor_id,
                user.manager_id,
                user.approved_at,
                user.approved_by,
            ],
            context_msg="PostgresUserRepository: create_user failed",
            extra={"user_id": str(user.id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed: no row returned"
            )
        return self._row_to_user(row)

    def update_user(self, user: User) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET name = %s,
                    email = LOWER(%s),
                    password_hash = %s,
                    role = %s,
                    status = %s,
                    avatar_url = %s,
                    supervisor_id = %s,
                    manager_id = %s,
                    approved_at = %s,
                    approved_by = %s,
                    updated_at = NOW()
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=[
                user.name,
                user.email.strip(),
                user.password_hash,
                user.role.value,
                user.status.value,
                user.avatar_url,
                user.supervisor_id,
                user.manager_id,
                user.approved_at,
                user.approved_by,
                user.id,
            ],
            context_msg="PostgresUserRepository: update_user failed",
            extra={"user_id": str(user.id)},
        )
        return self._row_to_user(row) if row else None

    def delete_user(self, user_id: UUID) -> bool:
        deleted = self._execute(
            query="DELETE FROM users WHERE id = %s",
            params=[user_id],
            context_msg="PostgresUserRepository: delete_user failed",
            extra={"user_id": str(user_id)},
        )
        return deleted > 0
