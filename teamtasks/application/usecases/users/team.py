"""
Equipo "debajo" de un usuario. Lo usan ListTeamUseCase y el filtro team_of
de ListTasksUseCase.

  - manager: supervisores y miembros con manager_id == manager, más los
    miembros supervisados por esos supervisores.
  - supervisor: usuarios con supervisor_id == supervisor.
  - member / super_admin: sin equipo.
"""

from __future__ import annotations

from ....domain.entities import User, UserStatus
from ....domain.repositories import UserRepository
from ....domain.roles import UserRole
from ....domain.task_policy import Action, UserSnapshot, can_perform


def can_view_team(actor: UserSnapshot | None, target: User) -> bool:
    """El propio usuario o quien pueda view_user sobre él."""
    if actor is None or actor.status != UserStatus.ACTIVE:
        return False
    if actor.user_id == target.id:
        return True
    return can_perform(actor, Action.VIEW_USER, UserSnapshot.from_user(target))


def team_of(users: UserRepository, target: User) -> list[User]:
    """Solo usuarios activos, sin duplicados, en el orden del repositorio."""
    active = users.list_users(status=UserStatus.ACTIVE)

    if target.role == UserRole.SUPERVISOR:
        return [u for u in active if u.supervisor_id == target.id]

    if target.role != UserRole.MANAGER:
        return []

    supervisor_ids = {
        u.id
        for u in active
        if u.role == UserRole.SUPERVISOR and u.manager_id == target.id
    }
    return [
        u
        for u in active
        if u.id in supervisor_ids
        or (u.role == UserRole.MEMBER and u.manager_id == target.id)
        or (u.role == UserRole.MEMBER and u.supervisor_id in supervisor_ids)
    ]
