"""
===============================================================================
USE CASE: List Team
===============================================================================

Business Goal:
    Devolver el equipo "debajo" de un usuario (ver users/team.py).

Authorization:
    - El propio usuario o quien pueda view_user sobre el target (super_admin
      incluido, vía policy).

Notes:
    - Solo usuarios activos; sin duplicados; orden por nombre (repositorio).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import UserRepository
from ....domain.task_policy import UserSnapshot
from ..common import hierarchy_ids, resolve_refs
from ..results import ServiceError, UserListResult
from .team import can_view_team, team_of


class ListTeamUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID, actor: UserSnapshot | None) -> UserListResult:
        # ---------------------------------------------------------------------
        # 1) Resolver target.
        # ---------------------------------------------------------------------
        target = self._users.get_user(user_id)
        if target is None:
            return UserListResult(
                error=ServiceError.not_found(f"User {user_id} not found.")
            )

        # ---------------------------------------------------------------------
        # 2) Autorización.
        # ---------------------------------------------------------------------
        if not can_view_team(actor, target):
            return UserListResult(
                error=ServiceError.forbidden("Not allowed to view this team.")
            )

        # ---------------------------------------------------------------------
        # 3) Armar el equipo.
        # ---------------------------------------------------------------------
        team = team_of(self._users, target)
        return UserListResult(
            users=team, refs=resolve_refs(self._users, hierarchy_ids(team))
        )
