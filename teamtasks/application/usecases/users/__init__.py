"""
===============================================================================
USER USE CASES PACKAGE (Public API / Exports)
===============================================================================

Business Goal:
    Punto único de importación para los casos de uso de usuarios: alta,
    registro/aprobación, edición, baja y listados.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    users usecases package (__init__.py)

Responsibilities:
    - Re-exportar casos de uso y sus inputs.
    - Definir __all__ como contrato de API pública del paquete.
===============================================================================
"""

from __future__ import annotations

from .approve_user import ApproveUserInput, ApproveUserUseCase
from .create_user import CreateUserInput, CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_team import ListTeamUseCase
from .list_users import (
    ListAssignableUsersUseCase,
    ListPendingUsersUseCase,
    ListUsersUseCase,
)
from .register_user import RegisterUserUseCase
from .reject_user import RejectUserUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "ApproveUserInput",
    "ApproveUserUseCase",
    "CreateUserInput",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListAssignableUsersUseCase",
    "ListPendingUsersUseCase",
    "ListTeamUseCase",
    "ListUsersUseCase",
    "RegisterUserUseCase",
    "RejectUserUseCase",
    "UpdateUserUseCase",
]
