"""
===============================================================================
TARJETA CRC - domain/__init__.py
===============================================================================

Módulo:
    Superficie pública del dominio de equipos y tareas

Responsabilidades:
    - Un único punto de import para application e interfaces.

Colaboradores:
    - domain.roles / entities / value_objects
    - domain.task_policy / assignment / periods
    - domain.repositories (puertos)

Reglas:
    - Acá no entra nada de infraestructura ni de HTTP.
===============================================================================
"""

from .assignment import AssignmentCheck, validate_assignment
from .entities import (
    Report,
    ReportSummary,
    ReportType,
    Task,
    TaskStatus,
    User,
    UserStatus,
)
from .periods import period_start
from .repositories import ReportRepository, TaskRepository, UserRepository
from .roles import UserRole, is_ancestor_of, parse_role, required_links
from .task_policy import (
    Action,
    TaskSnapshot,
    UserSnapshot,
    can_perform,
    editable_task_fields,
    required_actions_for_fields,
)
from .value_objects import TaskFilter, UserRef

__all__ = [
    # Roles
    "UserRole",
    "is_ancestor_of",
    "parse_role",
    "required_links",
    # Entities
    "User",
    "UserStatus",
    "Task",
    "TaskStatus",
    "Report",
    "ReportSummary",
    "ReportType",
    # Value Objects
    "UserRef",
    "TaskFilter",
    # Policy
    "Action",
    "UserSnapshot",
    "TaskSnapshot",
    "can_perform",
    "editable_task_fields",
    "required_actions_for_fields",
    # Validation
    "AssignmentCheck",
    "validate_assignment",
    "period_start",
    # Repository Interfaces (Ports)
    "UserRepository",
    "TaskRepository",
    "ReportRepository",
]
