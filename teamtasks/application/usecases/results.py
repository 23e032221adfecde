"""
===============================================================================
USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de usuarios, tareas y reportes, con un contrato estable para:
      - validaciones
      - autorización
      - recursos no encontrados
      - conflictos de negocio

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      “hacia afuera”, facilitando el mapeo HTTP y los tests unitarios.
    - Validate-then-write: un error nunca se produce después de una mutación.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    results (module)

Responsibilities:
    - ServiceErrorCode: set acotado de categorías.
    - ServiceError: code + message.
    - Resultados por recurso (single / list / delete / permissions).
    - `refs`: usuarios referenciados ya resueltos a UserRef (id -> ref).

Collaborators:
    - domain.entities: User, Task, Report
    - domain.value_objects: UserRef
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List
from uuid import UUID

from ...domain.entities import Report, Task, User
from ...domain.value_objects import UserRef


class ServiceErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o jerarquía mal formada.
      - FORBIDDEN: actor no autorizado para la operación.
      - NOT_FOUND: id referenciado inexistente.
      - CONFLICT: colisión de unicidad (ej. email duplicado).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class ServiceError:
    """Error de caso de uso (sin stack traces ni metadata de infraestructura)."""

    code: ServiceErrorCode
    message: str

    @classmethod
    def validation(cls, message: str) -> "ServiceError":
        return cls(ServiceErrorCode.VALIDATION_ERROR, message)

    @classmethod
    def forbidden(cls, message: str) -> "ServiceError":
        return cls(ServiceErrorCode.FORBIDDEN, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ServiceErrorCode.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ServiceErrorCode.CONFLICT, message)


@dataclass
class UserResult:
    user: User | None = None
    error: ServiceError | None = None
    refs: Dict[UUID, UserRef] = field(default_factory=dict)


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    error: ServiceError | None = None
    refs: Dict[UUID, UserRef] = field(default_factory=dict)


@dataclass
class TaskResult:
    task: Task | None = None
    error: ServiceError | None = None
    refs: Dict[UUID, UserRef] = field(default_factory=dict)


@dataclass
class TaskListResult:
    tasks: List[Task] = field(default_factory=list)
    error: ServiceError | None = None
    refs: Dict[UUID, UserRef] = field(default_factory=dict)


@dataclass
class TaskPermissionsResult:
    """Campos editables + permiso de borrado (para bloquear el formulario)."""

    task_id: UUID | None = None
    editable_fields: frozenset[str] = frozenset()
    can_delete: bool = False
    error: ServiceError | None = None


@dataclass
class ReportResult:
    report: Report | None = None
    error: ServiceError | None = None


@dataclass
class ReportListResult:
    reports: List[Report] = field(default_factory=list)
    error: ServiceError | None = None


@dataclass
class DeleteResult:
    """Resultado de comandos destructivos (delete / reject)."""

    deleted: bool = False
    error: ServiceError | None = None
