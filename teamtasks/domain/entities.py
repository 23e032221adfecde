"""
===============================================================================
TARJETA CRC - domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (User, Task, Report)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples:
        * completed_date coherente con status
        * last_updated avanza en cada mutación
        * vínculos jerárquicos acordes al rol
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.roles: UserRole / required_links.
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Datos + comportamiento mínimo (no “anemia total”, pero sin lógica pesada).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID

from .roles import MANAGER_LINK, SUPERVISOR_LINK, UserRole, required_links


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class UserStatus(str, Enum):
    """Estado del usuario."""

    ACTIVE = "active"
    PENDING_APPROVAL = "pending_approval"


@dataclass
class User:
    """
    Usuario del equipo.

    Importante:
      - password_hash nunca se serializa hacia clientes.
      - supervisor_id / manager_id son referencias débiles (ids crudos);
        se resuelven a UserRef al leer.
    """

    id: UUID
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.MEMBER
    status: UserStatus = UserStatus.PENDING_APPROVAL
    avatar_url: Optional[str] = None
    supervisor_id: Optional[UUID] = None
    manager_id: Optional[UUID] = None

    # Auditoría
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[UUID] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_pending(self) -> bool:
        return self.status == UserStatus.PENDING_APPROVAL

    def assign_hierarchy(
        self,
        role: UserRole,
        *,
        supervisor_id: UUID | None = None,
        manager_id: UUID | None = None,
    ) -> None:
        """
        Asigna rol y vínculos.

        Solo se conservan los vínculos que el rol exige; el resto se limpia
        para no dejar referencias colgando (ej: un manager con supervisor_id).
        La validación de existencia/rol de los vínculos vive en domain.assignment.
        """
        links = required_links(role)
        self.role = role
        self.supervisor_id = supervisor_id if SUPERVISOR_LINK in links else None
        self.manager_id = manager_id if MANAGER_LINK in links else None

    def activate(self, *, approved_by: UUID | None, at: datetime | None = None) -> None:
        """Marca el usuario como activo (aprobación)."""
        moment = at or _utcnow()
        self.status = UserStatus.ACTIVE
        self.approved_at = moment
        self.approved_by = approved_by
        self.updated_at = moment


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------


class TaskStatus(str, Enum):
    """Ciclo de vida de una tarea (sin estado terminal)."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class Task:
    """Tarea asignada a un usuario."""

    id: UUID
    title: str
    description: str
    assignee_id: UUID
    target_date: datetime
    creator_id: Optional[UUID] = None
    status: TaskStatus = TaskStatus.NOT_STARTED
    remarks: Optional[str] = None
    assigned_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    completed_date: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True si no está completada y la fecha objetivo ya pasó."""
        return not self.is_completed and self.target_date < (now or _utcnow())

    def touch(self, *, at: datetime | None = None) -> None:
        """
        Avanza last_updated.

        Invariante: last_updated crece estrictamente en cada mutación, aun si
        el reloj devuelve el mismo instante dos veces seguidas.
        """
        moment = at or _utcnow()
        previous = self.last_updated
        if previous is not None and moment <= previous:
            moment = previous + timedelta(microseconds=1)
        self.last_updated = moment

    def set_status(self, status: TaskStatus, *, at: datetime | None = None) -> None:
        """
        Cambia el status aplicando el efecto sobre completed_date.

        - Entrar a COMPLETED => se estampa completed_date.
        - Salir de COMPLETED => se limpia completed_date.
        - Mismo status => completed_date no cambia (idempotente).
        """
        if status == self.status:
            return

        if status == TaskStatus.COMPLETED:
            self.completed_date = at or _utcnow()
        else:
            self.completed_date = None
        self.status = status


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


class ReportType(str, Enum):
    """Período del reporte."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True, slots=True)
class ReportSummary:
    """Conteos por estado, congelados al momento de generar el reporte."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    overdue: int = 0


@dataclass(frozen=True)
class Report:
    """
    Reporte periódico (inmutable).

    task_ids es un snapshot: no se recalcula aunque las tareas cambien.
    """

    id: UUID
    title: str
    type: ReportType
    generated_at: datetime
    period_start: datetime
    task_ids: Tuple[UUID, ...] = ()
    summary: ReportSummary = field(default_factory=ReportSummary)
    created_by: Optional[UUID] = None
