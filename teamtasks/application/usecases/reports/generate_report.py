"""
===============================================================================
USE CASE: Generate Report
===============================================================================

Business Goal:
    Generar un reporte periódico (diario/semanal/mensual) como snapshot
    inmutable de las tareas actualizadas dentro del período.

Why (Context / Intención):
    - El inicio del período se calcula en la zona horaria configurada
      (medianoche local), con un reloj inyectable para tests deterministas.
    - task_ids y summary se congelan al generar: nunca se recalculan.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    GenerateReportUseCase

Responsibilities:
    - Validar título y tipo.
    - Calcular period_start (domain.periods).
    - Seleccionar tareas con last_updated >= period_start.
    - Contar por status y vencidas.
    - Persistir el reporte.

Collaborators:
    - TaskRepository.list_tasks_updated_since
    - ReportRepository.create_report
    - domain.periods.period_start

Error Mapping:
    - FORBIDDEN: sin actor autenticado.
    - VALIDATION_ERROR: título vacío / tipo desconocido.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Sequence
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Report, ReportSummary, ReportType, Task, TaskStatus
from ....domain.periods import period_start
from ....domain.repositories import ReportRepository, TaskRepository
from ....domain.task_policy import UserSnapshot
from ..common import Clock, utcnow
from ..results import ReportResult, ServiceError

MAX_REPORT_TITLE_CHARS = 200


def summarize(tasks: Sequence[Task], now: datetime) -> ReportSummary:
    """Conteos por status + vencidas (no completadas con target_date < now)."""
    return ReportSummary(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        not_started=sum(1 for t in tasks if t.status == TaskStatus.NOT_STARTED),
        overdue=sum(1 for t in tasks if t.is_overdue(now)),
    )


class GenerateReportUseCase:
    def __init__(
        self,
        report_repository: ReportRepository,
        task_repository: TaskRepository,
        *,
        zone: tzinfo = timezone.utc,
        clock: Clock = utcnow,
    ) -> None:
        self._reports = report_repository
        self._tasks = task_repository
        self._zone = zone
        self._clock = clock

    def execute(
        self, title: str, report_type: ReportType | str, actor: UserSnapshot | None
    ) -> ReportResult:
        if actor is None:
            return ReportResult(
                error=ServiceError.forbidden("Actor is required to generate reports.")
            )

        # ---------------------------------------------------------------------
        # 1) Validar inputs.
        # ---------------------------------------------------------------------
        clean_title = (title or "").strip()
        if not clean_title:
            return ReportResult(error=ServiceError.validation("Title is required."))
        if len(clean_title) > MAX_REPORT_TITLE_CHARS:
            return ReportResult(
                error=ServiceError.validation(
                    f"Title must be at most {MAX_REPORT_TITLE_CHARS} characters."
                )
            )
        try:
            kind = ReportType(report_type)
        except ValueError:
            return ReportResult(error=ServiceError.validation("Invalid report type."))

        # ---------------------------------------------------------------------
        # 2) Límite del período en hora local.
        # ---------------------------------------------------------------------
        now = self._clock().astimezone(self._zone)
        since = period_start(kind, now)

        # ---------------------------------------------------------------------
        # 3) Snapshot de tareas + resumen.
        # ---------------------------------------------------------------------
        tasks = self._tasks.list_tasks_updated_since(since)
        report = Report(
            id=uuid4(),
            title=clean_title,
            type=kind,
            generated_at=now,
            period_start=since,
            task_ids=tuple(task.id for task in tasks),
            summary=summarize(tasks, now),
            created_by=actor.user_id,
        )

        created = self._reports.create_report(report)
        logger.info(
            "report generated",
            extra={
                "report_id": str(created.id),
                "type": kind.value,
                "task_count": len(created.task_ids),
                "actor_id": str(actor.user_id),
            },
        )
        return ReportResult(report=created)
