"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/report.py
============================================================
Class: PostgresReportRepository

Responsibilities:
- Persistir reportes (append-only) y leerlos.
- task_ids se guarda como uuid[] (snapshot congelado).

Collaborators:
- PostgresRepositoryBase
- domain.entities.Report / ReportSummary / ReportType
- Tabla: reports
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Report, ReportSummary, ReportType
from .base import PostgresRepositoryBase

_REPORT_COLUMNS = """
    id, title, type, generated_at, period_start, task_ids,
    total_count, completed_count, in_progress_count, not_started_count,
    overdue_count, created_by
"""


class PostgresReportRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de reportes."""

    @staticmethod
    def _row_to_report(row: tuple) -> Report:
        (
            report_id,
            title,
            report_type,
            generated_at,
            period_start,
            task_ids,
            total,
            completed,
            in_progress,
            not_started,
            overdue,
            created_by,
        ) = row

        try:
            parsed_type = ReportType(report_type)
        except ValueError as exc:
            raise DatabaseError(
                f"Invalid report type in database: {report_type}"
            ) from exc

        return Report(
            id=report_id,
            title=title,
            type=parsed_type,
            generated_at=generated_at,
            period_start=period_start,
            task_ids=tuple(task_ids or ()),
            summary=ReportSummary(
                total=total,
                completed=completed,
                in_progress=in_progress,
                not_started=not_started,
                overdue=overdue,
            ),
            created_by=created_by,
        )

    def get_report(self, report_id: UUID) -> Optional[Report]:
        row = self._fetchone(
            query=f"SELECT {_REPORT_COLUMNS} FROM reports WHERE id = %s",
            params=[report_id],
            context_msg="PostgresReportRepository: Failed to get report",
            extra={"report_id": str(report_id)},
        )
        return self._row_to_report(row) if row else None

    def list_reports(self) -> List[Report]:
        rows = self._fetchall(
            query=f"""
                SELECT {_REPORT_COLUMNS}
                FROM reports
                ORDER BY generated_at DESC, id DESC
            """,
            params=[],
            context_msg="PostgresReportRepository: Failed to list reports",
            extra={},
        )
        return [self._row_to_report(r) for r in rows]

    def create_report(self, report: Report) -> Report:
        summary = report.summary
        row = self._fetchone(
            query=f"""
                INSERT INTO reports (
                    id, title, type, generated_at, period_start, task_ids,
                    total_count, completed_count, in_progress_count,
                    not_started_count, overdue_count, created_by
                )
                VALUES (%s, %s, %s, %s, %s, %s::uuid[], %s, %s, %s, %s, %s, %s)
                RETURNING {_REPORT_COLUMNS}
            """,
            params=[
                report.id,
                report.title,
                report.type.value,
                report.generated_at,
                report.period_start,
                list(report.task_ids),
                summary.total,
                summary.completed,
                summary.in_progress,
                summary.not_started,
                summary.overdue,
                report.created_by,
            ],
            context_msg="PostgresReportRepository: Failed to create report",
            extra={"report_id": str(report.id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresReportRepository: Failed to create report: no row returned"
            )
        return self._row_to_report(row)
