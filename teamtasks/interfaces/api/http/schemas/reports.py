"""Schemas HTTP para Reportes (snapshot inmutable)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import Report, ReportType


class GenerateReportReq(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: ReportType


class ReportSummaryRes(BaseModel):
    total: int
    completed: int
    in_progress: int
    not_started: int
    overdue: int


class ReportRes(BaseModel):
    id: UUID
    title: str
    type: ReportType
    generated_at: datetime
    period_start: datetime
    task_ids: list[UUID]
    summary: ReportSummaryRes
    created_by: UUID | None = None

    @classmethod
    def from_report(cls, report: Report) -> "ReportRes":
        s = report.summary
        return cls(
            id=report.id,
            title=report.title,
            type=report.type,
            generated_at=report.generated_at,
            period_start=report.period_start,
            task_ids=list(report.task_ids),
            summary=ReportSummaryRes(
                total=s.total,
                completed=s.completed,
                in_progress=s.in_progress,
                not_started=s.not_started,
                overdue=s.overdue,
            ),
            created_by=report.created_by,
        )


class ReportsListRes(BaseModel):
    reports: list[ReportRes]
