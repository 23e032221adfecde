"""
===============================================================================
USE CASES: List Reports / Get Report
===============================================================================

Business Goal:
    Lectura de reportes (inmutables). Los reportes son globales: cualquier
    usuario autenticado puede verlos.

Error Mapping:
    - NOT_FOUND: reporte inexistente.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import ReportRepository
from ..results import ReportListResult, ReportResult, ServiceError


class ListReportsUseCase:
    def __init__(self, repository: ReportRepository) -> None:
        self._reports = repository

    def execute(self) -> ReportListResult:
        return ReportListResult(reports=self._reports.list_reports())


class GetReportUseCase:
    def __init__(self, repository: ReportRepository) -> None:
        self._reports = repository

    def execute(self, report_id: UUID) -> ReportResult:
        report = self._reports.get_report(report_id)
        if report is None:
            return ReportResult(
                error=ServiceError.not_found(f"Report {report_id} not found.")
            )
        return ReportResult(report=report)
