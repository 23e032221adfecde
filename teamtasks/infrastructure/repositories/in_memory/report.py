"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/report.py
============================================================
Class: InMemoryReportRepository

Responsibilities:
  - Almacenar reportes en memoria (append-only, inmutables).
  - Listar por generated_at DESC (más nuevo primero).

Collaborators:
  - domain.entities.Report
  - domain.repositories.ReportRepository
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Report
from ....domain.repositories import ReportRepository


class InMemoryReportRepository(ReportRepository):
    """Report es frozen: no hace falta copiar al leer/escribir."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._reports: Dict[UUID, Report] = {}

    def get_report(self, report_id: UUID) -> Optional[Report]:
        with self._lock:
            return self._reports.get(report_id)

    def list_reports(self) -> List[Report]:
        with self._lock:
            values = list(self._reports.values())
        return sorted(values, key=lambda r: (r.generated_at, str(r.id)), reverse=True)

    def create_report(self, report: Report) -> Report:
        with self._lock:
            self._reports[report.id] = report
        return report
