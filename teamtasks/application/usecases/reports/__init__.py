"""Report use cases (generate / list / get)."""

from __future__ import annotations

from .generate_report import GenerateReportUseCase, summarize
from .list_reports import GetReportUseCase, ListReportsUseCase

__all__ = [
    "GenerateReportUseCase",
    "GetReportUseCase",
    "ListReportsUseCase",
    "summarize",
]
