"""
===============================================================================
TARJETA CRC - interfaces/api/http/routers/reports.py
===============================================================================

Responsibilities:
    - Generar reportes periódicos y leerlos (lista / detalle).
    - Cualquier usuario autenticado puede generarlos y verlos.

Collaborators:
    - teamtasks.application.usecases.reports
    - teamtasks.identity.auth_users.require_session
    - teamtasks.container (factories DI)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.usecases import (
    GenerateReportUseCase,
    GetReportUseCase,
    ListReportsUseCase,
    ReportResult,
)
from .....container import (
    get_generate_report_use_case,
    get_get_report_use_case,
    get_list_reports_use_case,
)
from .....crosscutting.error_responses import internal_error
from .....identity.auth_users import AuthSession, require_session
from ..error_mapping import raise_service_error
from ..schemas.reports import GenerateReportReq, ReportRes, ReportsListRes

router = APIRouter()


def _report_or_raise(result: ReportResult, report_id: UUID | None = None) -> ReportRes:
    if result.error is not None:
        raise_service_error(result.error, resource="Report", resource_id=report_id)
    if result.report is None:
        raise internal_error("Report result was empty.")
    return ReportRes.from_report(result.report)


@router.post("/reports", response_model=ReportRes, status_code=201, tags=["reports"])
def generate_report(
    req: GenerateReportReq,
    use_case: GenerateReportUseCase = Depends(get_generate_report_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _report_or_raise(use_case.execute(req.title, req.type, session.actor))


@router.get("/reports", response_model=ReportsListRes, tags=["reports"])
def list_reports(
    use_case: ListReportsUseCase = Depends(get_list_reports_use_case),
    _session: AuthSession = Depends(require_session()),
):
    result = use_case.execute()
    if result.error is not None:
        raise_service_error(result.error, resource="Report")
    return ReportsListRes(reports=[ReportRes.from_report(r) for r in result.reports])


@router.get("/reports/{report_id}", response_model=ReportRes, tags=["reports"])
def get_report(
    report_id: UUID,
    use_case: GetReportUseCase = Depends(get_get_report_use_case),
    _session: AuthSession = Depends(require_session()),
):
    return _report_or_raise(use_case.execute(report_id), report_id)
