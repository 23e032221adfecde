"""
===============================================================================
TARJETA CRC - api/exception_handlers.py
===============================================================================
Responsabilidades:
  - Convertir fallas internas (TeamTasksError, DatabaseError, cualquier
    Exception) en problem+json.
  - Loguear cada falla con su error_id para correlacionar con el cliente.
  - En producción, no exponer el mensaje interno.

Colaboradores:
  - crosscutting.error_responses (AppHTTPException, problem_response)
  - crosscutting.exceptions (TeamTasksError, DatabaseError)
  - crosscutting.config.get_settings

Notas:
  - Los errores de negocio no pasan por acá: los routers ya los traducen
    con error_mapping.raise_service_error.
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import DatabaseError, TeamTasksError
from ..crosscutting.logger import logger

_PUBLIC_DETAIL = {
    ErrorCode.DATABASE_ERROR: "Storage is temporarily unavailable.",
    ErrorCode.INTERNAL_ERROR: "Unexpected server error.",
}


def _public(code: ErrorCode, internal_detail: str) -> str:
    if get_settings().is_production():
        return _PUBLIC_DETAIL[code]
    return internal_detail


def _internal_failure(
    request: Request, exc: TeamTasksError, *, status_code: int, code: ErrorCode
) -> JSONResponse:
    logger.error(
        "Internal failure",
        extra={
            "code": code.value,
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "error_message": exc.message,
        },
    )
    return problem_response(
        request,
        AppHTTPException(
            status_code,
            code,
            _public(code, exc.message),
            errors=[{"error_id": exc.error_id}],
        ),
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return _internal_failure(
        request, exc, status_code=503, code=ErrorCode.DATABASE_ERROR
    )


async def teamtasks_error_handler(
    request: Request, exc: TeamTasksError
) -> JSONResponse:
    return _internal_failure(
        request, exc, status_code=500, code=ErrorCode.INTERNAL_ERROR
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", exc_info=exc)
    return problem_response(
        request,
        AppHTTPException(
            500, ErrorCode.INTERNAL_ERROR, _public(ErrorCode.INTERNAL_ERROR, str(exc))
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette elige el handler por MRO: DatabaseError gana sobre TeamTasksError.
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(TeamTasksError, teamtasks_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
