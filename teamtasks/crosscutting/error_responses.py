# teamtasks/crosscutting/error_responses.py
"""
===============================================================================
TARJETA CRC - crosscutting/error_responses.py
===============================================================================
Componente:
  Errores HTTP en formato Problem Details (RFC 7807).

Responsabilidades:
  - Catálogo cerrado de códigos (ErrorCode) con su status HTTP.
  - AppHTTPException + factories por código.
  - Handler FastAPI que serializa a application/problem+json.
  - Respuestas de error documentadas en OpenAPI.

Colaboradores:
  - interfaces/api/http/error_mapping.py (ServiceError -> AppHTTPException)
  - api/exception_handlers.py (TeamTasksError -> AppHTTPException)
  - crosscutting/middleware.py (request_id en request.state)

Notas:
  - El cliente decide por `code`, nunca por el texto de `detail`.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def title(self) -> str:
        return self.value.replace("_", " ").capitalize()


class ErrorDetail(BaseModel):
    """Cuerpo problem+json. `code` y `errors` extienden el estándar."""

    type: str
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail, errors)


def unauthorized(detail: str = "Authentication required.") -> AppHTTPException:
    return AppHTTPException(
        401, ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "Not allowed.") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def internal_error(detail: str = "Unexpected server error.") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Serialización
# ---------------------------------------------------------------------------


def problem_response(request: Request, exc: AppHTTPException) -> JSONResponse:
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"urn:teamtasks:error:{exc.code.value.lower()}",
        title=exc.code.title,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=request.url.path,
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(request, exc)


def _documented(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: _documented("Missing, expired or invalid session"),
    403: _documented("Role hierarchy does not allow the operation"),
    404: _documented("Record not found"),
    409: _documented("Unique email already registered"),
    422: _documented("Invalid input or hierarchy assignment"),
}
