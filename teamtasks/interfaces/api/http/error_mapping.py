"""
===============================================================================
TARJETA CRC - error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir ServiceError de casos de uso a HTTP Exceptions RFC7807.
  - Un solo lugar para el mapeo code -> status; los routers no lo repiten.

Reglas:
  - Los use cases devuelven errores tipados (code + message).
  - Esta capa es la única que conoce HTTP.

Colaboradores:
  - application.usecases.results (ServiceError, ServiceErrorCode)
  - crosscutting.error_responses (factories de AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from ....application.usecases.results import ServiceError, ServiceErrorCode
from ....crosscutting.error_responses import (
    conflict,
    forbidden,
    not_found,
    validation_error,
)


def raise_service_error(
    error: ServiceError,
    *,
    resource: str | None = None,
    resource_id: UUID | None = None,
) -> NoReturn:
    """
    Traduce ServiceError -> HTTP.

    Nota:
      - Para NOT_FOUND se preserva el mensaje del caso de uso (puede referirse
        a un recurso secundario, ej. el asignado de una tarea).
    """
    if error.code == ServiceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == ServiceErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == ServiceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ServiceErrorCode.NOT_FOUND:
        raise not_found(
            error.message or f"{resource or 'Resource'} '{resource_id}' not found"
        )

    # Código sin mapear => 422.
    raise validation_error(error.message)
