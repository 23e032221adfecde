# teamtasks/crosscutting/middleware.py
"""
===============================================================================
TARJETA CRC - crosscutting/middleware.py
===============================================================================
Componente:
  RequestContextMiddleware

Responsabilidades:
  - Asignar un request_id (el del header X-Request-Id si es usable).
  - Publicarlo en ContextVars, request.state y en la respuesta.
  - Una línea de log por request con status y duración.

Colaboradores:
  - teamtasks/context.py
  - crosscutting/logger.py
  - api/exception_handlers.py (lee request.state.request_id)
===============================================================================
"""

from __future__ import annotations

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_CHARS = 128

# Probes de orquestador: sin log por request.
_UNLOGGED_PATHS = frozenset({"/healthz", "/readyz"})


def pick_request_id(header_value: str | None) -> str:
    candidate = (header_value or "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_CHARS:
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            logger.exception("Request crashed before a response was built")
            raise
        finally:
            if request.url.path not in _UNLOGGED_PATHS:
                logger.info(
                    "Request handled",
                    extra={
                        "status_code": status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
            clear_context()
