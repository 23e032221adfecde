"""
===============================================================================
TARJETA CRC - router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz v1 que se incluye en FastAPI.
  - Documentar en OpenAPI los errores problem+json comunes.
  - Componer routers por feature (users/tasks/reports).

Notas:
  - Este router se incluye desde teamtasks/api/main.py con prefix="/v1".
  - build_router() permite testear la composición sin side-effects.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.reports import router as reports_router
from .routers.tasks import router as tasks_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz v1."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(tasks_router)
    api_router.include_router(reports_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
