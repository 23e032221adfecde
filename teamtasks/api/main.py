"""
Name: Team Tasks API (ASGI entry point)

Responsibilities:
  - Build the FastAPI app: routers, middleware, RFC 7807 handlers
  - Own the process lifecycle: open/close the Postgres pool, run the dev seed
  - Liveness (/healthz) and readiness (/readyz) probes

Collaborators:
  - container: repository singletons (in-memory when APP_ENV=test|ci)
  - interfaces.api.http.router: /v1 users, tasks, reports
  - api.auth_routes: /auth/*

Notes:
  - Run with: uvicorn teamtasks.api.main:app
  - add_middleware stacks outside-in: the last one added runs first, so CORS
    answers preflights before RequestContextMiddleware logs anything.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.dev_seed_admin import ensure_dev_super_admin
from ..container import get_user_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router as v1_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

_OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and session"},
    {"name": "users", "description": "Roster, approval queue and role hierarchy"},
    {"name": "tasks", "description": "Assignment, field-level edits and status"},
    {"name": "reports", "description": "Daily/weekly/monthly task snapshots"},
]


def _open_storage(settings: Settings) -> bool:
    """Abre el pool si corresponde. Devuelve True si hay que cerrarlo."""
    if settings.uses_in_memory_storage():
        return False
    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
    )
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    owns_pool = _open_storage(settings)
    try:
        try:
            ensure_dev_super_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
                env=os.environ,
            )
        except Exception:
            logger.exception("Dev admin seed failed; aborting startup")
            raise

        logger.info(
            "Team Tasks API started",
            extra={
                "app_env": settings.app_env,
                "storage": "postgres" if owns_pool else "in-memory",
                "report_timezone": settings.report_timezone,
            },
        )
        yield
    finally:
        if owns_pool:
            close_pool()
        logger.info("Team Tasks API stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Team Tasks API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=_OPENAPI_TAGS,
    )

    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    application.include_router(auth_router)
    application.include_router(v1_router, prefix="/v1")
    register_exception_handlers(application)

    application.add_api_route("/healthz", healthz, methods=["GET"], include_in_schema=False)
    application.add_api_route("/readyz", readyz, methods=["GET"], include_in_schema=False)
    return application


def _storage_status() -> str:
    try:
        reachable = get_user_repository().ping()
    except DatabaseError as exc:
        logger.warning("Storage ping failed", extra={"error_id": exc.error_id})
        reachable = False
    return "connected" if reachable else "disconnected"


def _probe_body(request: Request, db_status: str) -> dict:
    return {
        "ok": db_status == "connected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }


def healthz(request: Request):
    """Liveness: el proceso responde; `db` es informativo."""
    return _probe_body(request, _storage_status())


def readyz(request: Request):
    """Readiness: 503 mientras el storage no responda."""
    body = _probe_body(request, _storage_status())
    return JSONResponse(body, status_code=200 if body["ok"] else 503)


app = create_app()
