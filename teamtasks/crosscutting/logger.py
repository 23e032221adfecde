# teamtasks/crosscutting/logger.py
"""
===============================================================================
TARJETA CRC - crosscutting/logger.py
===============================================================================
Componente:
  Logger "teamtasks" (una línea JSON por evento).

Responsabilidades:
  - Serializar cada LogRecord con los campos `extra` del caller.
  - Sumar el contexto de la request activa (request_id, path, actor).
  - Ocultar credenciales: password, hashes, tokens, cookies.

Colaboradores:
  - teamtasks/context.py (ContextVars)
  - LOG_LEVEL / LOG_JSON (env)

Notas:
  - Se configura leyendo env directo: Settings exige DATABASE_URL fuera de
    test y este módulo se importa antes (alembic, scripts).
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Mapping

# Atributos estándar de LogRecord (todo lo demás vino por `extra=`).
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("x", logging.INFO, "x", 0, "", None, None))
) | {"message", "asctime"}

_SECRET_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "new_password",
        "jwt_secret",
        "secret",
        "token",
        "access_token",
        "authorization",
        "cookie",
    }
)
_REDACTED = "[redacted]"
_MAX_TEXT = 2_000


def scrub(key: str, value: Any) -> Any:
    """Valor apto para JSON con secretos ocultos (recorre dicts y listas)."""
    if key.lower() in _SECRET_KEYS:
        return _REDACTED
    if isinstance(value, Mapping):
        return {str(k): scrub(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [scrub(key, v) for v in value]
    if isinstance(value, str) and len(value) > _MAX_TEXT:
        return value[:_MAX_TEXT] + "..."
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        event.update(get_context_dict())
        event.update(
            {
                key: scrub(key, value)
                for key, value in record.__dict__.items()
                if key not in _RECORD_ATTRS
            }
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            event["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(event, ensure_ascii=False, default=str)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def setup_logger(name: str = "teamtasks") -> logging.Logger:
    """Idempotente: re-importar el módulo no duplica handlers."""
    log = logging.getLogger(name)
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    log.setLevel(level if isinstance(logging.getLevelName(level), int) else logging.INFO)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if _env_flag("LOG_JSON", True):
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        log.addHandler(handler)

    return log


logger = setup_logger()
