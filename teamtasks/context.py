"""
===============================================================================
TARJETA CRC - teamtasks/context.py
===============================================================================
Responsabilidades:
  - Guardar, por request, los datos que los logs necesitan para correlacionar:
    request_id, method, path y el actor autenticado (id + rol).

Colaboradores:
  - crosscutting.middleware: abre y cierra el contexto de cada request.
  - identity.auth_users: agrega el actor al resolver la sesión.
  - crosscutting.logger: lo vuelca en cada línea de log.

Restricciones:
  - Un único ContextVar con un dict inmutable por request (copy-on-write).
  - Las claves vacías no aparecen en get_context_dict().
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from types import MappingProxyType
from typing import Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})

_request_context: ContextVar[Mapping[str, str]] = ContextVar(
    "teamtasks_request_context", default=_EMPTY
)


def _merge(**values: str) -> None:
    current = dict(_request_context.get())
    for key, value in values.items():
        if value:
            current[key] = value
        else:
            current.pop(key, None)
    _request_context.set(MappingProxyType(current))


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    _merge(request_id=request_id, method=method, path=path)


def set_actor_context(*, user_id: str = "", role: str = "") -> None:
    _merge(user_id=user_id, user_role=role)


def get_context_dict() -> dict[str, str]:
    return dict(_request_context.get())


def clear_context() -> None:
    _request_context.set(_EMPTY)
