"""
===============================================================================
TARJETA CRC - teamtasks/api/auth_routes.py
===============================================================================

Responsabilidades:
  - /auth/register: alta pública, la cuenta nace PENDING_APPROVAL y sin token.
  - /auth/login: JWT en el body y en cookie httpOnly.
  - /auth/logout: borra la cookie (no exige sesión).
  - /auth/me: el usuario de la sesión con nombres de supervisor/manager.

Colaboradores:
  - identity.auth_users
  - container.get_register_user_use_case
  - interfaces.api.http.schemas.users.UserRes
===============================================================================
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from ..application.usecases import RegisterUserUseCase
from ..application.usecases.common import resolve_refs
from ..container import get_register_user_use_case, get_user_repository
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, unauthorized
from ..domain.entities import User
from ..identity.auth_users import (
    AuthSession,
    authenticate_user,
    create_access_token,
    get_auth_settings,
    require_session,
)
from ..interfaces.api.http.error_mapping import raise_service_error
from ..interfaces.api.http.schemas.users import UserRes

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)

EmailField = Annotated[str, Field(min_length=3, max_length=320)]
PasswordField = Annotated[str, Field(min_length=1, max_length=512)]


class Credentials(BaseModel):
    email: EmailField
    password: PasswordField

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class RegistrationReq(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailField
    password: PasswordField


class LoginRes(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes


def _session_cookie(response: Response, token: str | None, max_age: int = 0) -> None:
    """token=None borra la cookie."""
    cfg = get_auth_settings()
    common = dict(path="/", samesite="lax", secure=cfg.jwt_cookie_secure)
    if token is None:
        response.delete_cookie(key=cfg.cookie_name, **common)
    else:
        response.set_cookie(
            key=cfg.cookie_name, value=token, httponly=True, max_age=max_age, **common
        )


def _present(user: User) -> UserRes:
    refs = resolve_refs(get_user_repository(), (user.supervisor_id, user.manager_id))
    return UserRes.from_user(user, refs)


@router.post("/register", response_model=UserRes, status_code=201)
def register(
    req: RegistrationReq,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Queda pendiente hasta que un super_admin asigne rol y vínculos."""
    result = use_case.execute(req.name, req.email, req.password)
    if result.error is not None:
        raise_service_error(result.error, resource="User")
    return UserRes.from_user(result.user, result.refs)


@router.post("/login", response_model=LoginRes)
def login(req: Credentials, response: Response):
    user = authenticate_user(req.email, req.password)
    if user is None:
        raise unauthorized("Invalid credentials.")

    token, expires_in = create_access_token(user)
    _session_cookie(response, token, expires_in)
    return LoginRes(access_token=token, expires_in=expires_in, user=_present(user))


@router.post("/logout")
def logout(response: Response):
    _session_cookie(response, None)
    return {"ok": True}


@router.get("/me", response_model=UserRes)
def me(session: AuthSession = Depends(require_session())):
    return _present(session.user)
