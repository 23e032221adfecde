"""
===============================================================================
TARJETA CRC - identity/auth_users.py
===============================================================================

Módulo:
    Login, JWT de acceso y sesión por request

Responsabilidades:
    - Chequear email + password (Argon2) y refrescar hashes viejos.
    - Firmar el access token (HS256) y validarlo al volver.
    - Armar un AuthSession con el usuario ACTUAL del repositorio y cortar
      la request si la sesión venció o el usuario dejó de estar activo.
    - Dependencias FastAPI: require_session / require_user / require_roles.
    - El token llega por header Bearer o, en su defecto, por cookie.

Colaboradores:
    - crosscutting.config.get_settings (secreto, TTL, cookie)
    - crosscutting.error_responses (401/403 en problem+json)
    - container.get_user_repository
    - domain.task_policy.UserSnapshot (actor de los casos de uso)
    - context.set_actor_context (user_id/rol en los logs)

Notas:
    - Los permisos nunca viajan en el token: rol y vínculos se leen del
      repositorio en cada request.
    - Ni tokens ni passwords se loguean.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID

import jwt
from fastapi import Header, Request

from ..container import get_user_repository
from ..context import set_actor_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.roles import UserRole, parse_role
from ..domain.task_policy import UserSnapshot
from .passwords import hash_password, needs_rehash, verify_password

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_KIND = "access"
DEFAULT_ACCESS_TOKEN_COOKIE = "access_token"

# sub, email, role y exp son obligatorios; typ es opcional pero si viene
# tiene que ser "access".
_REQUIRED_CLAIMS = ("sub", "email", "role", "exp")


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool

    @property
    def cookie_name(self) -> str:
        return (self.jwt_cookie_name or "").strip() or DEFAULT_ACCESS_TOKEN_COOKIE


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_access_ttl_minutes=settings.jwt_access_ttl_minutes,
        jwt_cookie_name=settings.jwt_cookie_name,
        jwt_cookie_secure=settings.jwt_cookie_secure,
    )


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: str
    email: str
    role: UserRole
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Usuario autenticado + vencimiento del token que lo trajo."""

    user: User
    expires_at: datetime

    @property
    def actor(self) -> UserSnapshot:
        return UserSnapshot.from_user(self.user)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def ensure_active(self, now: datetime | None = None) -> AuthSession:
        if self.is_expired(now):
            raise unauthorized("Session expired.")
        if not self.user.is_active:
            raise forbidden("User is not active.")
        return self


# =============================================================================
# Credenciales
# =============================================================================


def authenticate_user(email: str, password: str) -> User | None:
    """
    None ante cualquier credencial inválida (no distingue email desconocido de
    password incorrecta). Con password correcta pero registro pendiente => 403.
    """
    login_email = (email or "").strip().lower()
    if not login_email:
        return None

    repo = get_user_repository()
    user = repo.get_user_by_email(login_email)
    if user is None or not verify_password(password, user.password_hash):
        return None

    if not user.is_active:
        logger.warning("Login blocked: pending approval", extra={"user_id": str(user.id)})
        raise forbidden("Your account is pending approval.")

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        user = repo.update_user(user) or user
    return user


# =============================================================================
# JWT
# =============================================================================


def create_access_token(
    user: User,
    settings: AuthSettings | None = None,
    *,
    now: datetime | None = None,
) -> tuple[str, int]:
    """Devuelve (token, segundos de vida)."""
    cfg = settings or get_auth_settings()
    issued_at = now or datetime.now(timezone.utc)
    ttl_seconds = int(cfg.jwt_access_ttl_minutes * 60)

    claims: dict[str, Any] = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "typ": ACCESS_TOKEN_KIND,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(seconds=ttl_seconds)).timestamp()),
    }
    return jwt.encode(claims, cfg.jwt_secret, algorithm=JWT_ALGORITHM), ttl_seconds


def _verified_claims(token: str, secret: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(_REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid token.") from exc


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Firma, vencimiento y forma de los claims. Todo error => 401."""
    cfg = settings or get_auth_settings()
    claims = _verified_claims(token, cfg.jwt_secret)

    if claims.get("typ", ACCESS_TOKEN_KIND) != ACCESS_TOKEN_KIND:
        raise unauthorized("Invalid token type.")

    role = parse_role(claims["role"])
    if not claims["sub"] or not claims["email"] or role is None:
        raise unauthorized("Invalid token.")

    return TokenPayload(
        user_id=str(claims["sub"]),
        email=str(claims["email"]),
        role=role,
        expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
    )


def build_session(token: str, *, now: datetime | None = None) -> AuthSession:
    payload = decode_access_token(token)
    try:
        user_id = UUID(payload.user_id)
    except ValueError as exc:
        raise unauthorized("Invalid token.") from exc

    # R: usuario borrado después de emitido el token => 401.
    user = get_user_repository().get_user(user_id)
    if user is None:
        raise unauthorized("Invalid token.")
    return AuthSession(user=user, expires_at=payload.expires_at).ensure_active(now)


# =============================================================================
# Token desde la request
# =============================================================================


def _bearer_value(authorization: str | None) -> str | None:
    scheme, _, credentials = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip() or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Header Bearer primero; si no hay, la cookie de sesión."""
    return _bearer_value(authorization) or request.cookies.get(
        get_auth_settings().cookie_name
    )


# =============================================================================
# Dependencias FastAPI
# =============================================================================


def _session_guard(allowed: frozenset[UserRole] | None = None) -> Callable:
    async def guard(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> AuthSession:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Missing bearer token.")

        session = build_session(token)
        request.state.session = session
        set_actor_context(user_id=str(session.user.id), role=session.user.role.value)

        if allowed is not None and session.user.role not in allowed:
            raise forbidden("Insufficient role.")
        return session

    return guard


def require_session() -> Callable:
    """Sesión vigente de un usuario activo."""
    return _session_guard()


def require_roles(*roles: UserRole | str) -> Callable:
    """Como require_session, pero 403 si el rol no está en `roles`."""
    return _session_guard(frozenset(UserRole(role) for role in roles))


def require_user() -> Callable:
    """Entrega la entidad User en vez de la sesión."""
    guard = _session_guard()

    async def current_user(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> User:
        return (await guard(request, authorization)).user

    return current_user
