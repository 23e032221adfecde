"""Validación de campos de perfil compartida por alta directa y registro."""

from __future__ import annotations

from typing import Final, Optional, Tuple

MIN_PASSWORD_CHARS: Final[int] = 6
MAX_NAME_CHARS: Final[int] = 120


def normalize_email(raw: str | None) -> str:
    return (raw or "").strip().lower()


def validate_name(raw: str | None) -> Tuple[str, Optional[str]]:
    name = (raw or "").strip()
    if not name:
        return name, "Name is required."
    if len(name) > MAX_NAME_CHARS:
        return name, f"Name must be at most {MAX_NAME_CHARS} characters."
    return name, None


def validate_profile(
    raw_name: str | None, raw_email: str | None, password: str | None
) -> Tuple[str, str, Optional[str]]:
    """Devuelve (name, email, problema). problema=None si todo es válido."""
    name, problem = validate_name(raw_name)
    email = normalize_email(raw_email)
    if problem:
        return name, email, problem

    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        return name, email, "A valid email is required."

    if len(password or "") < MIN_PASSWORD_CHARS:
        return (
            name,
            email,
            f"Password must be at least {MIN_PASSWORD_CHARS} characters.",
        )

    return name, email, None
