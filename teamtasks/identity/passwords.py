"""
===============================================================================
TARJETA CRC - identity/passwords.py
===============================================================================
Responsabilidades:
    - Argon2id para los passwords de usuarios (alta directa, registro, seed).
    - Verificación tolerante: un hash corrupto o ajeno cuenta como "no coincide".

Colaboradores:
    - container: inyecta hash_password en Register/CreateUser.
    - identity.auth_users: verify_password en el login.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_argon2 = PasswordHasher()


def hash_password(password: str) -> str:
    return _argon2.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    # VerifyMismatchError hereda de VerificationError.
    try:
        return _argon2.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """True si el hash se generó con parámetros distintos a los actuales."""
    try:
        return _argon2.check_needs_rehash(password_hash)
    except InvalidHashError:
        return True
