"""Security: caller token verification and password hashing."""

from villagetech.infrastructure.security.jwt import create_access_token, verify_token
from villagetech.infrastructure.security.password import (
    get_password_hash,
    hash_password_async,
    verify_password,
)

__all__ = [
    "create_access_token",
    "get_password_hash",
    "hash_password_async",
    "verify_password",
    "verify_token",
]
