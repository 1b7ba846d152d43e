"""Security: password hashing, JWT and recovery codes."""

from craftly.infrastructure.security.jwt import (
    create_access_token,
    create_user_token,
    verify_token,
)
from craftly.infrastructure.security.password import (
    get_password_hash,
    needs_rehash,
    verify_password,
)

__all__ = [
    "create_access_token",
    "create_user_token",
    "get_password_hash",
    "needs_rehash",
    "verify_password",
    "verify_token",
]
