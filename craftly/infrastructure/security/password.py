"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated.

Accounts created by the earlier Node backend store an unsalted SHA-256 hex
digest instead. Those still verify, and needs_rehash() tells the sign-in
flow to replace them with a bcrypt hash once the password is known.
"""

import base64
import hashlib
import hmac
import re

import bcrypt

_LEGACY_SHA256 = re.compile(r"[0-9a-f]{64}")


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def is_legacy_sha256_hash(hashed_password: str | None) -> bool:
    return bool(hashed_password) and _LEGACY_SHA256.fullmatch(hashed_password) is not None


def legacy_sha256_hash(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Return True if plain_password matches hashed_password (bcrypt or legacy SHA-256)."""
    if not hashed_password:
        return False
    if is_legacy_sha256_hash(hashed_password):
        return hmac.compare_digest(legacy_sha256_hash(plain_password), hashed_password)
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def needs_rehash(hashed_password: str | None) -> bool:
    """True for stored hashes that predate bcrypt."""
    return is_legacy_sha256_hash(hashed_password)


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt())
    return hashed.decode("utf-8")
