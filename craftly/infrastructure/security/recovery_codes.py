"""Single-use account recovery codes.

Codes are shown to the user once at sign-up (and on request with the
password). Each stored entry keeps the plain code for that view, a SHA-256
hash used for matching, and a used flag.
"""

import hashlib
import hmac
from datetime import datetime
from typing import Any

from craftly.core.constants import RECOVERY_CODES_PER_USER
from craftly.shared.utils import generate_recovery_code, utc_now


def hash_recovery_code(code: str) -> str:
    return hashlib.sha256(code.strip().upper().encode("utf-8")).hexdigest()


def generate_recovery_codes(
    count: int = RECOVERY_CODES_PER_USER,
    created_at: datetime | None = None,
) -> tuple[list[str], list[dict[str, Any]]]:
    """Return (plain codes, stored entries) for a new set of recovery codes."""
    created = created_at or utc_now()
    codes = [generate_recovery_code() for _ in range(count)]
    entries = [
        {
            "code": code,
            "codeHash": hash_recovery_code(code),
            "used": False,
            "usedAt": None,
            "createdAt": created,
        }
        for code in codes
    ]
    return codes, entries


def codes_remaining(entries: list[dict[str, Any]] | None) -> int:
    return sum(1 for entry in entries or [] if not entry.get("used"))


def find_unused_code(entries: list[dict[str, Any]] | None, code: str) -> int | None:
    """Index of the unused entry matching code, or None."""
    wanted = hash_recovery_code(code)
    for index, entry in enumerate(entries or []):
        if entry.get("used"):
            continue
        stored = entry.get("codeHash") or ""
        if stored and hmac.compare_digest(stored, wanted):
            return index
    return None
