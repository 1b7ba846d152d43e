"""Shared utilities: datetime and ID generators."""

from craftly.shared.utils.datetime import as_datetime, ensure_utc, utc_now
from craftly.shared.utils.generators import generate_cuid, generate_recovery_code

__all__ = [
    "as_datetime",
    "ensure_utc",
    "generate_cuid",
    "generate_recovery_code",
    "utc_now",
]
