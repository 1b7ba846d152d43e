"""ID and value generators (CUID document IDs, recovery codes)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

RECOVERY_CODE_ALPHABET = string.ascii_uppercase + string.digits
RECOVERY_CODE_LENGTH = 12


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Used for Firestore document IDs the service creates itself (users,
    orders, products, notifications, messages).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_recovery_code(length: int = RECOVERY_CODE_LENGTH) -> str:
    """Return a random uppercase alphanumeric code (e.g. "K7X9M2Q5P8R3")."""
    return "".join(secrets.choice(RECOVERY_CODE_ALPHABET) for _ in range(length))
