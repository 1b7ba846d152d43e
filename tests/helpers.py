"""Builders and header helpers shared by the API tests."""

from craftly.infrastructure.security.jwt import create_user_token
from craftly.shared.utils.datetime import utc_now

TEST_PASSWORD = "secret123"


def make_user(uid: str, email: str, password_hash: str, **fields) -> dict:
    now = utc_now()
    user = {
        "uid": uid,
        "fullName": "Juan Dela Cruz",
        "email": email,
        "passwordHash": password_hash,
        "role": "buyer",
        "roles": ["buyer"],
        "city": "Dagupan",
        "postalCode": "2400",
        "country": "Philippines",
        "recoveryCodes": [],
        "createdAt": now,
        "updatedAt": now,
    }
    user.update(fields)
    return user


def user_headers(uid: str) -> dict[str, str]:
    """Legacy identity header accepted when ALLOW_USER_ID_HEADER is on."""
    return {"X-User-ID": uid}


def bearer_headers(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(uid)}"}
