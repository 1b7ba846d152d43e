"""Tests for password hashing, JWT tokens and recovery codes."""

import string
from datetime import timedelta

import pytest

from craftly.infrastructure.security.jwt import (
    create_access_token,
    create_user_token,
    verify_token,
)
from craftly.infrastructure.security.password import (
    get_password_hash,
    is_legacy_sha256_hash,
    legacy_sha256_hash,
    needs_rehash,
    verify_password,
)
from craftly.infrastructure.security.recovery_codes import (
    codes_remaining,
    find_unused_code,
    generate_recovery_codes,
    hash_recovery_code,
)


def test_bcrypt_hash_verifies() -> None:
    hashed = get_password_hash("secret123")
    assert hashed.startswith("$2")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not needs_rehash(hashed)


def test_long_passwords_are_not_truncated() -> None:
    """The SHA-256 pre-hash keeps bytes past bcrypt's 72-byte limit significant."""
    base = "a" * 80
    hashed = get_password_hash(base + "x")
    assert not verify_password(base + "y", hashed)


def test_legacy_sha256_hash_verifies_and_needs_rehash() -> None:
    legacy = legacy_sha256_hash("secret123")
    assert is_legacy_sha256_hash(legacy)
    assert verify_password("secret123", legacy)
    assert not verify_password("secret124", legacy)
    assert needs_rehash(legacy)


@pytest.mark.parametrize("stored", [None, "", "not-a-hash"])
def test_verify_password_rejects_missing_or_garbage_hash(stored) -> None:
    assert verify_password("secret123", stored) is False


def test_token_round_trip() -> None:
    payload = verify_token(create_user_token("user1", "juan@gmail.com"))
    assert payload["sub"] == "user1"
    assert payload["email"] == "juan@gmail.com"


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"sub": "user1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)


def test_tampered_token_is_rejected() -> None:
    token = create_user_token("user1")
    with pytest.raises(ValueError):
        verify_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))


def test_generate_recovery_codes() -> None:
    codes, entries = generate_recovery_codes()
    assert len(codes) == 10
    assert len(set(codes)) == 10
    allowed = set(string.ascii_uppercase + string.digits)
    for code, entry in zip(codes, entries, strict=True):
        assert len(code) == 12
        assert set(code) <= allowed
        assert entry["codeHash"] == hash_recovery_code(code)
        assert entry["used"] is False
    assert codes_remaining(entries) == 10


def test_find_unused_code_ignores_case_and_used_entries() -> None:
    codes, entries = generate_recovery_codes(count=3)
    assert find_unused_code(entries, codes[1].lower()) == 1
    entries[1]["used"] = True
    assert find_unused_code(entries, codes[1]) is None
    assert codes_remaining(entries) == 2
    assert find_unused_code(entries, "NOPE") is None
