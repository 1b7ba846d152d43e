"""Account use cases: sign-up, sign-in, password change and recovery codes.

Users are looked up by lowercased email. Password hashing runs in a worker
thread (bcrypt is CPU bound). Sign-in with an unknown email still performs
one hash comparison so response time does not reveal whether the account
exists.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from craftly.application.dtos.user import AuthResult, UserResult
from craftly.core.constants import DEFAULT_CITY, DEFAULT_COUNTRY, DEFAULT_POSTAL_CODE
from craftly.domain.enums import Role
from craftly.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    RecoveryCodesExhaustedException,
    ResourceNotFoundException,
    ValidationException,
)
from craftly.domain.validators import (
    MIN_PASSWORD_LENGTH,
    UNSUPPORTED_DOMAIN_MESSAGE,
    FULL_NAME_PATTERN,
    is_allowed_email_domain,
    is_valid_email,
)
from craftly.infrastructure.firebase._rest_client import DocumentExistsError
from craftly.infrastructure.security.recovery_codes import (
    codes_remaining,
    find_unused_code,
    generate_recovery_codes,
)
from craftly.shared.utils.datetime import utc_now
from craftly.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
INVALID_CREDENTIALS = "Invalid email or password"

_dummy_hash_cache: str | None = None


async def _get_dummy_hash(auth_security: Any) -> str:
    """Return a valid bcrypt hash for dummy comparison (timing-attack mitigation)."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            auth_security.hash_password, "not-a-real-password"
        )
    return _dummy_hash_cache


class AuthService:
    """Email/password accounts stored in the users collection."""

    def __init__(self, user_repo: Any, auth_security: Any) -> None:
        self._user_repo = user_repo
        self._auth_security = auth_security

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(self._auth_security.hash_password, password)

    async def _verify(self, password: str, hashed: str | None) -> bool:
        if not hashed:
            return False
        return await asyncio.to_thread(
            self._auth_security.verify_password, password, hashed
        )

    def _issue(self, user: UserResult, recovery_codes: list[str] | None = None) -> AuthResult:
        token = self._auth_security.create_access_token(
            {"sub": user.uid, "email": user.email}
        )
        return AuthResult(user=user, access_token=token, recovery_codes=recovery_codes or [])

    async def _require_user(self, email: str) -> dict[str, Any]:
        user = await self._user_repo.get_by_email(email)
        if user is None:
            raise ResourceNotFoundException("User", email)
        return user

    async def signup(self, email: str | None, password: str | None, full_name: str | None) -> AuthResult:
        """Create a buyer account with ten recovery codes.

        Raises:
            ValidationException: Missing or malformed input.
            ConflictException: The email is already registered.
        """
        if not email or not password or not full_name:
            raise ValidationException("Email, password, and fullName are required")
        if not FULL_NAME_PATTERN.fullmatch(full_name.strip()):
            raise ValidationException(
                "Full name must contain only letters, spaces, hyphens, and apostrophes. "
                "Numbers are not allowed.",
                field="fullName",
            )
        if not is_valid_email(email):
            raise ValidationException("Invalid email address", field="email")
        if not is_allowed_email_domain(email):
            raise ValidationException(UNSUPPORTED_DOMAIN_MESSAGE, field="email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(PASSWORD_TOO_SHORT, field="password")

        normalized = email.strip().lower()
        if await self._user_repo.get_by_email(normalized) is not None:
            raise ConflictException("Email already in use", resource="user")

        now = utc_now()
        uid = generate_cuid()
        codes, entries = generate_recovery_codes(created_at=now)
        document = {
            "uid": uid,
            "fullName": full_name.strip(),
            "email": normalized,
            "passwordHash": await self._hash(password),
            "role": Role.BUYER.value,
            "roles": [Role.BUYER.value],
            "contactNumber": None,
            "streetAddress": None,
            "barangay": None,
            "city": DEFAULT_CITY,
            "postalCode": DEFAULT_POSTAL_CODE,
            "country": DEFAULT_COUNTRY,
            "gcashName": None,
            "gcashNumber": None,
            "recoveryCodes": entries,
            "recoveryCodesUpdatedAt": now,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            await self._user_repo.create(uid, document)
        except DocumentExistsError as e:
            raise ConflictException("Email already in use", resource="user") from e
        logger.info("User account created: %s", uid)
        return self._issue(UserResult.from_document(document), codes)

    async def signin(self, email: str | None, password: str | None) -> AuthResult:
        """Verify credentials; legacy SHA-256 hashes are upgraded to bcrypt on success."""
        if not email or not password:
            raise ValidationException("Email and password are required")
        user = await self._user_repo.get_by_email(email)
        if user is None:
            await self._verify(password, await _get_dummy_hash(self._auth_security))
            raise AuthenticationException(INVALID_CREDENTIALS)
        stored = user.get("passwordHash")
        if not await self._verify(password, stored):
            raise AuthenticationException(INVALID_CREDENTIALS)
        if self._auth_security.needs_rehash(stored):
            await self._user_repo.update(
                user["id"], {"passwordHash": await self._hash(password), "updatedAt": utc_now()}
            )
            logger.info("Upgraded legacy password hash for user %s", user["id"])
        return self._issue(UserResult.from_document(user))

    async def get_user(self, uid: str) -> UserResult:
        user = await self._user_repo.get_by_id(uid)
        if user is None:
            raise ResourceNotFoundException("User", uid)
        return UserResult.from_document(user)

    async def change_password(
        self,
        email: str | None,
        current_password: str | None,
        new_password: str | None,
    ) -> None:
        if not email or not current_password or not new_password:
            raise ValidationException("Email, current password, and new password are required")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(PASSWORD_TOO_SHORT, field="newPassword")
        if new_password == current_password:
            raise ValidationException(
                "New password must be different from current password", field="newPassword"
            )
        user = await self._require_user(email)
        if not await self._verify(current_password, user.get("passwordHash")):
            raise AuthenticationException("Current password is incorrect")
        now = utc_now()
        await self._user_repo.update(
            user["id"],
            {
                "passwordHash": await self._hash(new_password),
                "updatedAt": now,
                "lastPasswordChange": now,
            },
        )
        logger.info("Password changed for user %s", user["id"])

    async def check_recovery_codes(self, email: str | None) -> int:
        """Number of unused recovery codes.

        Raises:
            RecoveryCodesExhaustedException: None remain.
        """
        if not email:
            raise ValidationException("Email is required", field="email")
        user = await self._require_user(email)
        remaining = codes_remaining(user.get("recoveryCodes"))
        if remaining == 0:
            raise RecoveryCodesExhaustedException()
        return remaining

    async def reset_with_recovery_code(
        self,
        email: str | None,
        recovery_code: str | None,
        new_password: str | None,
    ) -> int:
        """Spend one recovery code to set a new password. Returns codes remaining."""
        if not email or not recovery_code or not new_password:
            raise ValidationException("Email, recovery code, and new password are required")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(PASSWORD_TOO_SHORT, field="newPassword")
        user = await self._require_user(email)
        entries = [dict(entry) for entry in user.get("recoveryCodes") or []]
        index = find_unused_code(entries, recovery_code)
        if index is None:
            raise AuthenticationException("Invalid or already used recovery code")
        now = utc_now()
        entries[index].update(used=True, usedAt=now)
        await self._user_repo.update(
            user["id"],
            {
                "passwordHash": await self._hash(new_password),
                "recoveryCodes": entries,
                "updatedAt": now,
                "lastPasswordRecovery": now,
            },
        )
        remaining = codes_remaining(entries)
        logger.info(
            "Password reset with recovery code for user %s (%s codes remaining)",
            user["id"],
            remaining,
        )
        return remaining

    async def view_recovery_codes(
        self, email: str | None, password: str | None
    ) -> tuple[list[dict[str, Any]], int]:
        """Recovery codes (without hashes) and the unused count, after re-checking the password."""
        if not email or not password:
            raise ValidationException("Email and password are required")
        user = await self._require_user(email)
        if not await self._verify(password, user.get("passwordHash")):
            raise AuthenticationException("Invalid password")
        entries = user.get("recoveryCodes") or []
        visible = [
            {
                "code": entry.get("code"),
                "used": bool(entry.get("used")),
                "usedAt": entry.get("usedAt"),
                "createdAt": entry.get("createdAt"),
            }
            for entry in entries
        ]
        return visible, codes_remaining(entries)
