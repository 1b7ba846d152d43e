"""Sign-in, sign-up and account recovery; keeps the session store in sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from craftly.client.errors import ClientError
from craftly.client.models import SessionUser
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.domain.validators import validate_email, validate_name, validate_password


@dataclass(frozen=True)
class SignUpResult:
    user: SessionUser
    recovery_codes: list[str] = field(default_factory=list)


def _session_user(data: dict[str, Any]) -> SessionUser:
    roles = data.get("roles") or ([data["role"]] if data.get("role") else [])
    return SessionUser(
        uid=data["uid"],
        email=data.get("email") or "",
        display_name=data.get("displayName") or "",
        roles=roles,
        token=data.get("accessToken"),
    )


class AuthRepository(BaseRepository):
    async def sign_in(self, email: str, password: str) -> Result[SessionUser]:
        async def call() -> SessionUser:
            error = validate_email(email) or validate_password(password)
            if error:
                raise ClientError(error)
            data = await self._api.post(
                "/auth/signin", {"email": email.strip(), "password": password}
            )
            user = _session_user(data)
            self._session.save_user(user)
            return user

        return await self._run("signing in", call)

    async def sign_up(self, full_name: str, email: str, password: str) -> Result[SignUpResult]:
        """Create an account and sign in; the recovery codes are only shown once."""

        async def call() -> SignUpResult:
            error = (
                validate_name(full_name, "Full name")
                or validate_email(email)
                or validate_password(password)
            )
            if error:
                raise ClientError(error)
            data = await self._api.post(
                "/auth/signup",
                {"fullName": full_name.strip(), "email": email.strip(), "password": password},
            )
            user = _session_user(data)
            self._session.save_user(user)
            return SignUpResult(user=user, recovery_codes=list(data.get("recoveryCodes") or []))

        return await self._run("signing up", call)

    def sign_out(self) -> None:
        self._session.clear()

    def is_logged_in(self) -> bool:
        return self._session.is_logged_in()

    async def refresh_current_user(self) -> Result[SessionUser]:
        """Reload the user from /auth/me, keeping the stored token."""

        async def call() -> SessionUser:
            current = self._require_user()
            data = await self._api.get("/auth/me")
            user = _session_user({**data, "accessToken": current.token})
            self._session.save_user(user)
            return user

        return await self._run("loading current user", call)

    async def change_password(
        self, email: str, current_password: str, new_password: str
    ) -> Result[str]:
        async def call() -> str:
            data = await self._api.post(
                "/auth/change-password",
                {
                    "email": email,
                    "currentPassword": current_password,
                    "newPassword": new_password,
                },
            )
            return data.get("message", "")

        return await self._run("changing password", call)

    async def check_recovery_codes(self, email: str) -> Result[int]:
        async def call() -> int:
            data = await self._api.post("/auth/check-recovery-codes", {"email": email})
            return int(data.get("codesRemaining", 0))

        return await self._run("checking recovery codes", call)

    async def reset_with_recovery_code(
        self, email: str, recovery_code: str, new_password: str
    ) -> Result[int]:
        """Reset the password with a recovery code; returns the codes left."""

        async def call() -> int:
            data = await self._api.post(
                "/auth/verify-recovery-code-and-reset",
                {"email": email, "recoveryCode": recovery_code, "newPassword": new_password},
            )
            return int(data.get("remainingCodes", 0))

        return await self._run("resetting password", call)

    async def view_recovery_codes(self, email: str, password: str) -> Result[dict[str, Any]]:
        return await self._run(
            "loading recovery codes",
            lambda: self._api.post(
                "/auth/view-recovery-codes", {"email": email, "password": password}
            ),
        )
