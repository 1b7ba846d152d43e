"""DTOs for auth and account use cases (no password material)."""

from dataclasses import dataclass, field
from typing import Any

from craftly.domain.roles import primary_role, roles_of


@dataclass(frozen=True)
class UserResult:
    """User read-model returned by sign-in, sign-up and /me."""

    uid: str
    email: str
    display_name: str
    role: str
    roles: tuple[str, ...]

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "UserResult":
        roles = roles_of(data) or ["buyer"]
        return cls(
            uid=data.get("uid") or data.get("id", ""),
            email=data.get("email", ""),
            display_name=data.get("fullName") or "",
            role=data.get("role") or primary_role(roles),
            roles=tuple(roles),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "role": self.role,
            "roles": list(self.roles),
        }


@dataclass(frozen=True)
class AuthResult:
    """Signed-in user plus access token; recovery codes only on sign-up."""

    user: UserResult
    access_token: str
    recovery_codes: list[str] = field(default_factory=list)
