"""Auth API schemas.

Fields are optional so that missing values reach the service and produce
the account-specific messages ("Email, password, and fullName are required").
"""

from craftly.schemas.common import CamelModel


class SignUpRequest(CamelModel):
    email: str | None = None
    password: str | None = None
    full_name: str | None = None


class SignInRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class ChangePasswordRequest(CamelModel):
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class CheckRecoveryCodesRequest(CamelModel):
    email: str | None = None


class RecoveryResetRequest(CamelModel):
    """Body for POST /verify-recovery-code-and-reset."""

    email: str | None = None
    recovery_code: str | None = None
    new_password: str | None = None


class ViewRecoveryCodesRequest(CamelModel):
    email: str | None = None
    password: str | None = None
