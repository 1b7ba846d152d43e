"""Auth API: sign-up, sign-in, password change, recovery codes and current user.

Sign-up and sign-in return a JWT (accessToken) alongside the user. Clients
that predate tokens keep sending X-User-ID, which get_current_user_id
still accepts when ALLOW_USER_ID_HEADER is set.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import CurrentUserId, get_auth_service
from craftly.application.services.auth_service import AuthService
from craftly.core.limiter import limit_auth
from craftly.schemas.auth import (
    ChangePasswordRequest,
    CheckRecoveryCodesRequest,
    RecoveryResetRequest,
    SignInRequest,
    SignUpRequest,
    ViewRecoveryCodesRequest,
)
from craftly.schemas.common import success_response

router = APIRouter()

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/signup", status_code=201)
@limit_auth
async def signup(request: Request, body: SignUpRequest, auth_service: AuthServiceDep):
    """Create a buyer account. The plain recovery codes are returned only here."""
    result = await auth_service.signup(body.email, body.password, body.full_name)
    return success_response(
        {
            **result.user.to_dict(),
            "recoveryCodes": result.recovery_codes,
            "accessToken": result.access_token,
        },
        "User account created successfully. Please save your recovery codes!",
    )


@router.post("/signin")
@limit_auth
async def signin(request: Request, body: SignInRequest, auth_service: AuthServiceDep):
    result = await auth_service.signin(body.email, body.password)
    return success_response(
        {**result.user.to_dict(), "accessToken": result.access_token},
        "Signed in successfully",
    )


@router.post("/change-password")
@limit_auth
async def change_password(
    request: Request, body: ChangePasswordRequest, auth_service: AuthServiceDep
):
    await auth_service.change_password(body.email, body.current_password, body.new_password)
    return success_response(
        {"message": "Password changed successfully. Please sign in with your new password."}
    )


@router.post("/check-recovery-codes")
@limit_auth
async def check_recovery_codes(
    request: Request, body: CheckRecoveryCodesRequest, auth_service: AuthServiceDep
):
    remaining = await auth_service.check_recovery_codes(body.email)
    return success_response({"email": body.email, "codesRemaining": remaining})


@router.post("/verify-recovery-code-and-reset")
@limit_auth
async def verify_recovery_code_and_reset(
    request: Request, body: RecoveryResetRequest, auth_service: AuthServiceDep
):
    remaining = await auth_service.reset_with_recovery_code(
        body.email, body.recovery_code, body.new_password
    )
    return success_response(
        {
            "message": "Password reset successfully! You can now login with your new password.",
            "remainingCodes": remaining,
        }
    )


@router.post("/view-recovery-codes")
@limit_auth
async def view_recovery_codes(
    request: Request, body: ViewRecoveryCodesRequest, auth_service: AuthServiceDep
):
    codes, remaining = await auth_service.view_recovery_codes(body.email, body.password)
    return success_response(
        {"recoveryCodes": codes, "codesRemaining": remaining},
        "Recovery codes retrieved successfully",
    )


@router.get("/me")
async def get_me(uid: CurrentUserId, auth_service: AuthServiceDep):
    """Return the caller (Bearer token or X-User-ID)."""
    user = await auth_service.get_user(uid)
    return success_response(user.to_dict())
