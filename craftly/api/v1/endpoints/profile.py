"""Profile API. Profiles are readable by anyone (buyers need a seller's GCash details)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import CurrentUserId, DocId, get_profile_service
from craftly.application.services.profile_service import ProfileService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.profile import ProfileUpdateRequest

router = APIRouter()

ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("/{user_id}")
async def get_profile(user_id: DocId, profile_service: ProfileServiceDep):
    return success_response(await profile_service.get_profile(user_id))


@router.post("/{user_id}")
@limit_writes
async def update_profile(
    request: Request,
    user_id: DocId,
    body: ProfileUpdateRequest,
    uid: CurrentUserId,
    profile_service: ProfileServiceDep,
):
    """Update the caller's own profile; fields left out or blank are kept."""
    profile = await profile_service.update_profile(uid, user_id, body.to_payload())
    return success_response(profile, "Profile updated successfully")
