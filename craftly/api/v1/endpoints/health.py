"""Health check endpoint. Reports Firestore status without failing the probe."""

from fastapi import APIRouter

from craftly.infrastructure.firebase.client import get_firestore_client
from craftly.schemas.health import HealthResponse
from craftly.shared.utils.datetime import utc_now

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness plus a Firestore reachability flag."""
    client = get_firestore_client()
    if client is None:
        firestore = "not_configured"
    else:
        firestore = "ok" if await client.ping() else "unavailable"
    return HealthResponse(timestamp=utc_now().isoformat(), firestore=firestore)
