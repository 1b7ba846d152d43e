"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health."""

    success: bool = True
    message: str = "Craftly API is running"
    timestamp: str = Field(..., description="Current server time (ISO 8601, UTC)")
    firestore: str = Field(..., description="ok, unavailable or not_configured")
