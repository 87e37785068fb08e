"""
Response models for API endpoints
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthResponse(BaseModel):
    """Liveness probe response"""

    status: str = "ok"
    timestamp: str = Field(default_factory=_utc_timestamp)


class RatingSubmitResponse(BaseModel):
    success: bool = True
    averageRating: float
    ratingCount: int


class DownloadIncrementResponse(BaseModel):
    success: bool = True
    downloadCount: int


class SubmissionCreatedResponse(BaseModel):
    success: bool = True
    id: str
    message: str = "Template submitted successfully and is pending review."


class ModerationResponse(BaseModel):
    success: bool = True
    message: str
