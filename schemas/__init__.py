"""
Pydantic schemas for API requests and responses
"""

from schemas.requests import RatingRequest, TemplateSubmissionRequest
from schemas.responses import (
    HealthResponse,
    RatingSubmitResponse,
    DownloadIncrementResponse,
    SubmissionCreatedResponse,
    ModerationResponse,
)

__all__ = [
    "RatingRequest",
    "TemplateSubmissionRequest",
    "HealthResponse",
    "RatingSubmitResponse",
    "DownloadIncrementResponse",
    "SubmissionCreatedResponse",
    "ModerationResponse",
]
