"""Community ratings, downloads and template submissions storage"""

from .models import (
    RatingSummary,
    RatingAggregate,
    TemplateRatings,
    DownloadCount,
    Submission,
    CommunityTemplate,
    SubmissionStatus,
)
from .store import CommunityStore, DuplicateSubmissionError

__all__ = [
    "RatingSummary",
    "RatingAggregate",
    "TemplateRatings",
    "DownloadCount",
    "Submission",
    "CommunityTemplate",
    "SubmissionStatus",
    "CommunityStore",
    "DuplicateSubmissionError",
]
