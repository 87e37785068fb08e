"""Community store data models"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the desktop client expects"""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class SubmissionStatus(str, Enum):
    """Moderation states of a template submission"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RatingSummary(CamelModel):
    """Aggregate rating of one template, joined with its download count"""

    template_id: str
    average_rating: float = 0.0
    rating_count: int = 0
    download_count: int = 0


class RatingAggregate(CamelModel):
    """Freshly recomputed aggregate returned after a rating write"""

    template_id: str
    average_rating: float = 0.0
    rating_count: int = 0


class RecentRating(CamelModel):
    rating: int
    comment: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class TemplateRatings(CamelModel):
    """Detail view of a template's ratings"""

    template_id: str
    average_rating: float = 0.0
    rating_count: int = 0
    user_rating: Optional[int] = None
    user_comment: Optional[str] = None
    recent_ratings: List[RecentRating] = Field(default_factory=list)


class DownloadCount(CamelModel):
    template_id: str
    download_count: int = 0


class Submission(CamelModel):
    """Template submitted to the community library"""

    id: str
    title: str
    category: str
    description: str
    content: str
    tags: List[str] = Field(default_factory=list)
    author: str
    license_type: str = "MIT"
    status: SubmissionStatus = SubmissionStatus.PENDING
    submitted_date: Optional[str] = None
    last_updated: Optional[str] = None  # approval timestamp


class CommunityTemplate(Submission):
    """Approved submission as listed in the community library"""

    download_count: int = 0
    is_community: bool = True
    is_official: bool = False
