"""
Request models for API endpoints

Every field is optional at the schema level: presence and range checks are
done in utils.validation so that missing fields produce the API's own
400 messages rather than FastAPI's 422 report.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class RatingRequest(BaseModel):
    """Request model for submitting a template rating"""

    model_config = ConfigDict(populate_by_name=True)

    template_id: Optional[str] = Field(
        None, alias="templateId", description="Template being rated"
    )
    user_hash: Optional[str] = Field(
        None, alias="userHash", description="Anonymous identifier of the rater"
    )
    rating: Optional[int] = Field(None, description="Star rating, 1 to 5")
    comment: Optional[str] = Field(None, description="Optional review text")


class TemplateSubmissionRequest(BaseModel):
    """Request model for submitting a template to the community library"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Client supplied id, generated if absent")
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = Field(None, description="Template tags")
    author: Optional[str] = None
    license_type: Optional[str] = Field(
        None, alias="licenseType", description="License, MIT when omitted"
    )
