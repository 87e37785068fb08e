"""
Utility functions for API operations
"""

from utils.validation import validate_rating_request, validate_submission_request
from utils.responses import create_error_response
from utils.errors import (
    CommunityAPIError,
    ValidationError,
    NotFoundError,
    ConflictError,
)

__all__ = [
    "validate_rating_request",
    "validate_submission_request",
    "create_error_response",
    "CommunityAPIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
