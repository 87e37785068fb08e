"""
Validation of incoming rating and submission payloads
"""

from schemas.requests import RatingRequest, TemplateSubmissionRequest
from utils.errors import ValidationError

MIN_RATING = 1
MAX_RATING = 5


def validate_rating_request(request: RatingRequest) -> None:
    """
    Check a rating submission before anything is written

    Raises:
        ValidationError: If templateId, userHash or rating is missing or
            falsy (a rating of 0 counts as missing), or rating is outside 1..5
    """
    if not request.template_id or not request.user_hash or not request.rating:
        raise ValidationError("Missing required fields")

    if request.rating < MIN_RATING or request.rating > MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


def validate_submission_request(
    request: TemplateSubmissionRequest, max_content_length: int
) -> None:
    """
    Check a template submission before it is queued for review

    Raises:
        ValidationError: If a required field is empty or content is too long
    """
    required = (
        request.title,
        request.category,
        request.description,
        request.content,
        request.author,
    )
    if not all(required):
        raise ValidationError("Missing required fields")

    if len(request.content) > max_content_length:
        raise ValidationError(
            f"Content exceeds maximum length ({max_content_length:,} characters)"
        )
