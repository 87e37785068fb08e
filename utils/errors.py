"""
Error types raised by the API and helpers for describing request errors
"""

from typing import Any, Dict, Sequence


class CommunityAPIError(Exception):
    """Base class for errors that map onto a client-facing HTTP status"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CommunityAPIError):
    """Missing or out-of-range input"""

    status_code = 400


class NotFoundError(CommunityAPIError):
    status_code = 404


class ConflictError(CommunityAPIError):
    status_code = 409


def is_malformed_body(errors: Sequence[Dict[str, Any]]) -> bool:
    """True when the request body could not be parsed as JSON at all"""
    return any(error.get("type") == "json_invalid" for error in errors)


def describe_request_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Turn FastAPI/pydantic validation errors into a single readable message

    Args:
        errors: Output of RequestValidationError.errors()

    Returns:
        Message such as "Invalid request: rating: Input should be a valid integer"
    """
    if any(error.get("type") == "missing" for error in errors):
        return "Missing required fields"

    parts = []
    for error in errors:
        # Drop the leading "body"/"query" location marker
        loc = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")

    return "Invalid request: " + "; ".join(parts)
