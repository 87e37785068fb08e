"""
Response helper functions for API endpoints
"""

from fastapi.responses import JSONResponse

from core.config import get_settings

INTERNAL_ERROR_MESSAGE = "Internal server error"
NOT_FOUND_MESSAGE = "Not found"


def create_error_response(message: str, status_code: int = 400) -> JSONResponse:
    """
    Create error response

    Error responses may be produced outside the middleware stack (500s are
    rendered by the server error middleware), so CORS headers are set here too.

    Args:
        message: Error message
        status_code: HTTP status code (default: 400)

    Returns:
        JSONResponse with a single "error" field
    """
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=get_settings().cors_headers(),
    )
