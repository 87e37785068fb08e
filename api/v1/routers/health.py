"""
Health endpoint for liveness probing
"""

from fastapi import APIRouter

from schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint, never touches storage"""
    return HealthResponse()
