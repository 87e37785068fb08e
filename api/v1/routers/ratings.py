"""
Rating endpoints
Handles aggregate listing, per-template detail and rating submission
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from core import require_community_store
from community_store import CommunityStore, RatingSummary, TemplateRatings
from schemas import RatingRequest, RatingSubmitResponse
from utils import validate_rating_request

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("", response_model=List[RatingSummary])
async def list_ratings(store: CommunityStore = Depends(require_community_store)):
    """Get all aggregate ratings with download counts"""
    return await run_in_threadpool(store.list_aggregates)


@router.get("/{template_id}", response_model=TemplateRatings)
async def get_template_ratings(
    template_id: str,
    user_hash: Optional[str] = Query(
        None, alias="userHash", description="Include this user's own rating"
    ),
    store: CommunityStore = Depends(require_community_store),
):
    """Get aggregate, own rating and recent comments for one template"""
    return await run_in_threadpool(store.get_template_ratings, template_id, user_hash)


@router.post("", response_model=RatingSubmitResponse)
async def submit_rating(
    request: RatingRequest, store: CommunityStore = Depends(require_community_store)
):
    """Submit or update a rating"""
    validate_rating_request(request)

    aggregate = await run_in_threadpool(
        store.submit_rating,
        request.template_id,
        request.user_hash,
        request.rating,
        request.comment,
    )

    return RatingSubmitResponse(
        averageRating=aggregate.average_rating,
        ratingCount=aggregate.rating_count,
    )
