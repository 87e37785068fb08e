"""
Community template submission endpoints
Handles submission, moderation queue and approved template listing
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from core import get_settings, require_community_store
from community_store import (
    CommunityStore,
    CommunityTemplate,
    DuplicateSubmissionError,
    Submission,
)
from schemas import (
    TemplateSubmissionRequest,
    SubmissionCreatedResponse,
    ModerationResponse,
)
from utils import validate_submission_request, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])

ALREADY_PROCESSED = "Submission not found or already processed"


@router.get("", response_model=List[CommunityTemplate])
async def list_approved_submissions(
    store: CommunityStore = Depends(require_community_store),
):
    """Get all approved community templates"""
    return await run_in_threadpool(store.list_approved_submissions)


@router.get("/pending", response_model=List[Submission])
async def list_pending_submissions(
    store: CommunityStore = Depends(require_community_store),
):
    """Get submissions awaiting moderation"""
    return await run_in_threadpool(store.list_pending_submissions)


@router.post("", status_code=201, response_model=SubmissionCreatedResponse)
async def submit_template(
    request: TemplateSubmissionRequest,
    store: CommunityStore = Depends(require_community_store),
):
    """Submit a new template for review"""
    validate_submission_request(request, get_settings().MAX_SUBMISSION_CONTENT_LENGTH)

    try:
        submission_id = await run_in_threadpool(
            store.create_submission,
            title=request.title,
            category=request.category,
            description=request.description,
            content=request.content,
            author=request.author,
            tags=request.tags,
            license_type=request.license_type,
            submission_id=request.id,
        )
    except DuplicateSubmissionError:
        raise ConflictError(f"Submission {request.id} already exists")

    return SubmissionCreatedResponse(id=submission_id)


@router.post("/{submission_id}/approve", response_model=ModerationResponse)
async def approve_submission(
    submission_id: str, store: CommunityStore = Depends(require_community_store)
):
    """Approve a pending submission"""
    if not await run_in_threadpool(store.approve_submission, submission_id):
        raise NotFoundError(ALREADY_PROCESSED)

    logger.info(f"Submission {submission_id} approved")
    return ModerationResponse(message="Submission approved")


@router.post("/{submission_id}/reject", response_model=ModerationResponse)
async def reject_submission(
    submission_id: str, store: CommunityStore = Depends(require_community_store)
):
    """Reject a pending submission"""
    if not await run_in_threadpool(store.reject_submission, submission_id):
        raise NotFoundError(ALREADY_PROCESSED)

    logger.info(f"Submission {submission_id} rejected")
    return ModerationResponse(message="Submission rejected")
