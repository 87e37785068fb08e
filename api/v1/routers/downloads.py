"""
Download counter endpoints
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from core import require_community_store
from community_store import CommunityStore, DownloadCount
from schemas import DownloadIncrementResponse

router = APIRouter(prefix="/downloads", tags=["downloads"])


@router.get("", response_model=List[DownloadCount])
async def list_downloads(store: CommunityStore = Depends(require_community_store)):
    """Get all download counts"""
    return await run_in_threadpool(store.list_downloads)


@router.post("/{template_id}", response_model=DownloadIncrementResponse)
async def record_download(
    template_id: str, store: CommunityStore = Depends(require_community_store)
):
    """Increment the download count of a template"""
    count = await run_in_threadpool(store.increment_download, template_id)
    return DownloadIncrementResponse(downloadCount=count)
