"""
Dependency injection for services
Manages the global store instance and provides dependency injection
"""

from typing import Optional

from fastapi import HTTPException

from community_store import CommunityStore


# Global service instances
_community_store: Optional[CommunityStore] = None


def set_community_store(store: Optional[CommunityStore]) -> None:
    """Set community store instance"""
    global _community_store
    _community_store = store


def get_community_store() -> Optional[CommunityStore]:
    """Get community store instance"""
    return _community_store


def require_community_store() -> CommunityStore:
    """FastAPI dependency returning the initialized store"""
    if _community_store is None:
        raise HTTPException(status_code=503, detail="Community store not initialized")
    return _community_store

