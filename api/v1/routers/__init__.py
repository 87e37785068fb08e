"""
API v1 Routers
Exports all router instances for registration in main app
"""

from api.v1.routers.health import router as health_router
from api.v1.routers.ratings import router as ratings_router
from api.v1.routers.downloads import router as downloads_router
from api.v1.routers.submissions import router as submissions_router

# List of all routers to register
all_routers = [
    health_router,
    ratings_router,
    downloads_router,
    submissions_router,
]

__all__ = [
    "all_routers",
    "health_router",
    "ratings_router",
    "downloads_router",
    "submissions_router",
]
