"""
Core application components
"""

from core.config import Settings, get_settings
from core.lifespan import lifespan, initialize_services, shutdown_services
from core.dependencies import (
    get_community_store,
    set_community_store,
    require_community_store,
)

__all__ = [
    "Settings",
    "get_settings",
    "lifespan",
    "initialize_services",
    "shutdown_services",
    "get_community_store",
    "set_community_store",
    "require_community_store",
]
