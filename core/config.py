"""
Application configuration and settings
"""

import os
from typing import List


class Settings:
    """Application settings and configuration"""

    def __init__(self):
        # Server configuration
        self.API_TITLE = "PromptBox Community API"
        self.API_DESCRIPTION = "Community ratings, downloads and template submissions"
        self.API_VERSION = "1.0.0"
        self.API_PREFIX = "/api"

        self.HOST = os.environ.get("PROMPTBOX_HOST", "127.0.0.1")
        self.PORT = int(os.environ.get("PROMPTBOX_PORT", "8787"))
        self.LOG_LEVEL = os.environ.get("PROMPTBOX_LOG_LEVEL", "INFO").upper()

        # Storage configuration
        self.DATABASE_PATH = os.environ.get("PROMPTBOX_DB_PATH", ".data/community.db")
        self.DB_BUSY_TIMEOUT = float(os.environ.get("PROMPTBOX_DB_TIMEOUT", "30.0"))

        # Query limits
        self.RECENT_RATINGS_LIMIT = 20
        self.MAX_SUBMISSION_CONTENT_LENGTH = 10000

        # CORS Configuration
        self.CORS_ORIGIN = "*"
        self.CORS_METHODS: List[str] = ["GET", "POST", "OPTIONS"]
        self.CORS_HEADERS: List[str] = ["Content-Type"]

    def update_database_path(self, new_path: str) -> None:
        """Update database path"""
        self.DATABASE_PATH = new_path

    def cors_headers(self) -> dict:
        """Headers attached to every response"""
        return {
            "Access-Control-Allow-Origin": self.CORS_ORIGIN,
            "Access-Control-Allow-Methods": ", ".join(self.CORS_METHODS),
            "Access-Control-Allow-Headers": ", ".join(self.CORS_HEADERS),
        }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance"""
    return settings
