"""
PromptBox Community API - Main Entry Point
Ratings, download counters and community template submissions
"""

import os
import logging
import argparse
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from core import lifespan, get_settings
from api.v1.routers import all_routers
from utils import create_error_response, CommunityAPIError
from utils.errors import describe_request_errors, is_malformed_body
from utils.responses import INTERNAL_ERROR_MESSAGE, NOT_FOUND_MESSAGE

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(database_path: Optional[str] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        database_path: SQLite file to use instead of the configured one

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.database_path = database_path

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        """Answer preflight requests directly and stamp CORS headers on the rest"""
        headers = settings.cors_headers()
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers, media_type="application/json")

        response = await call_next(request)
        response.headers.update(headers)
        return response

    # Register all routers
    for router in all_routers:
        app.include_router(router, prefix=settings.API_PREFIX)
        logger.info(f"✅ Registered router: {router.tags}")

    # Exception handlers
    @app.exception_handler(CommunityAPIError)
    async def community_error_handler(request: Request, exc: CommunityAPIError):
        """Handle validation, not-found and conflict errors raised by endpoints"""
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
        return create_error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Handle bodies FastAPI could not parse or coerce"""
        errors = exc.errors()
        if is_malformed_body(errors):
            logger.error(f"Malformed JSON body on {request.method} {request.url.path}")
            return create_error_response(INTERNAL_ERROR_MESSAGE, 500)

        message = describe_request_errors(errors)
        logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
        return create_error_response(message, 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, unmatched routes and methods included"""
        if exc.status_code in (404, 405):
            return create_error_response(NOT_FOUND_MESSAGE, 404)
        return create_error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return create_error_response(INTERNAL_ERROR_MESSAGE, 500)

    logger.info("🚀 FastAPI app created successfully")

    return app


# Create app instance
app = create_app()


def main():
    """Main entry point for running the server"""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="PromptBox Community API Server")
    parser.add_argument("--host", default=settings.HOST, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--db", help="SQLite database path")

    args = parser.parse_args()

    if args.db:
        db_path = os.path.abspath(args.db)
        settings.update_database_path(db_path)
        # Reloader workers re-import settings from the environment
        os.environ["PROMPTBOX_DB_PATH"] = db_path
    logger.info(f"📁 Using database: {settings.DATABASE_PATH}")

    logger.info(f"🚀 Starting FastAPI server on {args.host}:{args.port}")

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
