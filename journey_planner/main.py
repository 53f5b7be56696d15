"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journey_planner.api import router
from journey_planner.config import DEV_JWT_SECRET, settings
from journey_planner.db import dispose_engine
from journey_planner.logging import setup_logging
from journey_planner.services.exceptions import StorageUnavailable

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    logger.info("Starting Journey Planner API", environment=settings.environment, debug=settings.debug)
    if settings.jwt_secret == DEV_JWT_SECRET:
        logger.warning("JWT_SECRET is not set, using the development secret")
    if settings.default_new_user_password != settings.default_new_user_password_raw:
        logger.warning("DEFAULT_NEW_USER_PASSWORD is too short, using the fallback password")

    yield

    # Shutdown
    logger.info("Shutting down Journey Planner API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Journey Planner API",
    description="Journey plan records with monotonic journey plan numbering",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    logger.error("Storage failure", operation=exc.operation, path=request.url.path, exc_info=exc.__cause__)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# API routes
app.include_router(router, prefix="/api")
