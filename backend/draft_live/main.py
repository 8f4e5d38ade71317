"""Main FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draft_live.api.routes import router
from draft_live.config import get_settings
from draft_live.dependencies import close_draft_client

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Draft Live",
    description="Live gameweek scores, provisional bonus and standings for a draft league",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.on_event("startup")
async def startup_event() -> None:
    """Log startup information."""
    logger.info("Starting Draft Live")
    logger.info(f"Draft API base: {settings.draft_api_base_url}")
    logger.info(f"League: {settings.league_id}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """Close the upstream client on shutdown."""
    logger.info("Shutting down Draft Live")
    await close_draft_client()
