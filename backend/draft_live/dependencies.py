"""Shared FastAPI dependencies for API routes."""

import logging

from fastapi import Depends

from draft_live.services.draft_client import DraftApiClient
from draft_live.services.gameweek import GameweekService

logger = logging.getLogger(__name__)

# One client per process so rate limiting spans all requests
_client: DraftApiClient | None = None


def get_draft_client() -> DraftApiClient:
    """Get the shared draft API client, creating it on first use."""
    global _client
    if _client is None:
        logger.info("Creating draft API client")
        _client = DraftApiClient()
    return _client


async def close_draft_client() -> None:
    """Close the shared draft API client."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None


def get_gameweek_service(
    client: DraftApiClient = Depends(get_draft_client),
) -> GameweekService:
    """FastAPI dependency providing a GameweekService.

    Usage:
        @router.get("/endpoint")
        async def endpoint(service: GameweekService = Depends(get_gameweek_service)):
            ...
    """
    return GameweekService(client)
