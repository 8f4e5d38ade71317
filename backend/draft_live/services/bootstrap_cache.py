"""Shared cache for the draft bootstrap-static payload.

The player catalogue barely changes during a gameweek but is the largest
response the page needs, so it is cached process-wide instead of being
refetched on every page build. An asyncio.Lock keeps concurrent page builds
from fetching it at the same time on a cache miss.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from cachetools import TTLCache

from draft_live.config import get_settings

logger = logging.getLogger(__name__)

BOOTSTRAP_CACHE_KEY = "bootstrap"
BOOTSTRAP_CACHE_SIZE = 1  # Only cache one version (current)

_bootstrap_cache: TTLCache[str, dict[str, Any]] = TTLCache(
    maxsize=BOOTSTRAP_CACHE_SIZE,
    ttl=get_settings().cache_ttl_bootstrap,
)

# FastAPI runs on a single event loop, so a module-level lock is safe here.
_bootstrap_lock = asyncio.Lock()


async def get_cached_bootstrap(
    fetcher: Callable[[str], Awaitable[dict[str, Any]]],
    path: str = "/bootstrap-static",
) -> dict[str, Any]:
    """Get bootstrap data from cache or fetch it if expired/missing.

    Args:
        fetcher: Async function that takes a path and returns parsed JSON.
                 This is the DraftApiClient._get method.
        path: API path of the bootstrap endpoint.

    Returns:
        Bootstrap-static data dict with elements, teams and element_types.

    Raises:
        httpx.HTTPError: If the fetch fails.
    """
    cached = _bootstrap_cache.get(BOOTSTRAP_CACHE_KEY)
    if cached is not None:
        logger.debug("Bootstrap cache hit")
        return cached

    async with _bootstrap_lock:
        # Another build may have populated the cache while we waited
        cached = _bootstrap_cache.get(BOOTSTRAP_CACHE_KEY)
        if cached is not None:
            logger.debug("Bootstrap cache hit (after lock)")
            return cached

        logger.info("Fetching bootstrap-static from draft API (cache miss)")
        start = time.monotonic()
        data = await fetcher(path)
        elapsed = time.monotonic() - start

        if not isinstance(data, dict) or not data.get("elements"):
            logger.error(
                "Bootstrap response missing 'elements'; not caching. "
                f"Response sample: {str(data)[:200]}"
            )
            return data

        _bootstrap_cache[BOOTSTRAP_CACHE_KEY] = data
        logger.info(
            f"Cached bootstrap-static: {len(data['elements'])} players, "
            f"fetched in {elapsed:.2f}s"
        )
        return data


def clear_cache() -> None:
    """Clear bootstrap cache. Used by tests to ensure isolation."""
    _bootstrap_cache.clear()
