"""API route definitions - status page and gameweek view model."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import HTMLResponse

from draft_live.config import Settings, get_settings
from draft_live.dependencies import get_gameweek_service
from draft_live.schemas.gameweek import GameweekResponse
from draft_live.services.gameweek import GameweekService
from draft_live.services.render import render_page

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def status_page(
    service: GameweekService = Depends(get_gameweek_service),
) -> HTMLResponse:
    """Live status page for the current gameweek.

    Rebuilt from the draft API on every request. Sections whose data could
    not be fetched are shown as unavailable instead of failing the page.
    """
    view = await service.build_with_deadline()
    if view.degraded:
        logger.info(f"Serving degraded page for GW{view.gameweek}: {view.sources}")
    return HTMLResponse(render_page(view))


@router.get("/api/v1/gameweek", response_model=GameweekResponse)
async def get_current_gameweek(
    service: GameweekService = Depends(get_gameweek_service),
) -> GameweekResponse:
    """View model for the current gameweek."""
    view = await service.build_with_deadline()
    return GameweekResponse.model_validate(view, from_attributes=True)


@router.get("/api/v1/gameweek/{gameweek}", response_model=GameweekResponse)
async def get_gameweek(
    gameweek: int = Path(ge=1, description="Gameweek number"),
    service: GameweekService = Depends(get_gameweek_service),
    settings: Settings = Depends(get_settings),
) -> GameweekResponse:
    """View model for a specific gameweek."""
    if gameweek > settings.max_gameweek:
        raise HTTPException(
            status_code=422,
            detail=f"Gameweek must be between 1 and {settings.max_gameweek}",
        )
    view = await service.build_with_deadline(gameweek)
    return GameweekResponse.model_validate(view, from_attributes=True)
