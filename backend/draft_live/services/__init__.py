"""Service layer for business logic."""

from draft_live.services.draft_client import DraftApiClient
from draft_live.services.gameweek import GameweekService

__all__ = ["DraftApiClient", "GameweekService"]
