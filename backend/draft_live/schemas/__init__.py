"""API response schemas."""

from draft_live.schemas.gameweek import (
    GameweekResponse,
    ManagerScoreResponse,
    MatchupResponse,
    SquadRowResponse,
    StandingResponse,
)

__all__ = [
    "GameweekResponse",
    "ManagerScoreResponse",
    "MatchupResponse",
    "SquadRowResponse",
    "StandingResponse",
]
