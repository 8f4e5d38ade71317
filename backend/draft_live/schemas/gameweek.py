"""Gameweek API response schemas.

These Pydantic models are used for API serialization. They are populated
directly from the service dataclasses using model_validate(obj, from_attributes=True).
"""

from pydantic import BaseModel, ConfigDict, Field

from draft_live.services.fixture_stats import FixtureState
from draft_live.services.records import ResourceStatus
from draft_live.services.squad import BonusSource, RowEmphasis


class SquadRowResponse(BaseModel):
    """A scored pick in a manager's squad."""

    model_config = ConfigDict(from_attributes=True)

    player_id: int
    player_name: str
    team: str
    position: str
    is_starter: bool
    is_captain: bool
    is_vice_captain: bool
    multiplier: int
    minutes: int
    goals_scored: int
    assists: int
    goals_conceded: int
    yellow_cards: int
    bonus: int = Field(ge=0, le=3)
    bonus_source: BonusSource
    points: int
    emphasis: RowEmphasis


class ManagerScoreResponse(BaseModel):
    """A manager's gameweek total and squad rows."""

    model_config = ConfigDict(from_attributes=True)

    league_entry: int
    manager_name: str
    total: int
    rows: list[SquadRowResponse]
    status: ResourceStatus


class MatchupResponse(BaseModel):
    """One head-to-head matchup."""

    model_config = ConfigDict(from_attributes=True)

    home: ManagerScoreResponse
    away: ManagerScoreResponse


class StandingResponse(BaseModel):
    """A ranked league table row."""

    model_config = ConfigDict(from_attributes=True)

    rank: int = Field(ge=1)
    league_entry: int
    manager_name: str
    matches_won: int
    matches_drawn: int
    matches_lost: int
    points_for: int
    points_against: int
    total: int


class FixturePreviewResponse(BaseModel):
    """A next-gameweek pairing."""

    model_config = ConfigDict(from_attributes=True)

    manager_1: str
    manager_2: str


class AnnotationResponse(BaseModel):
    """One stat category line for one side of a fixture."""

    model_config = ConfigDict(from_attributes=True)

    label: str
    players: list[str]
    values: list[int] | None = None


class FixtureLineResponse(BaseModel):
    """Summary of one fixture."""

    model_config = ConfigDict(from_attributes=True)

    fixture_id: int
    state: FixtureState
    state_label: str
    home_team: str
    away_team: str
    home_score: int | None
    away_score: int | None
    home: list[AnnotationResponse]
    away: list[AnnotationResponse]


class FixtureSummaryResponse(BaseModel):
    """All fixtures of the gameweek and provisional bonus by player id."""

    model_config = ConfigDict(from_attributes=True)

    fixtures: list[FixtureLineResponse]
    bonus: dict[int, int]


class GameweekResponse(BaseModel):
    """Consolidated gameweek view for the league."""

    model_config = ConfigDict(from_attributes=True)

    gameweek: int | None = Field(ge=1, default=None)
    matchups: list[MatchupResponse]
    standings: list[StandingResponse]
    next_fixtures: list[FixturePreviewResponse] | None  # None = unavailable
    fixture_summary: FixtureSummaryResponse
    sources: dict[str, ResourceStatus]
    degraded: bool
