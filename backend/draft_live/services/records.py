"""Typed records decoded from the draft API.

Every record has a zero-valued default so a failed fetch or a missing id can
be replaced by an empty instance without special-casing downstream.
"""

from dataclasses import dataclass, field
from enum import Enum


class ResourceStatus(str, Enum):
    """Outcome of fetching one upstream resource."""

    OK = "ok"
    FETCH_FAILED = "fetch_failed"
    DECODE_FAILED = "decode_failed"
    TIMEOUT = "timeout"


@dataclass(slots=True)
class PlayerStatLine:
    """A player's cumulative live stats for one gameweek."""

    # Points breakdown
    minutes: int = 0
    total_points: int = 0
    bonus: int = 0  # 0 until the official bonus is confirmed
    bps: int = 0  # Bonus Points System raw score

    # Attacking stats
    goals_scored: int = 0
    assists: int = 0
    expected_goals: float = 0.0
    expected_assists: float = 0.0
    expected_goal_involvements: float = 0.0

    # Defensive stats
    clean_sheets: int = 0
    goals_conceded: int = 0
    own_goals: int = 0
    penalties_saved: int = 0
    penalties_missed: int = 0
    saves: int = 0
    expected_goals_conceded: float = 0.0

    # Cards
    yellow_cards: int = 0
    red_cards: int = 0

    # ICT Index
    influence: float = 0.0
    creativity: float = 0.0
    threat: float = 0.0
    ict_index: float = 0.0

    in_dreamteam: bool = False


@dataclass(slots=True, frozen=True)
class EventValue:
    """One (player, value) pair inside a fixture stat category."""

    player_id: int
    value: int


@dataclass(slots=True)
class FixtureEvent:
    """A stat category of one fixture, split into home and away sides."""

    kind: str  # "goals_scored", "bps", ...
    home: list[EventValue] = field(default_factory=list)
    away: list[EventValue] = field(default_factory=list)


@dataclass(slots=True)
class Fixture:
    """A gameweek fixture with its in-match stat categories."""

    id: int
    event: int | None
    team_h: int
    team_a: int
    team_h_score: int | None = None
    team_a_score: int | None = None
    started: bool = False
    finished: bool = False
    finished_provisional: bool = False
    minutes: int = 0
    kickoff_time: str | None = None
    stats: list[FixtureEvent] = field(default_factory=list)


@dataclass(slots=True)
class SquadPick:
    """One roster slot of a manager's gameweek lineup."""

    player_id: int
    position: int  # 1-based; 1-11 start, 12-15 bench
    is_captain: bool = False
    is_vice_captain: bool = False
    multiplier: int = 1


@dataclass(slots=True)
class LeagueEntry:
    """A manager in the draft league."""

    id: int  # league entry id, used by matches and standings
    entry_id: int  # account id, used by the squad endpoint
    entry_name: str = ""
    player_first_name: str = ""
    player_last_name: str = ""
    short_name: str = ""

    @property
    def display_name(self) -> str:
        return self.player_first_name or self.entry_name


@dataclass(slots=True)
class Match:
    """A head-to-head match between two league entries."""

    event: int
    league_entry_1: int
    league_entry_2: int
    league_entry_1_points: int = 0
    league_entry_2_points: int = 0
    started: bool = False
    finished: bool = False
    winning_league_entry: int | None = None
    winning_method: str | None = None


@dataclass(slots=True)
class StandingEntry:
    """A league table row."""

    league_entry: int
    matches_won: int = 0
    matches_drawn: int = 0
    matches_lost: int = 0
    matches_played: int = 0
    points_for: int = 0
    points_against: int = 0
    total: int = 0
    rank: int | None = None
    last_rank: int | None = None

    @property
    def points_difference(self) -> int:
        return self.points_for - self.points_against


@dataclass(slots=True)
class LeagueInfo:
    """Draft league metadata."""

    id: int = 0
    name: str = ""
    start_event: int = 1
    stop_event: int = 38


@dataclass(slots=True)
class DraftSnapshot:
    """League details: metadata, entries, matches and standings."""

    league: LeagueInfo = field(default_factory=LeagueInfo)
    entries: list[LeagueEntry] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)
    standings: list[StandingEntry] = field(default_factory=list)


@dataclass(slots=True)
class GameState:
    """Current game state from the /game endpoint."""

    current_event: int | None = None
    current_event_finished: bool = False
    next_event: int | None = None
    processing_status: str = ""


@dataclass(slots=True)
class PlayerProfile:
    """The catalogue fields the scoring engine needs for a player."""

    id: int
    web_name: str = ""
    team: int = 0
    element_type: int = 0


@dataclass(slots=True)
class Catalogue:
    """Player catalogue decoded from bootstrap-static."""

    players: dict[int, PlayerProfile] = field(default_factory=dict)
    teams: dict[int, str] = field(default_factory=dict)  # team id -> short name
    positions: dict[int, str] = field(default_factory=dict)  # element_type -> short name
