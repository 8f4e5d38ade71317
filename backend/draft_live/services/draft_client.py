"""Draft API client with rate limiting and typed decoding."""

import asyncio
import logging
import time
from typing import Any

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from draft_live.config import get_settings
from draft_live.services.bootstrap_cache import get_cached_bootstrap
from draft_live.services.records import (
    Catalogue,
    DraftSnapshot,
    EventValue,
    Fixture,
    FixtureEvent,
    GameState,
    LeagueEntry,
    LeagueInfo,
    Match,
    PlayerProfile,
    PlayerStatLine,
    SquadPick,
    StandingEntry,
)

logger = logging.getLogger(__name__)

# HTTP status codes that should trigger a retry
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

USER_AGENT = "DraftLive/1.0 (Fantasy Premier League Draft live scores)"


class DraftApiError(Exception):
    """Base error for draft API failures."""


class DraftDecodeError(DraftApiError):
    """Raised when a response does not have the expected shape."""


def _safe_int(val: Any, default: int = 0) -> int:
    """Safely convert API value to int, handling None and empty strings."""
    if val is None or val == "":
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        return default


def _safe_float(val: Any, default: float = 0.0) -> float:
    """Safely convert API value to float, handling None and decimal strings."""
    if val is None or val == "":
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def _optional_int(val: Any) -> int | None:
    """Convert a nullable API value to int, keeping None as None."""
    if val is None or val == "":
        return None
    try:
        return int(val)
    except (ValueError, TypeError):
        return None


def _is_retryable_error(exception: BaseException) -> bool:
    """Check if an error should trigger a retry."""
    if isinstance(exception, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in RETRYABLE_STATUS_CODES
    return False


# =============================================================================
# Decoders
# =============================================================================


def parse_stat_line(stats: dict[str, Any]) -> PlayerStatLine:
    """Decode one player's live stats block."""
    return PlayerStatLine(
        minutes=_safe_int(stats.get("minutes")),
        total_points=_safe_int(stats.get("total_points")),
        bonus=_safe_int(stats.get("bonus")),
        bps=_safe_int(stats.get("bps")),
        goals_scored=_safe_int(stats.get("goals_scored")),
        assists=_safe_int(stats.get("assists")),
        expected_goals=_safe_float(stats.get("expected_goals")),
        expected_assists=_safe_float(stats.get("expected_assists")),
        expected_goal_involvements=_safe_float(stats.get("expected_goal_involvements")),
        clean_sheets=_safe_int(stats.get("clean_sheets")),
        goals_conceded=_safe_int(stats.get("goals_conceded")),
        own_goals=_safe_int(stats.get("own_goals")),
        penalties_saved=_safe_int(stats.get("penalties_saved")),
        penalties_missed=_safe_int(stats.get("penalties_missed")),
        saves=_safe_int(stats.get("saves")),
        expected_goals_conceded=_safe_float(stats.get("expected_goals_conceded")),
        yellow_cards=_safe_int(stats.get("yellow_cards")),
        red_cards=_safe_int(stats.get("red_cards")),
        influence=_safe_float(stats.get("influence")),
        creativity=_safe_float(stats.get("creativity")),
        threat=_safe_float(stats.get("threat")),
        ict_index=_safe_float(stats.get("ict_index")),
        in_dreamteam=bool(stats.get("in_dreamteam", False)),
    )


def _parse_event_values(values: list[dict[str, Any]] | None) -> list[EventValue]:
    return [
        EventValue(player_id=_safe_int(v["element"]), value=_safe_int(v.get("value")))
        for v in values or []
    ]


def parse_fixture(data: dict[str, Any]) -> Fixture:
    """Decode a fixture and its stat categories.

    The draft API tags categories with "s"; the main FPL API uses
    "identifier". Both are accepted.
    """
    stats = []
    for category in data.get("stats") or []:
        kind = category.get("s") or category.get("identifier") or ""
        stats.append(
            FixtureEvent(
                kind=kind,
                home=_parse_event_values(category.get("h")),
                away=_parse_event_values(category.get("a")),
            )
        )

    return Fixture(
        id=_safe_int(data["id"]),
        event=_optional_int(data.get("event")),
        team_h=_safe_int(data["team_h"]),
        team_a=_safe_int(data["team_a"]),
        team_h_score=_optional_int(data.get("team_h_score")),
        team_a_score=_optional_int(data.get("team_a_score")),
        started=bool(data.get("started")),
        finished=bool(data.get("finished")),
        finished_provisional=bool(data.get("finished_provisional")),
        minutes=_safe_int(data.get("minutes")),
        kickoff_time=data.get("kickoff_time"),
        stats=stats,
    )


def parse_draft_snapshot(data: dict[str, Any]) -> DraftSnapshot:
    """Decode the league details payload."""
    league = data.get("league") or {}
    return DraftSnapshot(
        league=LeagueInfo(
            id=_safe_int(league.get("id")),
            name=league.get("name", ""),
            start_event=_safe_int(league.get("start_event"), 1),
            stop_event=_safe_int(league.get("stop_event"), 38),
        ),
        entries=[
            LeagueEntry(
                id=_safe_int(e["id"]),
                entry_id=_safe_int(e.get("entry_id")),
                entry_name=e.get("entry_name") or "",
                player_first_name=e.get("player_first_name") or "",
                player_last_name=e.get("player_last_name") or "",
                short_name=e.get("short_name") or "",
            )
            for e in data.get("league_entries") or []
        ],
        matches=[
            Match(
                event=_safe_int(m["event"]),
                league_entry_1=_safe_int(m["league_entry_1"]),
                league_entry_2=_safe_int(m["league_entry_2"]),
                league_entry_1_points=_safe_int(m.get("league_entry_1_points")),
                league_entry_2_points=_safe_int(m.get("league_entry_2_points")),
                started=bool(m.get("started")),
                finished=bool(m.get("finished")),
                winning_league_entry=_optional_int(m.get("winning_league_entry")),
                winning_method=m.get("winning_method"),
            )
            for m in data.get("matches") or []
        ],
        standings=[
            StandingEntry(
                league_entry=_safe_int(s["league_entry"]),
                matches_won=_safe_int(s.get("matches_won")),
                matches_drawn=_safe_int(s.get("matches_drawn")),
                matches_lost=_safe_int(s.get("matches_lost")),
                matches_played=_safe_int(s.get("matches_played")),
                points_for=_safe_int(s.get("points_for")),
                points_against=_safe_int(s.get("points_against")),
                total=_safe_int(s.get("total")),
                rank=_optional_int(s.get("rank")),
                last_rank=_optional_int(s.get("last_rank")),
            )
            for s in data.get("standings") or []
        ],
    )


def parse_catalogue(data: dict[str, Any]) -> Catalogue:
    """Decode the parts of bootstrap-static used for name lookups."""
    players = {}
    for p in data.get("elements") or []:
        player_id = _safe_int(p["id"])
        players[player_id] = PlayerProfile(
            id=player_id,
            web_name=p.get("web_name") or "",
            team=_safe_int(p.get("team")),
            element_type=_safe_int(p.get("element_type")),
        )

    return Catalogue(
        players=players,
        teams={
            _safe_int(t["id"]): t.get("short_name") or t.get("name") or ""
            for t in data.get("teams") or []
        },
        positions={
            _safe_int(et["id"]): et.get("singular_name_short") or ""
            for et in data.get("element_types") or []
        },
    )


def _decode(parser, payload: Any, what: str):
    """Run a decoder, turning shape errors into DraftDecodeError."""
    try:
        return parser(payload)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise DraftDecodeError(f"Malformed {what} payload: {type(e).__name__}: {e}") from e


# =============================================================================
# Client
# =============================================================================


class DraftApiClient:
    """
    Draft API client with rate limiting.

    One instance is shared by all page builds. Concurrency is bounded by a
    semaphore so that the per-manager fan-out never has more than
    max_concurrent requests in flight against the API.
    """

    def __init__(
        self,
        base_url: str | None = None,
        requests_per_second: float | None = None,
        max_concurrent: int | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Draft API root, defaults to settings
            requests_per_second: Target rate (1.0 = 1 request/sec)
            max_concurrent: Maximum concurrent requests
            timeout: Per-request timeout in seconds
        """
        settings = get_settings()
        self.base_url = (base_url or settings.draft_api_base_url).rstrip("/")
        self.delay = 1.0 / (requests_per_second or settings.requests_per_second)
        self.semaphore = asyncio.Semaphore(max_concurrent or settings.max_concurrent_requests)
        self.timeout = timeout or settings.request_timeout
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy initialization, coroutine-safe)."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                    )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources (coroutine-safe)."""
        async with self._lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    async def __aenter__(self) -> "DraftApiClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def _rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request_time = time.monotonic()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception(_is_retryable_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _get(self, path: str) -> Any:
        """Make a rate-limited GET request with retries."""
        async with self.semaphore:
            await self._rate_limit()

            client = await self._get_client()
            response = await client.get(f"{self.base_url}{path}")
            response.raise_for_status()
            try:
                return response.json()
            except ValueError as e:
                raise DraftDecodeError(f"Invalid JSON from {path}") from e

    async def get_game_state(self) -> GameState:
        """Fetch the current gameweek and its processing state."""
        data = await self._get("/game")

        def parse(d: dict[str, Any]) -> GameState:
            return GameState(
                current_event=_optional_int(d.get("current_event")),
                current_event_finished=bool(d.get("current_event_finished")),
                next_event=_optional_int(d.get("next_event")),
                processing_status=d.get("processing_status") or "",
            )

        return _decode(parse, data, "game")

    async def get_league_details(self, league_id: int) -> DraftSnapshot:
        """Fetch league entries, matches and standings."""
        data = await self._get(f"/league/{league_id}/details")
        return _decode(parse_draft_snapshot, data, "league details")

    async def get_catalogue(self) -> Catalogue:
        """
        Fetch the player catalogue (bootstrap-static).

        Uses the shared TTL cache, so only the first page build after expiry
        pays for the request.
        """
        data = await get_cached_bootstrap(self._get)
        return _decode(parse_catalogue, data, "bootstrap-static")

    async def get_live(self, gameweek: int) -> dict[int, PlayerStatLine]:
        """Fetch live per-player stats for a gameweek, keyed by player id."""
        data = await self._get(f"/event/{gameweek}/live")

        def parse(d: dict[str, Any]) -> dict[int, PlayerStatLine]:
            return {
                int(player_id): parse_stat_line(element.get("stats") or {})
                for player_id, element in (d.get("elements") or {}).items()
            }

        return _decode(parse, data, "live")

    async def get_fixtures(self, gameweek: int) -> list[Fixture]:
        """Fetch the fixtures of a gameweek with their stat categories."""
        data = await self._get(f"/event/{gameweek}/fixtures")

        def parse(d: list[dict[str, Any]]) -> list[Fixture]:
            return [parse_fixture(f) for f in d]

        return _decode(parse, data, "fixtures")

    async def get_squad(self, entry_id: int, gameweek: int) -> list[SquadPick]:
        """Fetch a manager's picks for a gameweek."""
        data = await self._get(f"/entry/{entry_id}/event/{gameweek}")

        def parse(d: dict[str, Any]) -> list[SquadPick]:
            return [
                SquadPick(
                    player_id=_safe_int(p["element"]),
                    position=_safe_int(p.get("position")),
                    is_captain=bool(p.get("is_captain")),
                    is_vice_captain=bool(p.get("is_vice_captain")),
                    multiplier=_safe_int(p.get("multiplier"), 1),
                )
                for p in d.get("picks") or []
            ]

        return _decode(parse, data, "squad")
