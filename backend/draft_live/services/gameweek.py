"""Gameweek page assembly - fetches every resource and runs the scoring engine.

Each page build is independent: nothing is shared between builds except the
API client (rate limiting) and the bootstrap cache.

Fetch order:
    1. Game state (only when no gameweek is requested) -> current gameweek
    2. League details, catalogue, live stats, fixtures (concurrently)
    3. One squad fetch per league entry (concurrently, bounded by the
       client's semaphore, each with its own timeout)
    4. Pure scoring: fixture stats -> squads -> standings -> next fixtures

A failed fetch never fails the build. The resource falls back to its empty
default and its status is recorded in GameweekView.sources so the page can
say which sections are missing.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TypeVar

import httpx

from draft_live.config import Settings, get_settings
from draft_live.services.draft_client import DraftApiClient, DraftApiError, DraftDecodeError
from draft_live.services.fixture_stats import FixtureStatSummary, merge_fixture_stats
from draft_live.services.lookups import Lookups
from draft_live.services.matchups import next_gameweek_preview, select_matchups
from draft_live.services.records import (
    Catalogue,
    DraftSnapshot,
    Fixture,
    GameState,
    LeagueEntry,
    PlayerStatLine,
    ResourceStatus,
    SquadPick,
)
from draft_live.services.squad import SquadRow, score_squad
from draft_live.services.standings import RankedStanding, rank_standings

logger = logging.getLogger(__name__)

T = TypeVar("T")

PAGE_SOURCE = "page"


@dataclass(slots=True)
class ManagerScore:
    """A manager's scored squad for the gameweek."""

    league_entry: int
    manager_name: str
    total: int = 0
    rows: list[SquadRow] = field(default_factory=list)
    status: ResourceStatus = ResourceStatus.OK


@dataclass(slots=True)
class MatchupView:
    """Both sides of a head-to-head matchup."""

    home: ManagerScore
    away: ManagerScore


@dataclass(slots=True)
class FixturePreview:
    """A next-gameweek pairing by manager name."""

    manager_1: str
    manager_2: str


@dataclass(slots=True)
class GameweekView:
    """Everything the status page shows for one gameweek."""

    gameweek: int | None
    matchups: list[MatchupView] = field(default_factory=list)
    standings: list[RankedStanding] = field(default_factory=list)
    next_fixtures: list[FixturePreview] | None = None  # None = unavailable
    fixture_summary: FixtureStatSummary = field(default_factory=FixtureStatSummary)
    sources: dict[str, ResourceStatus] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return any(status is not ResourceStatus.OK for status in self.sources.values())

    @classmethod
    def unavailable(
        cls, gameweek: int | None, status: ResourceStatus = ResourceStatus.TIMEOUT
    ) -> "GameweekView":
        """An empty view for a build that could not complete."""
        return cls(gameweek=gameweek, sources={PAGE_SOURCE: status})


class GameweekService:
    """Builds GameweekView instances from the draft API."""

    def __init__(self, client: DraftApiClient, settings: Settings | None = None) -> None:
        """Initialize with a draft API client.

        Args:
            client: Shared DraftApiClient
            settings: Overrides for tests; defaults to get_settings()
        """
        self.client = client
        self.settings = settings or get_settings()

    async def build_with_deadline(self, gameweek: int | None = None) -> GameweekView:
        """Build the view, giving up after settings.render_deadline seconds.

        The gameweek is resolved first so an expired build still reports
        which gameweek it was for.
        """
        deadline = self.settings.render_deadline
        loop = asyncio.get_running_loop()
        started = loop.time()
        sources: dict[str, ResourceStatus] = {}
        try:
            if gameweek is None:
                gameweek = await asyncio.wait_for(self._current_gameweek(sources), deadline)
                if gameweek is None:
                    return GameweekView(gameweek=None, sources=sources)
            remaining = deadline - (loop.time() - started)
            return await asyncio.wait_for(self._build_gameweek(gameweek, sources), remaining)
        except asyncio.TimeoutError:
            logger.error(f"Gameweek page build exceeded {deadline}s deadline")
            return GameweekView.unavailable(gameweek, ResourceStatus.TIMEOUT)

    async def build(self, gameweek: int | None = None) -> GameweekView:
        """Fetch all resources for a gameweek and score it.

        Args:
            gameweek: Gameweek to build; the current one when None

        Returns:
            GameweekView; sections whose data could not be fetched are empty
            and flagged in `sources`.
        """
        sources: dict[str, ResourceStatus] = {}

        if gameweek is None:
            gameweek = await self._current_gameweek(sources)
            if gameweek is None:
                return GameweekView(gameweek=None, sources=sources)

        return await self._build_gameweek(gameweek, sources)

    async def _current_gameweek(self, sources: dict[str, ResourceStatus]) -> int | None:
        state = await self._fetch("game", self.client.get_game_state(), GameState(), sources)
        # Before the season starts the API reports 0 or null
        if not state.current_event:
            logger.warning("No current gameweek available")
            return None
        return state.current_event

    async def _build_gameweek(
        self, gameweek: int, sources: dict[str, ResourceStatus]
    ) -> GameweekView:
        snapshot, catalogue, live, fixtures = await asyncio.gather(
            self._fetch(
                "league",
                self.client.get_league_details(self.settings.league_id),
                DraftSnapshot(),
                sources,
            ),
            self._fetch("catalogue", self.client.get_catalogue(), Catalogue(), sources),
            self._fetch("live", self.client.get_live(gameweek), {}, sources),
            self._fetch("fixtures", self.client.get_fixtures(gameweek), [], sources),
        )

        squads = await self._fetch_squads(snapshot.entries, gameweek, sources)

        return self.assemble(gameweek, snapshot, catalogue, live, fixtures, squads, sources)

    def assemble(
        self,
        gameweek: int,
        snapshot: DraftSnapshot,
        catalogue: Catalogue,
        live: dict[int, PlayerStatLine],
        fixtures: list[Fixture],
        squads: dict[int, list[SquadPick]],
        sources: dict[str, ResourceStatus] | None = None,
    ) -> GameweekView:
        """Run the scoring engine over already-fetched data. Pure."""
        sources = dict(sources or {})
        lookups = Lookups.from_catalogue(catalogue)
        names = {entry.id: entry.display_name for entry in snapshot.entries}

        summary = merge_fixture_stats(fixtures, lookups)

        def manager_score(league_entry: int) -> ManagerScore:
            scored = score_squad(
                squads.get(league_entry, []),
                live,
                summary.bonus,
                lookups,
                lineup_size=self.settings.starting_lineup_size,
            )
            return ManagerScore(
                league_entry=league_entry,
                manager_name=names.get(league_entry, ""),
                total=scored.total,
                rows=scored.rows,
                status=sources.get(_squad_source(league_entry), ResourceStatus.OK),
            )

        limit = self.settings.matchups_per_gameweek
        matchups = [
            MatchupView(
                home=manager_score(m.league_entry_1),
                away=manager_score(m.league_entry_2),
            )
            for m in select_matchups(snapshot.matches, gameweek, limit)
        ]

        preview = next_gameweek_preview(
            snapshot.matches, gameweek, self.settings.max_gameweek, limit
        )
        next_fixtures = (
            None
            if preview is None
            else [
                FixturePreview(
                    manager_1=names.get(m.league_entry_1, ""),
                    manager_2=names.get(m.league_entry_2, ""),
                )
                for m in preview
            ]
        )

        return GameweekView(
            gameweek=gameweek,
            matchups=matchups,
            standings=rank_standings(snapshot.standings, names),
            next_fixtures=next_fixtures,
            fixture_summary=summary,
            sources=sources,
        )

    async def _fetch_squads(
        self,
        entries: list[LeagueEntry],
        gameweek: int,
        sources: dict[str, ResourceStatus],
    ) -> dict[int, list[SquadPick]]:
        """Fetch every manager's squad concurrently.

        The client's semaphore bounds how many requests are in flight; each
        fetch has its own timeout so one slow manager cannot stall the page.
        """

        async def fetch_one(entry: LeagueEntry) -> tuple[int, list[SquadPick]]:
            picks = await self._fetch(
                _squad_source(entry.id),
                self.client.get_squad(entry.entry_id, gameweek),
                [],
                sources,
                timeout=self.settings.manager_timeout,
            )
            return entry.id, picks

        results = await asyncio.gather(*[fetch_one(entry) for entry in entries])

        failed_count = sum(
            1
            for entry in entries
            if sources.get(_squad_source(entry.id)) is not ResourceStatus.OK
        )
        if failed_count:
            logger.warning(
                f"GW{gameweek} squad fetch completed with {failed_count}/{len(entries)} failures"
            )

        return dict(results)

    async def _fetch(
        self,
        source: str,
        request: Awaitable[T],
        default: T,
        sources: dict[str, ResourceStatus],
        timeout: float | None = None,
    ) -> T:
        """Await one resource, recording its status and defaulting on failure."""
        try:
            if timeout is None:
                result = await request
            else:
                result = await asyncio.wait_for(request, timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching {source} after {timeout}s")
            sources[source] = ResourceStatus.TIMEOUT
            return default
        except DraftDecodeError as e:
            logger.warning(f"Could not decode {source}: {e}")
            sources[source] = ResourceStatus.DECODE_FAILED
            return default
        except (httpx.HTTPError, DraftApiError) as e:
            logger.warning(f"Failed to fetch {source}: {type(e).__name__}: {e}")
            sources[source] = ResourceStatus.FETCH_FAILED
            return default

        sources[source] = ResourceStatus.OK
        return result


def _squad_source(league_entry: int) -> str:
    return f"squad:{league_entry}"
