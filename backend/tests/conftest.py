"""Shared pytest fixtures for backend tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from draft_live.main import app
from draft_live.services.bootstrap_cache import clear_cache
from draft_live.services.draft_client import (
    parse_catalogue,
    parse_draft_snapshot,
    parse_fixture,
    parse_stat_line,
)
from draft_live.services.records import GameState, SquadPick

API = "https://draft.premierleague.com/api"


@pytest.fixture(autouse=True)
def clear_bootstrap_cache():
    """Every test starts with an empty bootstrap cache."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
async def async_client():
    """Async HTTP client for testing the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_game_response() -> dict[str, Any]:
    return {
        "current_event": 5,
        "current_event_finished": False,
        "next_event": 6,
        "processing_status": "n",
        "trades_time_for_approval": False,
        "waivers_processed": False,
    }


@pytest.fixture
def sample_bootstrap_response() -> dict[str, Any]:
    """Bootstrap-static with two teams and a handful of players."""
    return {
        "elements": [
            {"id": 1, "web_name": "Raya", "team": 1, "element_type": 1},
            {"id": 2, "web_name": "Saka", "team": 1, "element_type": 3},
            {"id": 3, "web_name": "Salah", "team": 12, "element_type": 3},
            {"id": 4, "web_name": "Núñez", "team": 12, "element_type": 4},
        ],
        "teams": [
            {"id": 1, "name": "Arsenal", "short_name": "ARS"},
            {"id": 12, "name": "Liverpool", "short_name": "LIV"},
        ],
        "element_types": [
            {"id": 1, "singular_name_short": "GKP"},
            {"id": 2, "singular_name_short": "DEF"},
            {"id": 3, "singular_name_short": "MID"},
            {"id": 4, "singular_name_short": "FWD"},
        ],
        "events": {"current": 5, "next": 6},
    }


@pytest.fixture
def sample_league_response() -> dict[str, Any]:
    """League details for a 6-manager head-to-head league."""
    names = ["Ana", "Ben", "Cat", "Dan", "Eve", "Fay"]
    return {
        "league": {"id": 29143, "name": "Office League", "start_event": 1, "stop_event": 38},
        "league_entries": [
            {
                "id": 100 + i,
                "entry_id": 9000 + i,
                "entry_name": f"{name} FC",
                "player_first_name": name,
                "player_last_name": "Smith",
                "short_name": name[:2].upper(),
            }
            for i, name in enumerate(names)
        ],
        "matches": [
            {"event": 5, "league_entry_1": 100, "league_entry_2": 101, "started": True,
             "finished": False, "winning_league_entry": None, "winning_method": None},
            {"event": 5, "league_entry_1": 102, "league_entry_2": 103, "started": True,
             "finished": False, "winning_league_entry": None, "winning_method": None},
            {"event": 5, "league_entry_1": 104, "league_entry_2": 105, "started": True,
             "finished": False, "winning_league_entry": None, "winning_method": None},
            {"event": 6, "league_entry_1": 100, "league_entry_2": 102},
            {"event": 6, "league_entry_1": 101, "league_entry_2": 104},
            {"event": 6, "league_entry_1": 103, "league_entry_2": 105},
        ],
        "standings": [
            {"league_entry": 100, "matches_won": 2, "matches_drawn": 0, "matches_lost": 2,
             "matches_played": 4, "points_for": 200, "points_against": 210, "total": 6,
             "rank": 3, "last_rank": None},
            {"league_entry": 101, "matches_won": 3, "matches_drawn": 0, "matches_lost": 1,
             "matches_played": 4, "points_for": 230, "points_against": 190, "total": 9,
             "rank": 1, "last_rank": 2},
        ],
    }


@pytest.fixture
def sample_live_response() -> dict[str, Any]:
    """Live stats; keys are player ids as strings, as sent by the API."""
    return {
        "elements": {
            "2": {"stats": {"minutes": 90, "goals_scored": 1, "total_points": 8,
                            "bonus": 0, "bps": 34, "influence": "45.2",
                            "expected_goals": "0.71"}},
            "3": {"stats": {"minutes": 90, "assists": 1, "total_points": 5,
                            "bonus": 0, "bps": 30}},
            "4": {"stats": {"minutes": 60, "total_points": 2, "bonus": 0, "bps": 20}},
        },
        "fixtures": [],
    }


@pytest.fixture
def sample_fixtures_response() -> list[dict[str, Any]]:
    """One fixture in progress, one not started."""
    return [
        {
            "id": 41,
            "event": 5,
            "team_h": 1,
            "team_a": 12,
            "team_h_score": 1,
            "team_a_score": 0,
            "started": True,
            "finished": False,
            "finished_provisional": False,
            "minutes": 67,
            "kickoff_time": "2024-09-21T14:00:00Z",
            "stats": [
                {"s": "goals_scored", "h": [{"element": 2, "value": 1}], "a": []},
                {"s": "bonus", "h": [], "a": []},
                {"s": "bps",
                 "h": [{"element": 2, "value": 34}, {"element": 1, "value": 12}],
                 "a": [{"element": 3, "value": 30}, {"element": 4, "value": 20}]},
            ],
        },
        {
            "id": 42,
            "event": 5,
            "team_h": 12,
            "team_a": 1,
            "team_h_score": None,
            "team_a_score": None,
            "started": False,
            "finished": False,
            "finished_provisional": False,
            "minutes": 0,
            "kickoff_time": "2024-09-22T16:30:00Z",
            "stats": [],
        },
    ]


@pytest.fixture
def sample_squad_response() -> dict[str, Any]:
    return {
        "picks": [
            {"element": 2, "position": 1, "is_captain": False,
             "is_vice_captain": False, "multiplier": 1},
            {"element": 3, "position": 2, "is_captain": False,
             "is_vice_captain": False, "multiplier": 1},
            {"element": 4, "position": 12, "is_captain": False,
             "is_vice_captain": False, "multiplier": 1},
        ],
        "entry_history": {},
        "subs": [],
    }


@pytest.fixture
def mock_client(
    sample_league_response,
    sample_bootstrap_response,
    sample_live_response,
    sample_fixtures_response,
) -> AsyncMock:
    """DraftApiClient double returning decoded sample payloads."""
    client = AsyncMock()
    client.get_game_state.return_value = GameState(current_event=5, next_event=6)
    client.get_league_details.return_value = parse_draft_snapshot(sample_league_response)
    client.get_catalogue.return_value = parse_catalogue(sample_bootstrap_response)
    client.get_live.return_value = {
        int(pid): parse_stat_line(element["stats"])
        for pid, element in sample_live_response["elements"].items()
    }
    client.get_fixtures.return_value = [parse_fixture(f) for f in sample_fixtures_response]

    async def get_squad(entry_id: int, gameweek: int) -> list[SquadPick]:
        # Manager 9000 (Ana) owns the sample players; everyone else is empty
        if entry_id == 9000:
            return [
                SquadPick(player_id=2, position=1),
                SquadPick(player_id=3, position=2),
                SquadPick(player_id=4, position=12),
            ]
        return []

    client.get_squad.side_effect = get_squad
    return client
