"""Head-to-head pairings for a gameweek."""

import logging
from dataclasses import dataclass

from draft_live.services.records import Match

logger = logging.getLogger(__name__)

MATCHUPS_PER_GAMEWEEK = 3  # 6-manager league
MAX_GAMEWEEK = 38


@dataclass(slots=True, frozen=True)
class Matchup:
    """Two league entries meeting in a gameweek."""

    gameweek: int
    league_entry_1: int
    league_entry_2: int


def select_matchups(
    matches: list[Match], gameweek: int, limit: int = MATCHUPS_PER_GAMEWEEK
) -> list[Matchup]:
    """Return up to `limit` pairings for a gameweek, in source order."""
    matchups: list[Matchup] = []
    for match in matches:
        if match.event != gameweek:
            continue
        if match.league_entry_1 == match.league_entry_2:
            logger.warning(
                f"Skipping GW{gameweek} match pairing entry {match.league_entry_1} with itself"
            )
            continue

        matchups.append(Matchup(gameweek, match.league_entry_1, match.league_entry_2))
        if len(matchups) == limit:
            break

    return matchups


def next_gameweek_preview(
    matches: list[Match],
    current_gameweek: int,
    max_gameweek: int = MAX_GAMEWEEK,
    limit: int = MATCHUPS_PER_GAMEWEEK,
) -> list[Matchup] | None:
    """Pairings for the gameweek after `current_gameweek`.

    Returns None when the season is over or fewer than `limit` pairings are
    scheduled; the page shows the preview as unavailable rather than partial.
    """
    if current_gameweek >= max_gameweek:
        return None

    matchups = select_matchups(matches, current_gameweek + 1, limit)
    if len(matchups) < limit:
        logger.info(
            f"Only {len(matchups)}/{limit} matchups found for GW{current_gameweek + 1}"
        )
        return None
    return matchups
