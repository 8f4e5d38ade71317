"""Per-manager gameweek scoring.

A draft squad is 15 picks ordered by position: slots 1-11 are the starting
lineup and count toward the manager's score, slots 12-15 are the bench and
never do. Bench rows are still scored so the page can highlight points left
on the bench.
"""

from dataclasses import dataclass, field
from enum import Enum

from draft_live.services.lookups import Lookups
from draft_live.services.records import PlayerStatLine, SquadPick

STARTING_LINEUP_SIZE = 11

# Bench live points above which a row is highlighted
BENCH_STRONG_THRESHOLD = 5
BENCH_LIGHT_THRESHOLD = 1


class RowEmphasis(str, Enum):
    """How a squad row should be highlighted."""

    IDLE = "idle"  # starter who has not played (yet)
    ACTIVE = "active"  # starter with minutes
    BENCH = "bench"
    BENCH_LIGHT = "bench_light"
    BENCH_STRONG = "bench_strong"


class BonusSource(str, Enum):
    """Where a row's bonus figure came from."""

    NONE = "none"
    OFFICIAL = "official"
    PROVISIONAL = "provisional"  # computed from live BPS


@dataclass(slots=True)
class SquadRow:
    """A scored squad pick."""

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
    bonus: int
    bonus_source: BonusSource
    points: int  # live total points + resolved bonus
    emphasis: RowEmphasis


@dataclass(slots=True)
class SquadScore:
    """A manager's gameweek total and the rows it was computed from."""

    total: int = 0
    rows: list[SquadRow] = field(default_factory=list)


def resolve_bonus(
    stats: PlayerStatLine, provisional: dict[int, int], player_id: int
) -> tuple[int, BonusSource]:
    """Pick the official bonus if published, else the provisional award.

    The two are never added together.
    """
    if stats.bonus:
        return stats.bonus, BonusSource.OFFICIAL
    if player_id in provisional:
        return provisional[player_id], BonusSource.PROVISIONAL
    return 0, BonusSource.NONE


def row_emphasis(is_starter: bool, stats: PlayerStatLine) -> RowEmphasis:
    if not is_starter:
        if stats.total_points > BENCH_STRONG_THRESHOLD:
            return RowEmphasis.BENCH_STRONG
        if stats.total_points > BENCH_LIGHT_THRESHOLD:
            return RowEmphasis.BENCH_LIGHT
        return RowEmphasis.BENCH
    if stats.minutes > 0:
        return RowEmphasis.ACTIVE
    return RowEmphasis.IDLE


def score_squad(
    picks: list[SquadPick],
    live: dict[int, PlayerStatLine],
    bonus: dict[int, int],
    lookups: Lookups,
    lineup_size: int = STARTING_LINEUP_SIZE,
) -> SquadScore:
    """Score a manager's squad for the gameweek.

    Args:
        picks: The manager's picks (any order; sorted by position here)
        live: Live stats keyed by player id; missing ids count as zero
        bonus: Provisional bonus map from merge_fixture_stats
        lookups: Name lookups for the rows
        lineup_size: Number of leading slots that form the starting lineup

    Returns:
        SquadScore whose total sums (points + bonus) over starters only.

    Note:
        Captaincy and the pick multiplier are reported on each row but not
        applied: draft leagues have no captains and the API always sends a
        multiplier of 1.
    """
    score = SquadScore()

    for index, pick in enumerate(sorted(picks, key=lambda p: p.position)):
        stats = live.get(pick.player_id) or PlayerStatLine()
        profile = lookups.player(pick.player_id)
        slot = pick.position or index + 1
        is_starter = slot <= lineup_size
        bonus_points, source = resolve_bonus(stats, bonus, pick.player_id)
        points = stats.total_points + bonus_points

        score.rows.append(
            SquadRow(
                player_id=pick.player_id,
                player_name=profile.web_name,
                team=lookups.team_name(profile.team),
                position=lookups.position_name(profile.element_type),
                is_starter=is_starter,
                is_captain=pick.is_captain,
                is_vice_captain=pick.is_vice_captain,
                multiplier=pick.multiplier,
                minutes=stats.minutes,
                goals_scored=stats.goals_scored,
                assists=stats.assists,
                goals_conceded=stats.goals_conceded,
                yellow_cards=stats.yellow_cards,
                bonus=bonus_points,
                bonus_source=source,
                points=points,
                emphasis=row_emphasis(is_starter, stats),
            )
        )
        if is_starter:
            score.total += points

    return score
