"""League table ordering."""

from dataclasses import dataclass

from draft_live.services.records import StandingEntry


@dataclass(slots=True)
class RankedStanding:
    """A standings row with its display rank and manager name."""

    rank: int
    league_entry: int
    manager_name: str
    matches_won: int
    matches_drawn: int
    matches_lost: int
    points_for: int
    points_against: int
    total: int


def sort_standings(entries: list[StandingEntry]) -> list[StandingEntry]:
    """Order by total, then points difference, both descending.

    sorted() is stable, so rows level on both keep their upstream order.
    """
    return sorted(entries, key=lambda e: (e.total, e.points_difference), reverse=True)


def rank_standings(
    entries: list[StandingEntry], names: dict[int, str] | None = None
) -> list[RankedStanding]:
    """Sort the table and number it from 1."""
    names = names or {}
    return [
        RankedStanding(
            rank=position,
            league_entry=entry.league_entry,
            manager_name=names.get(entry.league_entry, ""),
            matches_won=entry.matches_won,
            matches_drawn=entry.matches_drawn,
            matches_lost=entry.matches_lost,
            points_for=entry.points_for,
            points_against=entry.points_against,
            total=entry.total,
        )
        for position, entry in enumerate(sort_standings(entries), start=1)
    ]
