"""Provisional bonus points from BPS scores.

Official bonus is only published some time after a fixture ends. Until then
the award is derived from the live BPS ranking of the fixture: the top three
distinct scores get 3, 2 and 1 points, and every player tied on one of those
scores gets that score's points.
"""

from collections.abc import Iterable

from draft_live.services.records import EventValue

MAX_BONUS = 3


def allocate_bonus(values: Iterable[EventValue]) -> dict[int, int]:
    """Allocate bonus points for one fixture.

    Args:
        values: (player, BPS) pairs for both sides of the fixture, in any order

    Returns:
        Mapping of player id to bonus points (1-3). Allocation stops at the
        first zero score, so zero-BPS players never receive bonus.

    Example:
        BPS [34, 34, 30, 20, 20, 0] -> bonus [3, 3, 2, 1, 1, -]
    """
    ranked = sorted(values, key=lambda v: v.value, reverse=True)

    awards: dict[int, int] = {}
    tier = MAX_BONUS + 1
    last_value: int | None = None
    for entry in ranked:
        if entry.value != last_value:
            tier -= 1
            last_value = entry.value
        if tier == 0 or entry.value == 0:
            break
        awards[entry.player_id] = tier

    return awards
