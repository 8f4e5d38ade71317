"""Tests for per-manager squad scoring.

Squad layout: positions 1-11 start, 12-15 are the bench. Only starters count
toward the manager's total.
"""

import pytest

from draft_live.services.lookups import Lookups
from draft_live.services.records import PlayerProfile, PlayerStatLine, SquadPick
from draft_live.services.squad import (
    BonusSource,
    RowEmphasis,
    resolve_bonus,
    score_squad,
)

# =============================================================================
# Helper functions for creating test data
# =============================================================================


def make_squad(player_ids: list[int]) -> list[SquadPick]:
    """Picks in slot order: the first 11 start."""
    return [SquadPick(player_id=pid, position=i) for i, pid in enumerate(player_ids, start=1)]


def make_live(points: dict[int, int], minutes: int = 90) -> dict[int, PlayerStatLine]:
    return {pid: PlayerStatLine(minutes=minutes, total_points=pts) for pid, pts in points.items()}


@pytest.fixture
def lookups() -> Lookups:
    return Lookups(
        players={
            pid: PlayerProfile(id=pid, web_name=f"Player {pid}", team=1, element_type=3)
            for pid in range(1, 16)
        },
        teams={1: "ARS"},
    )


@pytest.fixture
def squad() -> list[SquadPick]:
    return make_squad(list(range(1, 16)))


# =============================================================================
# Tests
# =============================================================================


class TestStartersAndBench:
    """Starting lineup vs bench."""

    def test_total_sums_starters_only(self, squad, lookups):
        live = make_live({pid: 2 for pid in range(1, 16)})

        result = score_squad(squad, live, {}, lookups)

        assert result.total == 22
        assert len(result.rows) == 15

    def test_bench_points_do_not_count(self, squad, lookups):
        """A bench player on 8 points leaves the total unchanged."""
        live = make_live({pid: 2 for pid in range(1, 12)} | {13: 8})

        result = score_squad(squad, live, {}, lookups)

        assert result.total == 22
        bench_row = result.rows[12]
        assert bench_row.player_id == 13
        assert bench_row.is_starter is False
        assert bench_row.points == 8
        assert bench_row.emphasis is RowEmphasis.BENCH_STRONG

    def test_same_player_as_starter_counts(self, lookups):
        """Moving the 8-point player into slot 6 adds the points."""
        ids = list(range(1, 16))
        ids.remove(13)
        ids.insert(5, 13)
        live = make_live({pid: 2 for pid in range(1, 12)} | {13: 8})

        result = score_squad(make_squad(ids), live, {}, lookups)

        assert result.rows[5].player_id == 13
        assert result.rows[5].is_starter is True
        # Starters: ten 2-pointers (player 11 dropped to the bench) + 8
        assert result.total == 28

    def test_picks_sorted_by_position(self, lookups):
        """Slot is taken from the pick position, not list order."""
        picks = [
            SquadPick(player_id=2, position=12),
            SquadPick(player_id=1, position=1),
        ]
        live = make_live({1: 3, 2: 9})

        result = score_squad(picks, live, {}, lookups, lineup_size=1)

        assert [r.player_id for r in result.rows] == [1, 2]
        assert result.total == 3


class TestRowEmphasis:
    """Row highlighting thresholds."""

    @pytest.mark.parametrize(
        ("bench_points", "expected"),
        [
            (6, RowEmphasis.BENCH_STRONG),
            (5, RowEmphasis.BENCH_LIGHT),
            (2, RowEmphasis.BENCH_LIGHT),
            (1, RowEmphasis.BENCH),
            (0, RowEmphasis.BENCH),
        ],
    )
    def test_bench_thresholds(self, squad, lookups, bench_points, expected):
        live = make_live({14: bench_points})

        result = score_squad(squad, live, {}, lookups)

        assert result.rows[13].emphasis is expected

    def test_starter_with_minutes_is_active(self, squad, lookups):
        live = make_live({1: 1}, minutes=10)

        result = score_squad(squad, live, {}, lookups)

        assert result.rows[0].emphasis is RowEmphasis.ACTIVE
        assert result.rows[1].emphasis is RowEmphasis.IDLE


class TestBonusResolution:
    """Official vs provisional bonus."""

    def test_provisional_bonus_used_before_official(self, squad, lookups):
        live = make_live({1: 6})

        result = score_squad(squad, live, {1: 3}, lookups)

        row = result.rows[0]
        assert row.bonus == 3
        assert row.bonus_source is BonusSource.PROVISIONAL
        assert row.points == 9
        assert result.total == 9

    def test_official_bonus_replaces_provisional(self, squad, lookups):
        """Official and provisional bonus are never added together."""
        live = {1: PlayerStatLine(minutes=90, total_points=6, bonus=2)}

        result = score_squad(squad, live, {1: 3}, lookups)

        row = result.rows[0]
        assert row.bonus == 2
        assert row.bonus_source is BonusSource.OFFICIAL
        assert row.points == 8
        assert result.total == 8

    def test_no_bonus(self):
        assert resolve_bonus(PlayerStatLine(), {}, 7) == (0, BonusSource.NONE)

    def test_provisional_bonus_on_bench_not_counted(self, squad, lookups):
        live = make_live({12: 4})

        result = score_squad(squad, live, {12: 3}, lookups)

        assert result.rows[11].points == 7
        assert result.total == 0


class TestLookupMisses:
    """Missing ids never fail scoring."""

    def test_missing_live_stats_score_zero(self, squad, lookups):
        result = score_squad(squad, {}, {}, lookups)

        assert result.total == 0
        assert all(row.points == 0 for row in result.rows)

    def test_unknown_player_has_blank_name(self, lookups):
        result = score_squad([SquadPick(player_id=999, position=1)], {}, {}, lookups)

        row = result.rows[0]
        assert row.player_name == ""
        assert row.team == "NA"

    def test_empty_squad(self, lookups):
        result = score_squad([], {}, {}, lookups)

        assert result.total == 0
        assert result.rows == []


class TestMultiplier:
    """Captaincy is carried through but not applied."""

    def test_multiplier_not_applied(self, lookups):
        picks = [SquadPick(player_id=1, position=1, is_captain=True, multiplier=2)]
        live = make_live({1: 10})

        result = score_squad(picks, live, {}, lookups)

        assert result.total == 10
        assert result.rows[0].is_captain is True
        assert result.rows[0].multiplier == 2
