"""Tests for gameweek pairings."""

from draft_live.services.matchups import Matchup, next_gameweek_preview, select_matchups
from draft_live.services.records import Match


def match(event: int, a: int, b: int) -> Match:
    return Match(event=event, league_entry_1=a, league_entry_2=b)


MATCHES = [
    match(5, 1, 2),
    match(6, 1, 3),
    match(5, 3, 4),
    match(5, 5, 6),
    match(5, 7, 8),
    match(6, 2, 4),
]


class TestSelectMatchups:
    """Tests for select_matchups."""

    def test_three_pairs_in_source_order(self):
        """Four GW5 entries yield the first three, in order."""
        result = select_matchups(MATCHES, 5)

        assert result == [Matchup(5, 1, 2), Matchup(5, 3, 4), Matchup(5, 5, 6)]

    def test_custom_limit(self):
        assert len(select_matchups(MATCHES, 5, limit=4)) == 4

    def test_no_matches_for_gameweek(self):
        assert select_matchups(MATCHES, 20) == []

    def test_self_pairing_skipped(self):
        matches = [match(5, 1, 1), match(5, 1, 2)]

        assert select_matchups(matches, 5) == [Matchup(5, 1, 2)]


class TestNextGameweekPreview:
    """Tests for next_gameweek_preview."""

    def test_incomplete_next_gameweek_is_unavailable(self):
        """Only two GW6 entries: the preview is unavailable."""
        assert next_gameweek_preview(MATCHES, 5) is None

    def test_complete_next_gameweek(self):
        matches = [match(6, 1, 2), match(6, 3, 4), match(6, 5, 6)]

        assert next_gameweek_preview(matches, 5) == [
            Matchup(6, 1, 2),
            Matchup(6, 3, 4),
            Matchup(6, 5, 6),
        ]

    def test_season_end(self):
        """There is no gameweek after the last one."""
        matches = [match(39, 1, 2), match(39, 3, 4), match(39, 5, 6)]

        assert next_gameweek_preview(matches, 38) is None
