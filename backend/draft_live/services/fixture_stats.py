"""Gameweek fixture summaries and the gameweek-wide provisional bonus map."""

from dataclasses import dataclass, field
from enum import Enum

from draft_live.services.bonus import allocate_bonus
from draft_live.services.lookups import Lookups
from draft_live.services.records import EventValue, Fixture, FixtureEvent

BPS_CATEGORY = "bps"
BPS_DISPLAY_LIMIT = 5  # per side

# Stat category -> annotation label, for the categories shown on the page.
CATEGORY_LABELS: dict[str, str] = {
    "goals_scored": "⚽",
    "assists": "⤵️",
    "yellow_cards": "🟨",
    "red_cards": "🟥",
    "own_goals": "OG",
    "penalties_saved": "PS",
    "penalties_missed": "PM",
    BPS_CATEGORY: "BPS",
}


class FixtureState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FULL_TIME = "full_time"


@dataclass(slots=True)
class Annotation:
    """One category line for one side of a fixture, e.g. ⚽ Salah Núñez."""

    label: str
    players: list[str]
    values: list[int] | None = None  # only for categories that show values

    def render(self) -> str:
        if self.values is None:
            names = " ".join(self.players)
        else:
            names = " ".join(f"{p}({v})" for p, v in zip(self.players, self.values))
        return f"{self.label}: {names}"


@dataclass(slots=True)
class FixtureLine:
    """Summary of a single fixture."""

    fixture_id: int
    state: FixtureState
    state_label: str  # "NS", "FT" or elapsed minutes like "67'"
    home_team: str
    away_team: str
    home_score: int | None
    away_score: int | None
    home: list[Annotation] = field(default_factory=list)
    away: list[Annotation] = field(default_factory=list)

    def render(self) -> str:
        home_score = "-" if self.home_score is None else self.home_score
        away_score = "-" if self.away_score is None else self.away_score
        lines = [
            f"{self.state_label}:: {self.home_team} [{home_score} - {away_score}] {self.away_team}"
        ]
        if self.state is not FixtureState.NOT_STARTED:
            lines.append("HOME " + " ".join(a.render() for a in self.home))
            lines.append("AWAY " + " ".join(a.render() for a in self.away))
        return "\n".join(line.rstrip() for line in lines)


@dataclass(slots=True)
class FixtureStatSummary:
    """All fixtures of a gameweek plus the provisional bonus map."""

    fixtures: list[FixtureLine] = field(default_factory=list)
    bonus: dict[int, int] = field(default_factory=dict)

    def render_text(self) -> str:
        return "\n\n".join(line.render() for line in self.fixtures)


def fixture_state(fixture: Fixture) -> tuple[FixtureState, str]:
    """Classify a fixture and produce its short state label."""
    if fixture.finished:
        return FixtureState.FULL_TIME, "FT"
    if not fixture.started:
        return FixtureState.NOT_STARTED, "NS"
    return FixtureState.IN_PROGRESS, f"{fixture.minutes}'"


def _annotate(
    kind: str, values: list[EventValue], lookups: Lookups
) -> Annotation | None:
    if not values:
        return None

    label = CATEGORY_LABELS[kind]
    if kind == BPS_CATEGORY:
        top = sorted(values, key=lambda v: v.value, reverse=True)[:BPS_DISPLAY_LIMIT]
        return Annotation(
            label=label,
            players=[lookups.player_name(v.player_id) for v in top],
            values=[v.value for v in top],
        )
    return Annotation(label=label, players=[lookups.player_name(v.player_id) for v in values])


def _summarize_events(
    events: list[FixtureEvent], lookups: Lookups
) -> tuple[list[Annotation], list[Annotation], dict[int, int]]:
    home: list[Annotation] = []
    away: list[Annotation] = []
    bonus: dict[int, int] = {}

    for event in events:
        if event.kind not in CATEGORY_LABELS:
            continue

        if event.kind == BPS_CATEGORY:
            bonus = allocate_bonus([*event.home, *event.away])

        for side, values in ((home, event.home), (away, event.away)):
            annotation = _annotate(event.kind, values, lookups)
            if annotation is not None:
                side.append(annotation)

    return home, away, bonus


def merge_fixture_stats(fixtures: list[Fixture], lookups: Lookups) -> FixtureStatSummary:
    """Summarize every fixture of a gameweek and merge their bonus awards.

    Args:
        fixtures: Gameweek fixtures in display order
        lookups: Name lookups for players and teams

    Returns:
        FixtureStatSummary with one line per fixture and a player -> bonus map
        covering all started fixtures. A player plays in one fixture per
        gameweek, so later fixtures overwriting earlier keys never loses data.
    """
    summary = FixtureStatSummary()

    for fixture in fixtures:
        state, label = fixture_state(fixture)
        line = FixtureLine(
            fixture_id=fixture.id,
            state=state,
            state_label=label,
            home_team=lookups.team_name(fixture.team_h),
            away_team=lookups.team_name(fixture.team_a),
            home_score=fixture.team_h_score,
            away_score=fixture.team_a_score,
        )

        if state is not FixtureState.NOT_STARTED:
            line.home, line.away, bonus = _summarize_events(fixture.stats, lookups)
            summary.bonus.update(bonus)

        summary.fixtures.append(line)

    return summary
