"""HTML status page for a GameweekView."""

from html import escape

from draft_live.services.fixture_stats import FixtureLine, FixtureState
from draft_live.services.gameweek import PAGE_SOURCE, GameweekView, ManagerScore
from draft_live.services.records import ResourceStatus
from draft_live.services.squad import BonusSource, RowEmphasis, SquadRow

UNAVAILABLE = "Data unavailable"
PREVIEW_UNAVAILABLE = "Could not load"

ROW_CLASSES: dict[RowEmphasis, str] = {
    RowEmphasis.IDLE: "",
    RowEmphasis.ACTIVE: ' class="table-dark text-light"',
    RowEmphasis.BENCH: ' class="table-danger"',
    RowEmphasis.BENCH_LIGHT: ' class="table-danger fst-italic"',
    RowEmphasis.BENCH_STRONG: ' class="table-danger fw-bold"',
}

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css">
  <title>Live Draft Stats</title>
  <style>body {{ font-size: 9pt; }} .table td, .table th {{ padding: 1px; }}</style>
</head>
<body>
  <h1 class="text-center">{title}</h1>
  <div class="container">
    <div class="row">
      <div class="col-lg-10">{matchups}</div>
      <div class="col-lg-2">
        <div class="bg-primary text-light text-center"><b>STANDINGS</b></div>
        {standings}
        <hr>
        <div class="bg-warning text-light text-center"><b>FIXTURES (Next GW)</b></div>
        {next_fixtures}
        <hr>
        <div class="bg-warning text-light text-center"><b>Gameweek Stats</b></div>
        {fixtures}
      </div>
    </div>
  </div>
</body>
</html>
"""

SQUAD_HEADER = (
    "<tr><th>PLAYER</th><th>TM</th><th>POS</th><th>MP</th><th>GS</th>"
    "<th>AS</th><th>GA</th><th>YC</th><th>BO</th><th>PT</th></tr>"
)


def _failed(view: GameweekView, source: str) -> bool:
    # A page-level failure takes every section down with it
    return any(
        view.sources.get(name, ResourceStatus.OK) is not ResourceStatus.OK
        for name in (PAGE_SOURCE, source)
    )


def _squad_row(row: SquadRow) -> str:
    # Provisional bonus is marked so it is not mistaken for the final figure
    bonus = f"{row.bonus}*" if row.bonus_source is BonusSource.PROVISIONAL else str(row.bonus)
    cells = [
        escape(row.player_name),
        escape(row.team),
        escape(row.position),
        str(row.minutes),
        str(row.goals_scored),
        str(row.assists),
        str(row.goals_conceded),
        str(row.yellow_cards),
        bonus,
        str(row.points),
    ]
    return f"<tr{ROW_CLASSES[row.emphasis]}>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def _manager(score: ManagerScore) -> str:
    heading = f"<div><b>{escape(score.manager_name)} [Total Points: {score.total}]</b></div>"
    if score.status is not ResourceStatus.OK:
        return heading + f"<div>{UNAVAILABLE}</div>"
    rows = "".join(_squad_row(row) for row in score.rows)
    return (
        heading
        + '<table class="table table-sm table-striped table-bordered">'
        + SQUAD_HEADER
        + rows
        + "</table>"
    )


def _fixture(line: FixtureLine) -> str:
    home_score = "-" if line.home_score is None else line.home_score
    away_score = "-" if line.away_score is None else line.away_score
    html = (
        f"{escape(line.state_label)}:: {escape(line.home_team)} "
        f"[{home_score} - {away_score}] {escape(line.away_team)}<br/>"
    )
    if line.state is FixtureState.NOT_STARTED:
        return html
    home = " ".join(escape(a.render()) for a in line.home)
    away = " ".join(escape(a.render()) for a in line.away)
    return html + f"<b>HOME</b> {home}<br/><b>AWAY</b> {away}<hr/>"


def render_page(view: GameweekView) -> str:
    """Render the full status page."""
    title = f"GAMEWEEK {view.gameweek}" if view.gameweek is not None else "GAMEWEEK"

    if view.matchups:
        matchups = "".join(
            '<div class="row bg-success text-white">'
            f'<div class="col-lg-6">{_manager(m.home)}</div>'
            f'<div class="col-lg-6">{_manager(m.away)}</div>'
            "</div><hr/>"
            for m in view.matchups
        )
    else:
        matchups = f"<div>{UNAVAILABLE}</div>"

    if _failed(view, "league") or not view.standings:
        standings = f"<div>{UNAVAILABLE}</div>"
    else:
        standings = (
            '<table class="table table-sm table-striped table-bordered">'
            "<tr><th>#</th><th>Player</th><th>W-D-L</th><th>PTS</th></tr>"
            + "".join(
                f"<tr><td>{s.rank}</td><td>{escape(s.manager_name)}</td>"
                f"<td>{s.matches_won}-{s.matches_drawn}-{s.matches_lost}</td>"
                f"<td>{s.total}</td></tr>"
                for s in view.standings
            )
            + "</table>"
        )

    if view.next_fixtures is None:
        next_fixtures = PREVIEW_UNAVAILABLE
    else:
        next_fixtures = (
            '<div class="bg-secondary text-light text-center">'
            + "".join(
                f"<div>{escape(p.manager_1)} VS {escape(p.manager_2)}</div>"
                for p in view.next_fixtures
            )
            + "</div>"
        )

    if _failed(view, "fixtures"):
        fixtures = f"<div>{UNAVAILABLE}</div>"
    else:
        fixtures = "".join(_fixture(line) for line in view.fixture_summary.fixtures)

    return PAGE_TEMPLATE.format(
        title=escape(title),
        matchups=matchups,
        standings=standings,
        next_fixtures=next_fixtures,
        fixtures=fixtures,
    )
