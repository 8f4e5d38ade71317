"""Lookup tables for one aggregation run.

Built from the catalogue each time a page is assembled and passed to the
components that print names, so nothing depends on process-wide state.
"""

from dataclasses import dataclass, field

from draft_live.services.records import Catalogue, PlayerProfile

# Used when the catalogue could not be fetched or lacks element_types
DEFAULT_POSITION_NAMES = {1: "GK", 2: "DF", 3: "MD", 4: "FD"}

UNKNOWN = "NA"


@dataclass(slots=True)
class Lookups:
    """Name lookups keyed by player, team and position ids."""

    players: dict[int, PlayerProfile] = field(default_factory=dict)
    teams: dict[int, str] = field(default_factory=dict)
    positions: dict[int, str] = field(default_factory=lambda: dict(DEFAULT_POSITION_NAMES))

    @classmethod
    def from_catalogue(cls, catalogue: Catalogue) -> "Lookups":
        return cls(
            players=catalogue.players,
            teams=catalogue.teams,
            positions=catalogue.positions or dict(DEFAULT_POSITION_NAMES),
        )

    def player(self, player_id: int) -> PlayerProfile:
        """Return the player's profile, or a blank one for unknown ids."""
        return self.players.get(player_id) or PlayerProfile(id=player_id)

    def player_name(self, player_id: int) -> str:
        return self.player(player_id).web_name

    def team_name(self, team_id: int) -> str:
        return self.teams.get(team_id, UNKNOWN)

    def position_name(self, element_type: int) -> str:
        return self.positions.get(element_type, UNKNOWN)
