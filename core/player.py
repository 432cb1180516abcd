"""Player model for the Quebec rule engine.

Each player owns a fixed supply of cubes split between an active and a
passive reserve, an architect, possibly a leader card, and a score.
Cubes leave the reserves for tiles and influence zones, and come back
at the end of each century.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import PlayerColor, LeaderCard


@dataclass(frozen=True)
class Player:
    """Static identity of a player.

    Attributes:
        color: The player's color, also the color of their cubes and architect.
        name: Display name.
    """

    color: PlayerColor
    name: str = ""

    def __post_init__(self) -> None:
        if not self.color.is_normal:
            raise ValueError(f"{self.color.value} is not a player color")


@dataclass
class PlayerState:
    """Mutable state of a player during a game.

    Attributes:
        player: Static identity of the player.
        nb_active_cubes: Cubes that can be spent on actions.
        nb_passive_cubes: Cubes that must be activated before being spent.
        is_current_player: Whether this player has the current decision.
        is_holding_architect: Whether the player's architect is off the board.
        is_holding_neutral_architect: Whether the player holds the neutral architect.
        leader_card: Leader card held by the player, if any.
        score: Current victory points.
    """

    player: Player
    nb_active_cubes: int = 0
    nb_passive_cubes: int = 0
    is_current_player: bool = False
    is_holding_architect: bool = False
    is_holding_neutral_architect: bool = False
    leader_card: Optional[LeaderCard] = None
    score: int = 0

    @property
    def color(self) -> PlayerColor:
        return self.player.color

    @property
    def nb_total_cubes(self) -> int:
        """Cubes in both reserves."""
        return self.nb_active_cubes + self.nb_passive_cubes

    def owns_architect(self, architect: PlayerColor) -> bool:
        """Check whether an architect of the given color belongs to this player.

        The neutral architect belongs to the holder of the economic leader.
        """
        if architect == self.color:
            return True
        return architect is PlayerColor.NEUTRAL and self.leader_card is LeaderCard.ECONOMIC

    def add_cubes(self, nb_cubes: int, active: bool) -> None:
        """Add cubes to one of the reserves."""
        if nb_cubes < 0:
            raise ValueError(f"Cannot add a negative number of cubes: {nb_cubes}")
        if active:
            self.nb_active_cubes += nb_cubes
        else:
            self.nb_passive_cubes += nb_cubes

    def remove_cubes(self, nb_cubes: int, active: bool) -> None:
        """Remove cubes from one of the reserves.

        Raises:
            ValueError: If the reserve does not hold enough cubes.
        """
        available = self.nb_active_cubes if active else self.nb_passive_cubes
        if not 0 <= nb_cubes <= available:
            reserve = "active" if active else "passive"
            raise ValueError(
                f"Player {self.color.value} cannot remove {nb_cubes} cubes "
                f"from a {reserve} reserve of {available}"
            )
        if active:
            self.nb_active_cubes -= nb_cubes
        else:
            self.nb_passive_cubes -= nb_cubes

    def add_score(self, points: int) -> None:
        """Add points to the player's score.

        Raises:
            ValueError: If points is negative.
        """
        if points < 0:
            raise ValueError(f"Cannot score negative points: {points}")
        self.score += points
