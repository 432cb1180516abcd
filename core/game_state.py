"""Game state for the Quebec rule engine.

GameState is the single source of truth for the entire game.
It combines all components and provides methods for cloning,
serialization, state hashing and invariant validation.

Every mutation path copies first: state changes clone a GameState and
mutate the copy, so any snapshot handed out stays valid.
"""

from __future__ import annotations

import copy
import hashlib
import json
from dataclasses import dataclass, field
from typing import Optional, Any, TYPE_CHECKING

from .constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    NORMAL_COLORS,
    LAST_CENTURY,
)
from .board import Location, TileState
from .components import Tile
from .player import PlayerState

if TYPE_CHECKING:
    from engine.possible_actions import ActionMenu


@dataclass
class InfluenceZoneState:
    """Cubes held by each player in one influence zone.

    Attributes:
        influence: The zone.
        cubes: Number of cubes per player color.
    """

    influence: InfluenceType
    cubes: dict[PlayerColor, int] = field(
        default_factory=lambda: {color: 0 for color in NORMAL_COLORS}
    )

    def get_cubes(self, color: PlayerColor) -> int:
        return self.cubes.get(color, 0)

    def set_cubes(self, color: PlayerColor, nb_cubes: int) -> None:
        """Set the number of cubes a player has in this zone.

        Raises:
            ValueError: If the color is not a player color or nb_cubes is negative.
        """
        if not color.is_normal:
            raise ValueError(f"{color.value} cannot own cubes")
        if nb_cubes < 0:
            raise ValueError(
                f"Zone {self.influence.value} cannot hold {nb_cubes} cubes of {color.value}"
            )
        self.cubes[color] = nb_cubes


@dataclass
class GameState:
    """The complete game state - single source of truth.

    Attributes:
        century: Current century (0-3).
        player_states: All players in turn order.
        tile_states: One entry per tile location, in board order.
        available_leader_cards: Leader cards not held by any player.
        influence_zones: Cube banks, one per influence type.
        possible_actions: Pending decision menu, None when nothing is pending.
        cubes_per_player: Total cubes each player owns for the whole game.
        turn_number: Number of completed turns, for end-of-round bookkeeping.
    """

    century: int = 0
    player_states: list[PlayerState] = field(default_factory=list)
    tile_states: list[TileState] = field(default_factory=list)
    available_leader_cards: list[LeaderCard] = field(default_factory=list)
    influence_zones: dict[InfluenceType, InfluenceZoneState] = field(
        default_factory=lambda: {zone: InfluenceZoneState(zone) for zone in InfluenceType}
    )
    possible_actions: Optional[ActionMenu] = None
    cubes_per_player: int = 0
    turn_number: int = 0

    # -------------------------------------------------------------------------
    # Player access methods
    # -------------------------------------------------------------------------

    @property
    def current_player(self) -> PlayerState:
        """Get the player holding the current decision.

        Raises:
            RuntimeError: If there is not exactly one current player.
        """
        current = [p for p in self.player_states if p.is_current_player]
        if len(current) != 1:
            raise RuntimeError(f"Expected exactly one current player, found {len(current)}")
        return current[0]

    def player_state(self, color: PlayerColor) -> PlayerState:
        """Get a player by color.

        Raises:
            ValueError: If no player has this color.
        """
        for player_state in self.player_states:
            if player_state.color == color:
                return player_state
        raise ValueError(f"No player with color {color.value}")

    def num_players(self) -> int:
        """Return the number of players."""
        return len(self.player_states)

    def next_player(self) -> None:
        """Make the next player in list order current, wrapping around."""
        index = self.player_states.index(self.current_player)
        for player_state in self.player_states:
            player_state.is_current_player = False
        self.player_states[(index + 1) % len(self.player_states)].is_current_player = True

    def set_current_player(self, color: PlayerColor) -> None:
        """Make the player of the given color current.

        Raises:
            ValueError: If no player has this color.
        """
        target = self.player_state(color)
        for player_state in self.player_states:
            player_state.is_current_player = player_state is target

    def nb_players_with_leaders(self) -> int:
        """Count the players holding a leader card."""
        return sum(1 for p in self.player_states if p.leader_card is not None)

    # -------------------------------------------------------------------------
    # Tile access methods
    # -------------------------------------------------------------------------

    def find_tile_state(self, tile: Tile) -> TileState:
        """Get the state of a tile.

        Raises:
            ValueError: If the tile is not on the board.
        """
        for tile_state in self.tile_states:
            if tile_state.tile == tile:
                return tile_state
        raise ValueError(f"{tile} is not on the board")

    def find_tile_at_location(self, location: Location) -> Optional[TileState]:
        """Get the state of the tile at a location, or None."""
        for tile_state in self.tile_states:
            if tile_state.location == location:
                return tile_state
        return None

    def find_tile_under_architect(self, architect: PlayerColor) -> Optional[TileState]:
        """Get the tile on which an architect stands, or None."""
        for tile_state in self.tile_states:
            if tile_state.architect == architect:
                return tile_state
        return None

    # -------------------------------------------------------------------------
    # Influence zone access
    # -------------------------------------------------------------------------

    def cubes_in_zone(self, zone: InfluenceType, color: PlayerColor) -> int:
        """Get the number of cubes a player has in an influence zone."""
        return self.influence_zones[zone].get_cubes(color)

    def set_cubes_in_zone(self, zone: InfluenceType, color: PlayerColor, nb_cubes: int) -> None:
        """Set the number of cubes a player has in an influence zone."""
        self.influence_zones[zone].set_cubes(color, nb_cubes)

    def total_cubes_for(self, color: PlayerColor) -> int:
        """Count all the cubes of a player, wherever they are."""
        player_state = self.player_state(color)
        total = player_state.nb_total_cubes
        total += sum(zone.get_cubes(color) for zone in self.influence_zones.values())
        for tile_state in self.tile_states:
            for spot_color in tile_state.spots:
                if spot_color == color:
                    total += tile_state.cubes_per_spot
        return total

    # -------------------------------------------------------------------------
    # Cloning and serialization
    # -------------------------------------------------------------------------

    def clone(self) -> GameState:
        """Create a deep copy of the game state.

        Returns:
            A complete deep copy of this GameState, sharing no mutable data.
        """
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the game state to a dictionary.

        The pending menu is summarized by its number of actions.

        Returns:
            Dictionary representation of the game state.
        """
        return {
            "century": self.century,
            "turn_number": self.turn_number,
            "cubes_per_player": self.cubes_per_player,
            "players": [
                {
                    "color": p.color.value,
                    "name": p.player.name,
                    "nb_active_cubes": p.nb_active_cubes,
                    "nb_passive_cubes": p.nb_passive_cubes,
                    "is_current_player": p.is_current_player,
                    "is_holding_architect": p.is_holding_architect,
                    "is_holding_neutral_architect": p.is_holding_neutral_architect,
                    "leader_card": p.leader_card.value if p.leader_card else None,
                    "score": p.score,
                }
                for p in self.player_states
            ],
            "tiles": [
                {
                    "influence": t.tile.influence.value,
                    "century": t.tile.century,
                    "index": t.tile.index,
                    "location": list(t.location),
                    "architect": t.architect.value,
                    "spots": [color.value for color in t.spots],
                    "building_facing": t.building_facing,
                    "star_token_color": t.star_token_color.value,
                    "nb_stars": t.nb_stars,
                }
                for t in self.tile_states
            ],
            "available_leader_cards": [card.value for card in self.available_leader_cards],
            "influence_zones": {
                zone.value: {color.value: n for color, n in state.cubes.items()}
                for zone, state in self.influence_zones.items()
            },
            "nb_possible_actions": (
                self.possible_actions.nb_actions if self.possible_actions is not None else 0
            ),
        }

    def state_hash(self) -> str:
        """Compute a hash of the game state.

        Returns:
            A hex string hash of the serialized state.
        """
        state_json = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(state_json.encode()).hexdigest()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Validate the game state for consistency.

        Checks cube conservation, the single current player, non-negative
        counts and that every leader card is in exactly one place.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: list[str] = []

        if not 0 <= self.century <= LAST_CENTURY:
            errors.append(f"Invalid century: {self.century}")

        nb_current = sum(1 for p in self.player_states if p.is_current_player)
        if nb_current != 1:
            errors.append(f"Expected exactly one current player, found {nb_current}")

        for p in self.player_states:
            if p.nb_active_cubes < 0 or p.nb_passive_cubes < 0:
                errors.append(f"Player {p.color.value} has a negative reserve")
            total = self.total_cubes_for(p.color)
            if total != self.cubes_per_player:
                errors.append(
                    f"Player {p.color.value} owns {total} cubes "
                    f"(expected {self.cubes_per_player})"
                )

        for zone in self.influence_zones.values():
            for color, nb_cubes in zone.cubes.items():
                if nb_cubes < 0:
                    errors.append(
                        f"Zone {zone.influence.value} holds {nb_cubes} cubes of {color.value}"
                    )

        held = [p.leader_card for p in self.player_states if p.leader_card is not None]
        all_cards = held + list(self.available_leader_cards)
        if len(all_cards) != len(set(all_cards)):
            errors.append("A leader card is in more than one place")

        colors = [p.color for p in self.player_states]
        for tile_state in self.tile_states:
            for spot_color in tile_state.spots:
                if spot_color.is_normal and spot_color not in colors:
                    errors.append(f"{tile_state.tile} holds cubes of absent {spot_color.value}")

        return errors

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        lines = [
            f"GameState(century={self.century}, turn={self.turn_number})",
            f"  Leader cards available: {[c.value for c in self.available_leader_cards]}",
            f"  Players ({len(self.player_states)}):",
        ]
        for p in self.player_states:
            marker = "*" if p.is_current_player else " "
            leader = p.leader_card.value if p.leader_card else "-"
            lines.append(
                f"   {marker}{p.color.value}: score={p.score}, "
                f"active={p.nb_active_cubes}, passive={p.nb_passive_cubes}, leader={leader}"
            )
        for zone, state in self.influence_zones.items():
            counts = ", ".join(f"{c.value}={n}" for c, n in state.cubes.items() if n > 0)
            lines.append(f"  Zone {zone.value}: {counts or 'empty'}")
        nb_actions = self.possible_actions.nb_actions if self.possible_actions else 0
        lines.append(f"  Possible actions: {nb_actions}")
        return "\n".join(lines)
