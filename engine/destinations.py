"""Places cubes, architects and leader cards can be moved from and to.

State changes describe moves between two destinations. Each destination
knows how to read and update the part of a GameState it designates; the
caller is responsible for handing it a state it is allowed to mutate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from core.constants import PlayerColor, InfluenceType, LeaderCard
from core.components import Tile
from core.game_state import GameState


# =============================================================================
# Cube destinations
# =============================================================================


class CubeDestination(ABC):
    """A place holding cubes of a single player color."""

    color: PlayerColor

    @abstractmethod
    def count(self, state: GameState) -> int:
        """Return the number of cubes currently at this destination."""
        pass

    @abstractmethod
    def add_to(self, nb_cubes: int, state: GameState) -> None:
        """Add cubes to this destination in the given state."""
        pass

    @abstractmethod
    def remove_from(self, nb_cubes: int, state: GameState) -> None:
        """Remove cubes from this destination in the given state.

        Raises:
            ValueError: If the destination holds fewer than nb_cubes.
        """
        pass


@dataclass(frozen=True)
class PlayerReserve(CubeDestination):
    """The active or passive reserve of a player."""

    color: PlayerColor
    active: bool

    def count(self, state: GameState) -> int:
        player_state = state.player_state(self.color)
        return player_state.nb_active_cubes if self.active else player_state.nb_passive_cubes

    def add_to(self, nb_cubes: int, state: GameState) -> None:
        state.player_state(self.color).add_cubes(nb_cubes, self.active)

    def remove_from(self, nb_cubes: int, state: GameState) -> None:
        state.player_state(self.color).remove_cubes(nb_cubes, self.active)


@dataclass(frozen=True)
class InfluenceZoneDestination(CubeDestination):
    """The cubes of one player in an influence zone."""

    zone: InfluenceType
    color: PlayerColor

    def count(self, state: GameState) -> int:
        return state.cubes_in_zone(self.zone, self.color)

    def add_to(self, nb_cubes: int, state: GameState) -> None:
        state.set_cubes_in_zone(self.zone, self.color, self.count(state) + nb_cubes)

    def remove_from(self, nb_cubes: int, state: GameState) -> None:
        available = self.count(state)
        if nb_cubes > available:
            raise ValueError(
                f"Cannot remove {nb_cubes} {self.color.value} cubes from "
                f"{self.zone.value}, which holds {available}"
            )
        state.set_cubes_in_zone(self.zone, self.color, available - nb_cubes)


@dataclass(frozen=True)
class TileSpot(CubeDestination):
    """One worker spot of a tile.

    A spot holds either nothing or exactly cubes_per_spot cubes of a single
    player, so only that exact number can be added or removed.
    """

    tile: Tile
    color: PlayerColor
    spot: int

    def count(self, state: GameState) -> int:
        tile_state = state.find_tile_state(self.tile)
        if tile_state.color_in_spot(self.spot) == self.color:
            return tile_state.cubes_per_spot
        return 0

    def add_to(self, nb_cubes: int, state: GameState) -> None:
        tile_state = state.find_tile_state(self.tile)
        if tile_state.color_in_spot(self.spot) is not PlayerColor.NONE:
            raise ValueError(f"Spot {self.spot} of {self.tile} is already filled")
        if nb_cubes != tile_state.cubes_per_spot:
            raise ValueError(
                f"Spot {self.spot} of {self.tile} needs {tile_state.cubes_per_spot} "
                f"cubes, got {nb_cubes}"
            )
        tile_state.set_color_in_spot(self.spot, self.color)

    def remove_from(self, nb_cubes: int, state: GameState) -> None:
        tile_state = state.find_tile_state(self.tile)
        if tile_state.color_in_spot(self.spot) != self.color:
            raise ValueError(f"Spot {self.spot} of {self.tile} holds no {self.color.value} cubes")
        if nb_cubes != tile_state.cubes_per_spot:
            raise ValueError(
                f"Spot {self.spot} of {self.tile} holds {tile_state.cubes_per_spot} "
                f"cubes, cannot remove {nb_cubes}"
            )
        tile_state.set_color_in_spot(self.spot, PlayerColor.NONE)


# =============================================================================
# Architect destinations
# =============================================================================


class ArchitectDestination(ABC):
    """A place where an architect can stand."""

    @property
    @abstractmethod
    def architect_color(self) -> PlayerColor:
        """Color of the architect this destination refers to."""
        pass

    @abstractmethod
    def is_holding(self, state: GameState) -> bool:
        """Check whether the architect is currently at this destination."""
        pass

    @abstractmethod
    def add_to(self, state: GameState) -> None:
        pass

    @abstractmethod
    def remove_from(self, state: GameState) -> None:
        pass


@dataclass(frozen=True)
class PlayerArchitect(ArchitectDestination):
    """A player's hand, holding either their architect or the neutral one."""

    color: PlayerColor
    neutral: bool

    @property
    def architect_color(self) -> PlayerColor:
        return PlayerColor.NEUTRAL if self.neutral else self.color

    def is_holding(self, state: GameState) -> bool:
        player_state = state.player_state(self.color)
        if self.neutral:
            return player_state.is_holding_neutral_architect
        return player_state.is_holding_architect

    def _set_holding(self, state: GameState, holding: bool) -> None:
        player_state = state.player_state(self.color)
        if self.neutral:
            player_state.is_holding_neutral_architect = holding
        else:
            player_state.is_holding_architect = holding

    def add_to(self, state: GameState) -> None:
        if self.is_holding(state):
            raise ValueError(f"Player {self.color.value} already holds this architect")
        self._set_holding(state, True)

    def remove_from(self, state: GameState) -> None:
        if not self.is_holding(state):
            raise ValueError(f"Player {self.color.value} does not hold this architect")
        self._set_holding(state, False)


@dataclass(frozen=True)
class TileArchitect(ArchitectDestination):
    """An architect standing on a tile."""

    tile: Tile
    color: PlayerColor

    @property
    def architect_color(self) -> PlayerColor:
        return self.color

    def is_holding(self, state: GameState) -> bool:
        return state.find_tile_state(self.tile).architect == self.color

    def add_to(self, state: GameState) -> None:
        tile_state = state.find_tile_state(self.tile)
        if tile_state.has_architect():
            raise ValueError(f"{self.tile} already has an architect")
        tile_state.architect = self.color

    def remove_from(self, state: GameState) -> None:
        if not self.is_holding(state):
            raise ValueError(f"No {self.color.value} architect on {self.tile}")
        state.find_tile_state(self.tile).architect = PlayerColor.NONE


@dataclass(frozen=True)
class OffboardNeutral(ArchitectDestination):
    """The neutral architect out of play.

    The neutral architect is off-board whenever no player holds it and it
    stands on no tile.
    """

    @property
    def architect_color(self) -> PlayerColor:
        return PlayerColor.NEUTRAL

    def is_holding(self, state: GameState) -> bool:
        if state.find_tile_under_architect(PlayerColor.NEUTRAL) is not None:
            return False
        return not any(p.is_holding_neutral_architect for p in state.player_states)

    def add_to(self, state: GameState) -> None:
        pass

    def remove_from(self, state: GameState) -> None:
        if not self.is_holding(state):
            raise ValueError("The neutral architect is not off-board")


# =============================================================================
# Leader card destinations
# =============================================================================


class LeaderDestination(ABC):
    """A place where a leader card can be."""

    card: LeaderCard

    @abstractmethod
    def add_to(self, state: GameState) -> None:
        pass

    @abstractmethod
    def remove_from(self, state: GameState) -> None:
        pass


@dataclass(frozen=True)
class LeaderOnBoard(LeaderDestination):
    """A leader card available on the board."""

    card: LeaderCard

    def add_to(self, state: GameState) -> None:
        if self.card in state.available_leader_cards:
            raise ValueError(f"Leader {self.card.value} is already on the board")
        state.available_leader_cards.append(self.card)

    def remove_from(self, state: GameState) -> None:
        if self.card not in state.available_leader_cards:
            raise ValueError(f"Leader {self.card.value} is not on the board")
        state.available_leader_cards.remove(self.card)


@dataclass(frozen=True)
class LeaderWithPlayer(LeaderDestination):
    """A leader card held by a player."""

    card: LeaderCard
    color: PlayerColor

    def add_to(self, state: GameState) -> None:
        player_state = state.player_state(self.color)
        if player_state.leader_card is not None:
            raise ValueError(f"Player {self.color.value} already holds a leader")
        player_state.leader_card = self.card

    def remove_from(self, state: GameState) -> None:
        player_state = state.player_state(self.color)
        if player_state.leader_card is not self.card:
            raise ValueError(f"Player {self.color.value} does not hold {self.card.value}")
        player_state.leader_card = None
