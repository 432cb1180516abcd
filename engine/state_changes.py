"""State-change algebra for the Quebec rule engine.

A GameStateChange describes a delta between two game states. Changes are
produced by actions, may be inspected (for instance by a renderer through
accept()) before being committed, and are committed with apply(), which
returns a new GameState and never touches its argument.

The set of change types is closed: every variant is declared here and has a
matching method on ChangeVisitor.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, TYPE_CHECKING

from core.constants import PlayerColor, BoardActionKind, MAX_STARS
from core.components import Tile
from core.game_state import GameState

from .destinations import CubeDestination, ArchitectDestination, LeaderDestination

if TYPE_CHECKING:
    from .possible_actions import ActionMenu

logger = logging.getLogger(__name__)


class GameStateChange(ABC):
    """Abstract base class for all state changes."""

    def apply(self, state: GameState) -> GameState:
        """Apply this change to a copy of a state.

        Args:
            state: The state to start from. It is not modified.

        Returns:
            A new GameState with the change applied.

        Raises:
            ValueError: If a precondition of the change does not hold.
        """
        new_state = state.clone()
        self.apply_in_place(new_state)
        return new_state

    @abstractmethod
    def apply_in_place(self, state: GameState) -> None:
        """Mutate a state the caller owns. Prefer apply()."""
        pass

    @abstractmethod
    def accept(self, visitor: ChangeVisitor) -> Any:
        """Dispatch to the visitor method matching this change."""
        pass


class ChangeVisitor:
    """Visitor over state changes.

    Every method returns None by default so a visitor only overrides the
    changes it cares about.
    """

    def visit_move_cubes(self, change: MoveCubes) -> Any:
        return None

    def visit_move_architect(self, change: MoveArchitect) -> Any:
        return None

    def visit_move_leader(self, change: MoveLeader) -> Any:
        return None

    def visit_flip_tile(self, change: FlipTile) -> Any:
        return None

    def visit_increase_star_token(self, change: IncreaseStarToken) -> Any:
        return None

    def visit_score_points(self, change: ScorePoints) -> Any:
        return None

    def visit_next_player(self, change: NextPlayer) -> Any:
        return None

    def visit_set_player(self, change: SetPlayer) -> Any:
        return None

    def visit_queue_possible_actions(self, change: QueuePossibleActions) -> Any:
        return None

    def visit_prepare_action(self, change: PrepareAction) -> Any:
        return None

    def visit_prepare_next_century(self, change: PrepareNextCentury) -> Any:
        return None

    def visit_instantaneous(self, change: Instantaneous) -> Any:
        return change.change.accept(self)

    def visit_composite(self, change: Composite) -> Any:
        change.call_on_each(lambda child: child.accept(self))
        return None


# =============================================================================
# Atomic changes
# =============================================================================


@dataclass(frozen=True)
class MoveCubes(GameStateChange):
    """Move cubes of one player between two destinations.

    Attributes:
        nb_cubes: Number of cubes to move.
        origin: Where the cubes come from.
        destination: Where the cubes go.
    """

    nb_cubes: int
    origin: CubeDestination
    destination: CubeDestination

    def __post_init__(self) -> None:
        if self.origin.color != self.destination.color:
            raise ValueError(
                f"Cannot move cubes from {self.origin.color.value} "
                f"to {self.destination.color.value}"
            )
        if self.nb_cubes < 0:
            raise ValueError(f"Cannot move {self.nb_cubes} cubes")

    @property
    def color(self) -> PlayerColor:
        return self.origin.color

    def apply_in_place(self, state: GameState) -> None:
        self.origin.remove_from(self.nb_cubes, state)
        self.destination.add_to(self.nb_cubes, state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_move_cubes(self)


@dataclass(frozen=True)
class MoveArchitect(GameStateChange):
    """Move an architect between two destinations."""

    origin: ArchitectDestination
    destination: ArchitectDestination

    def __post_init__(self) -> None:
        if self.origin.architect_color != self.destination.architect_color:
            raise ValueError(
                f"Cannot move the {self.origin.architect_color.value} architect "
                f"to a {self.destination.architect_color.value} destination"
            )

    def apply_in_place(self, state: GameState) -> None:
        self.origin.remove_from(state)
        self.destination.add_to(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_move_architect(self)


@dataclass(frozen=True)
class MoveLeader(GameStateChange):
    """Move a leader card between the board and a player."""

    origin: LeaderDestination
    destination: LeaderDestination

    def __post_init__(self) -> None:
        if self.origin.card != self.destination.card:
            raise ValueError("Origin and destination refer to different leader cards")

    def apply_in_place(self, state: GameState) -> None:
        self.origin.remove_from(state)
        self.destination.add_to(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_move_leader(self)


@dataclass(frozen=True)
class FlipTile(GameStateChange):
    """Flip a completed tile to its building side and set its star token.

    Attributes:
        tile: The completed tile.
        star_color: Owner of the star token, NONE when no spot was filled.
        nb_filled_spots: Number of stars on the token.
    """

    tile: Tile
    star_color: PlayerColor
    nb_filled_spots: int

    def apply_in_place(self, state: GameState) -> None:
        tile_state = state.find_tile_state(self.tile)
        tile_state.building_facing = True
        tile_state.set_star_token(self.star_color, self.nb_filled_spots)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_flip_tile(self)


@dataclass(frozen=True)
class IncreaseStarToken(GameStateChange):
    """Add one star to a star token holding one or two stars."""

    tile: Tile
    color: PlayerColor
    nb_stars: int

    def apply_in_place(self, state: GameState) -> None:
        tile_state = state.find_tile_state(self.tile)
        if tile_state.star_token_color != self.color:
            raise ValueError(f"{self.tile} carries no {self.color.value} star token")
        if not 1 <= tile_state.nb_stars < MAX_STARS or self.nb_stars != tile_state.nb_stars + 1:
            raise ValueError(
                f"Cannot go from {tile_state.nb_stars} to {self.nb_stars} stars on {self.tile}"
            )
        tile_state.set_star_token(self.color, self.nb_stars)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_increase_star_token(self)


@dataclass(frozen=True)
class ScorePoints(GameStateChange):
    """Add points to a player's score."""

    color: PlayerColor
    amount: int

    def apply_in_place(self, state: GameState) -> None:
        state.player_state(self.color).add_score(self.amount)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_score_points(self)


@dataclass(frozen=True)
class NextPlayer(GameStateChange):
    """Pass the decision to the next player in turn order.

    Attributes:
        advance_turn_counter: Whether this consumes a turn for the round
            bookkeeping.
        prepare_actions: Whether to build the next player's menu. Set to
            False when a following change queues the menu itself.
    """

    advance_turn_counter: bool = True
    prepare_actions: bool = True

    def apply_in_place(self, state: GameState) -> None:
        from .rules import configure_possible_actions

        state.next_player()
        if self.advance_turn_counter:
            state.turn_number += 1
        if self.prepare_actions:
            configure_possible_actions(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_next_player(self)


@dataclass(frozen=True)
class SetPlayer(GameStateChange):
    """Hand the decision to a given player, out of the normal turn order."""

    color: PlayerColor

    def apply_in_place(self, state: GameState) -> None:
        state.set_current_player(self.color)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_set_player(self)


@dataclass(frozen=True)
class QueuePossibleActions(GameStateChange):
    """Install a decision menu. None clears the pending menu."""

    possible_actions: Optional[ActionMenu]

    def apply_in_place(self, state: GameState) -> None:
        state.possible_actions = self.possible_actions

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_queue_possible_actions(self)


@dataclass(frozen=True)
class PrepareAction(GameStateChange):
    """Offer the choices of a board action triggered by sending workers.

    When the board action has nothing to offer, the turn passes to the
    next player instead.
    """

    kind: BoardActionKind
    tile: Optional[Tile] = None

    def apply_in_place(self, state: GameState) -> None:
        from .board_actions import board_action_for
        from .rules import configure_possible_actions

        possible_actions = board_action_for(self.kind).possible_actions(state, self.tile)
        if possible_actions is not None and possible_actions.nb_actions > 0:
            state.possible_actions = possible_actions
        else:
            logger.debug("Board action %s has no choice to offer", self.kind.value)
            state.next_player()
            state.turn_number += 1
            configure_possible_actions(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_prepare_action(self)


@dataclass(frozen=True)
class PrepareNextCentury(GameStateChange):
    """Move to the next century and build the first turn's menu."""

    def apply_in_place(self, state: GameState) -> None:
        from .rules import prepare_next_century

        prepare_next_century(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_prepare_next_century(self)


@dataclass(frozen=True)
class Instantaneous(GameStateChange):
    """Wrap a change that a renderer should show without animation."""

    change: GameStateChange

    def apply_in_place(self, state: GameState) -> None:
        self.change.apply_in_place(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_instantaneous(self)


# =============================================================================
# Composite
# =============================================================================


@dataclass
class Composite(GameStateChange):
    """An ordered sequence of changes applied one after the other.

    Applying a composite is equivalent to applying each of its changes in
    order, threading the resulting state from one to the next.
    """

    changes: list[GameStateChange] = field(default_factory=list)

    def add(self, change: GameStateChange) -> None:
        """Append a change at the end of the sequence."""
        self.changes.append(change)

    def prepend(self, change: GameStateChange) -> None:
        """Insert a change before all the changes already queued."""
        self.changes.insert(0, change)

    def call_on_each(self, function: Callable[[GameStateChange], Any]) -> None:
        """Call a function on every change, in order."""
        for change in self.changes:
            function(change)

    def apply_in_place(self, state: GameState) -> None:
        for change in self.changes:
            change.apply_in_place(state)

    def accept(self, visitor: ChangeVisitor) -> Any:
        return visitor.visit_composite(self)

    def __iter__(self) -> Iterator[GameStateChange]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)


def flatten(change: GameStateChange) -> list[GameStateChange]:
    """List the atomic changes of a change, expanding nested composites."""
    if isinstance(change, Composite):
        result: list[GameStateChange] = []
        for child in change:
            result.extend(flatten(child))
        return result
    return [change]
