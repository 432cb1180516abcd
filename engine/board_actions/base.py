"""Base class and helpers shared by the board action implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from core.constants import BoardActionKind, InfluenceType
from core.board import BOARD, BoardActionInfo
from core.components import Tile
from core.game_state import GameState

from ..actions import SendCubesToZone, skip
from ..messages import BoardActionDescription, SendCubesToZones
from ..possible_actions import ActionMenu, PossibleActions

# Points awarded for 0, 1, 2 and 3 or more counted items by the scoring actions
POINTS_FOR_COUNT = (0, 1, 2, 4)


def points_for_count(count: int) -> int:
    return POINTS_FOR_COUNT[min(count, len(POINTS_FOR_COUNT) - 1)]


class BoardAction(ABC):
    """A board action, triggered when workers are sent to one of its tiles.

    Subclasses set kind and build the menu offered to the triggering player.
    """

    kind: BoardActionKind

    @property
    def info(self) -> BoardActionInfo:
        return BOARD.board_action(self.kind)

    @property
    def description(self) -> BoardActionDescription:
        return BoardActionDescription(self.kind)

    @abstractmethod
    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        """Build the menu offered to the current player.

        Args:
            state: The state right after the workers were placed.
            triggering_tile: The tile the workers were sent to, if any.

        Returns:
            The menu, or None when the action has nothing to offer.
        """
        pass


def send_cubes_menu(
    state: GameState, nb_cubes: int, zones: tuple[InfluenceType, ...]
) -> PossibleActions:
    """Offer to send cubes from the passive reserve to one of several zones.

    The number of cubes is capped by the cubes the player has left. Declining
    is always possible.
    """
    player_state = state.current_player
    nb_to_send = min(nb_cubes, player_state.nb_total_cubes)
    menu = PossibleActions(message=SendCubesToZones(nb_to_send, player_state.color, zones))
    if nb_to_send > 0:
        for zone in zones:
            menu.add(SendCubesToZone(nb_to_send, zone, from_active=False))
    menu.add(skip())
    return menu
