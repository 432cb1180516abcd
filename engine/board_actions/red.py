"""Red (politic) board actions.

Each of them sends up to two cubes, passive ones first, to one zone of a
fixed pair, or to the citadel.
"""

from __future__ import annotations

from typing import Optional

from core.constants import BoardActionKind, InfluenceType
from core.components import Tile
from core.game_state import GameState

from ..actions import SelectBoardAction, skip
from ..possible_actions import ActionMenu, PossibleActions
from .base import BoardAction, send_cubes_menu

NB_CUBES_TO_SEND = 2


class RedAny(BoardAction):
    """Choose any of the three other red actions."""

    kind = BoardActionKind.RED_ANY

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = PossibleActions(message=self.description)
        for kind in (
            BoardActionKind.RED_TWO_TO_CITADEL,
            BoardActionKind.RED_TWO_TO_PURPLE_OR_YELLOW,
            BoardActionKind.RED_TWO_TO_RED_OR_BLUE,
        ):
            menu.add(SelectBoardAction(kind, triggering_tile))
        menu.add(skip())
        return menu


class RedTwoToCitadel(BoardAction):
    kind = BoardActionKind.RED_TWO_TO_CITADEL

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        return send_cubes_menu(state, NB_CUBES_TO_SEND, (InfluenceType.CITADEL,))


class RedTwoToPurpleOrYellow(BoardAction):
    kind = BoardActionKind.RED_TWO_TO_PURPLE_OR_YELLOW

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        return send_cubes_menu(
            state, NB_CUBES_TO_SEND, (InfluenceType.RELIGIOUS, InfluenceType.ECONOMIC)
        )


class RedTwoToRedOrBlue(BoardAction):
    kind = BoardActionKind.RED_TWO_TO_RED_OR_BLUE

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        return send_cubes_menu(
            state, NB_CUBES_TO_SEND, (InfluenceType.POLITIC, InfluenceType.CULTURAL)
        )
