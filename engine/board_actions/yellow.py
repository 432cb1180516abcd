"""Yellow (economic) board actions."""

from __future__ import annotations

from typing import Optional

from core.constants import BoardActionKind, MAX_CUBES_TO_ACTIVATE
from core.components import Tile
from core.game_state import GameState

from ..actions import ActivateCubes, SelectBoardAction, SendWorkers, skip
from ..possible_actions import ActionMenu, PossibleActions
from ..rules import possible_move_architect_actions
from .base import BoardAction


class YellowAny(BoardAction):
    """Choose any of the three other yellow actions."""

    kind = BoardActionKind.YELLOW_ANY

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = PossibleActions(message=self.description)
        for kind in (
            BoardActionKind.YELLOW_ACTIVATE_THREE,
            BoardActionKind.YELLOW_FILL_ONE_SPOT,
            BoardActionKind.YELLOW_MOVE_ARCHITECT,
        ):
            menu.add(SelectBoardAction(kind, triggering_tile))
        menu.add(skip())
        return menu


class YellowActivateThree(BoardAction):
    """Activate up to three passive cubes."""

    kind = BoardActionKind.YELLOW_ACTIVATE_THREE

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = PossibleActions(message=self.description)
        nb_cubes = min(MAX_CUBES_TO_ACTIVATE, state.current_player.nb_passive_cubes)
        if nb_cubes > 0:
            menu.add(ActivateCubes(nb_cubes))
        menu.add(skip())
        return menu


class YellowFillOneSpot(BoardAction):
    """Send workers, passive cubes first, to another tile under an architect.

    These workers never trigger the board action of their tile.
    """

    kind = BoardActionKind.YELLOW_FILL_ONE_SPOT

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        nb_cubes = state.current_player.nb_total_cubes
        menu = PossibleActions(message=self.description, actions=[skip()])
        for tile_state in state.tile_states:
            if (
                tile_state.tile != triggering_tile
                and tile_state.has_architect()
                and tile_state.first_empty_spot() is not None
                and nb_cubes >= tile_state.cubes_per_spot
            ):
                menu.add(SendWorkers(tile_state.tile, from_active=False))
        return menu


class YellowMoveArchitect(BoardAction):
    """Move one's architect, as on a normal turn, without passing first."""

    kind = BoardActionKind.YELLOW_MOVE_ARCHITECT

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = possible_move_architect_actions(state)
        menu.message = self.description
        menu.add(skip())
        return menu
