"""Blue (cultural) board actions."""

from __future__ import annotations

from typing import Optional

from core.constants import BoardActionKind, InfluenceType, MAX_STARS
from core.components import Tile
from core.game_state import GameState

from ..actions import IncreaseStar, ScorePointsAction, SelectBoardAction, skip
from ..possible_actions import ActionMenu, PossibleActions
from .base import BoardAction, points_for_count


class BlueAny(BoardAction):
    """Choose any of the three other blue actions."""

    kind = BoardActionKind.BLUE_ANY

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = PossibleActions(message=self.description)
        for kind in (
            BoardActionKind.BLUE_ADD_STAR,
            BoardActionKind.BLUE_SCORE_FOR_CUBES_IN_HAND,
            BoardActionKind.BLUE_SCORE_FOR_ZONES,
        ):
            menu.add(SelectBoardAction(kind, triggering_tile))
        menu.add(skip())
        return menu


class BlueAddStar(BoardAction):
    """Add a star to one of the player's star tokens that is not full."""

    kind = BoardActionKind.BLUE_ADD_STAR

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        color = state.current_player.color
        menu = PossibleActions(message=self.description)
        for tile_state in state.tile_states:
            if tile_state.star_token_color == color and 1 <= tile_state.nb_stars < MAX_STARS:
                menu.add(IncreaseStar(tile_state.tile))
        menu.add(skip())
        return menu


class BlueScoreForCubesInHand(BoardAction):
    """Score 1, 2 or 4 points for 1, 2 or at least 3 active cubes."""

    kind = BoardActionKind.BLUE_SCORE_FOR_CUBES_IN_HAND

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        points = points_for_count(state.current_player.nb_active_cubes)
        return PossibleActions(message=self.description, actions=[ScorePointsAction(points)])


class BlueScoreForZones(BoardAction):
    """Score 1, 2 or 4 points for cubes in 1, 2 or at least 3 zones."""

    kind = BoardActionKind.BLUE_SCORE_FOR_ZONES

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        color = state.current_player.color
        nb_zones = sum(1 for zone in InfluenceType if state.cubes_in_zone(zone, color) > 0)
        return PossibleActions(
            message=self.description, actions=[ScorePointsAction(points_for_count(nb_zones))]
        )
