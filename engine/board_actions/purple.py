"""Purple (religious) board actions."""

from __future__ import annotations

from typing import Optional

from core.constants import BoardActionKind, InfluenceType, TILE_INFLUENCES
from core.components import Tile
from core.game_state import GameState

from ..actions import (
    ActivateCubes,
    Explicit,
    MoveCubes,
    ScorePointsAction,
    SelectBoardAction,
    SendCubesToZone,
    skip,
)
from ..messages import (
    SKIP,
    MoveCubesSelectDestination,
    MoveCubesSelectOrigin,
    SendCubesToZones,
)
from ..possible_actions import ActionMenu, PossibleActions, PossibleActionsComposite
from ..state_changes import GameStateChange, NextPlayer, QueuePossibleActions
from .base import BoardAction

MAX_CUBES_TO_MOVE = 2


def _send_anywhere_menu(
    state: GameState, zones: tuple[InfluenceType, ...]
) -> PossibleActions:
    """Offer to send one cube, passive first, to any of the given zones."""
    color = state.current_player.color
    menu = PossibleActions(message=SendCubesToZones(1, color, zones))
    for zone in zones:
        menu.add(SendCubesToZone(1, zone, from_active=False))
    menu.add(skip())
    return menu


class PurpleAny(BoardAction):
    """Choose any of the three other purple actions."""

    kind = BoardActionKind.PURPLE_ANY

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        menu = PossibleActions(message=self.description)
        for kind in (
            BoardActionKind.PURPLE_ONE_POINT_ONE_TO_ANY_ACTIVATE_ONE,
            BoardActionKind.PURPLE_ONE_TO_ANY_MOVE_TWO,
            BoardActionKind.PURPLE_ONE_TO_CITADEL_ONE_TO_ANY,
        ):
            menu.add(SelectBoardAction(kind, triggering_tile))
        menu.add(skip())
        return menu


class PurpleOneToCitadelOneToAny(BoardAction):
    """Send one cube to the citadel, then one cube to any colored zone."""

    kind = BoardActionKind.PURPLE_ONE_TO_CITADEL_ONE_TO_ANY

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        nb_cubes = state.current_player.nb_total_cubes
        send_anywhere = QueuePossibleActions(_send_anywhere_menu(state, TILE_INFLUENCES))
        menu = PossibleActions(
            message=SendCubesToZones(1, state.current_player.color, (InfluenceType.CITADEL,))
        )
        if nb_cubes >= 2:
            menu.add(SendCubesToZone(
                1, InfluenceType.CITADEL, from_active=False, followup=send_anywhere
            ))
            menu.add(Explicit(SKIP, send_anywhere))
        elif nb_cubes == 1:
            menu.add(SendCubesToZone(1, InfluenceType.CITADEL, from_active=False))
            menu.add(Explicit(SKIP, send_anywhere))
        else:
            menu.add(skip())
        return menu


class PurpleOnePointOneToAnyActivateOne(BoardAction):
    """Score one point, activate one cube, then send one cube to any zone."""

    kind = BoardActionKind.PURPLE_ONE_POINT_ONE_TO_ANY_ACTIVATE_ONE

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        player_state = state.current_player
        if player_state.nb_total_cubes < 1:
            return PossibleActions(message=self.description, actions=[ScorePointsAction(1)])

        send_anywhere = QueuePossibleActions(
            _send_anywhere_menu(state, tuple(InfluenceType))
        )
        if player_state.nb_passive_cubes > 0:
            activate = PossibleActions(
                message=self.description,
                actions=[ActivateCubes(1, followup=send_anywhere), Explicit(SKIP, send_anywhere)],
            )
            followup: GameStateChange = QueuePossibleActions(activate)
        else:
            followup = send_anywhere
        return PossibleActions(
            message=self.description, actions=[ScorePointsAction(1, followup=followup)]
        )


class PurpleOneToAnyMoveTwo(BoardAction):
    """Send one cube to any zone, then move up to two cubes between zones."""

    kind = BoardActionKind.PURPLE_ONE_TO_ANY_MOVE_TWO

    def possible_actions(
        self, state: GameState, triggering_tile: Optional[Tile] = None
    ) -> Optional[ActionMenu]:
        color = state.current_player.color
        if state.current_player.nb_total_cubes == 0:
            return self.move_actions(state, None)

        zones = tuple(InfluenceType)
        menu = PossibleActions(message=SendCubesToZones(1, color, zones))
        for zone in zones:
            menu.add(SendCubesToZone(
                1, zone, from_active=False, followup=self.move_followup(state, zone)
            ))
        menu.add(Explicit(SKIP, self.move_followup(state, None)))
        return menu

    def move_followup(
        self, state: GameState, received_zone: Optional[InfluenceType]
    ) -> GameStateChange:
        """Queue the move step, or end the turn when no cube can move."""
        menu = self.move_actions(state, received_zone)
        if menu is None:
            return NextPlayer()
        return QueuePossibleActions(menu)

    def move_actions(
        self, state: GameState, received_zone: Optional[InfluenceType]
    ) -> Optional[ActionMenu]:
        """Build the menu moving up to two cubes out of a zone.

        Args:
            state: The state before the one-to-any step.
            received_zone: Zone that receives a cube in the one-to-any step.

        Returns:
            One sub-menu per zone cubes can leave, or None if none can.
        """
        color = state.current_player.color
        moves: dict[InfluenceType, int] = {}
        for zone in InfluenceType:
            nb_cubes = state.cubes_in_zone(zone, color)
            if zone == received_zone:
                nb_cubes += 1
            if nb_cubes > 0:
                moves[zone] = min(MAX_CUBES_TO_MOVE, nb_cubes)
        if not moves:
            return None

        menu = PossibleActionsComposite()
        for origin, nb_cubes in moves.items():
            destinations = PossibleActions(
                message=MoveCubesSelectDestination(nb_cubes, color, origin)
            )
            for destination in InfluenceType:
                if destination != origin:
                    destinations.add(MoveCubes(nb_cubes, origin, destination))
            menu.add(destinations)
        if len(moves) > 1:
            menu.add(PossibleActions(message=MoveCubesSelectOrigin(color), actions=[skip()]))
        else:
            menu.add(PossibleActions(message=SKIP, actions=[skip()]))
        return menu
