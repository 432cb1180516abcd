"""Turn rules: which actions the current player may take.

configure_possible_actions installs the menu of a normal turn on a state
the caller owns. It is called by the NextPlayer and PrepareNextCentury
changes, and by the setup when a game starts.
"""

from __future__ import annotations

import logging

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    LAST_CENTURY,
    MAX_CUBES_TO_ACTIVATE,
)
from core.game_state import GameState

from .actions import MoveArchitect, SendCubesToZone, SendWorkers, TakeLeaderCard, scoring_menu
from .messages import Text
from .possible_actions import PossibleActions, PossibleActionsComposite

logger = logging.getLogger(__name__)

MOVE_ARCHITECT = Text("moveArchitect")
SEND_WORKERS = Text("sendWorkers")
SEND_CUBE_TO_ZONE = Text("sendCubeToZone")
TAKE_LEADER_CARD = Text("takeLeaderCard")


def possible_move_architect_actions(state: GameState) -> PossibleActions:
    """Build the architect moves of the current player.

    The architect can go to any tile of the current century that is free and
    not yet built. Moving it activates up to three passive cubes. When no
    such tile remains, the only move withdraws the architect, which ends the
    century.
    """
    player_state = state.current_player
    nb_to_activate = min(MAX_CUBES_TO_ACTIVATE, player_state.nb_passive_cubes)
    has_economic = player_state.leader_card is LeaderCard.ECONOMIC
    neutral_on_tile = state.find_tile_under_architect(PlayerColor.NEUTRAL) is not None
    neutral_in_play = player_state.is_holding_neutral_architect or neutral_on_tile

    menu = PossibleActions(message=MOVE_ARCHITECT)
    for tile_state in state.tile_states:
        if not tile_state.is_available_for_architect(state.century):
            continue
        menu.add(MoveArchitect(tile_state.tile, False, nb_to_activate))
        if has_economic and neutral_in_play:
            menu.add(MoveArchitect(tile_state.tile, True, nb_to_activate))

    if not menu.actions:
        menu.add(MoveArchitect(None, False, 0))
        if has_economic and neutral_on_tile:
            menu.add(MoveArchitect(None, True, 0))
    return menu


def configure_possible_actions(state: GameState) -> None:
    """Install the menu of a normal turn for the current player.

    A player without cubes ends the century. From the second century on, a
    player still holding their architect must place it before anything else.
    """
    player_state = state.current_player
    if player_state.nb_total_cubes == 0:
        logger.debug("Player %s has no cubes left, scoring begins", player_state.color.value)
        state.possible_actions = scoring_menu()
        return

    must_move_architect = state.century > 0 and player_state.is_holding_architect
    menu = PossibleActionsComposite()
    menu.add(possible_move_architect_actions(state))

    if not must_move_architect:
        workers = PossibleActions(message=SEND_WORKERS)
        for tile_state in state.tile_states:
            if (
                tile_state.has_architect()
                and tile_state.first_empty_spot() is not None
                and player_state.nb_active_cubes >= tile_state.cubes_per_spot
            ):
                workers.add(SendWorkers(tile_state.tile))
        if workers.actions:
            menu.add(workers)

        if player_state.nb_active_cubes >= 1:
            menu.add(PossibleActions(
                message=SEND_CUBE_TO_ZONE,
                actions=[SendCubesToZone(1, zone) for zone in InfluenceType],
            ))

        if player_state.leader_card is None and state.available_leader_cards:
            menu.add(PossibleActions(
                message=TAKE_LEADER_CARD,
                actions=[TakeLeaderCard(card) for card in state.available_leader_cards],
            ))

    state.possible_actions = menu
    logger.debug(
        "Configured %d actions for player %s", menu.nb_actions, player_state.color.value
    )


def prepare_next_century(state: GameState) -> None:
    """Advance to the next century on a state the caller owns.

    Tiles of the ending century that never received an architect are
    flipped without a star token.

    Raises:
        ValueError: If the last century is already being played.
    """
    if state.century >= LAST_CENTURY:
        raise ValueError(f"No century follows century {state.century}")
    ending_century = state.century
    state.century += 1
    for tile_state in state.tile_states:
        if tile_state.is_available_for_architect(ending_century):
            tile_state.building_facing = True
    logger.debug("Century %d begins", state.century)
    configure_possible_actions(state)
