"""Initial game setup for the Quebec rule engine.

Setting up a game:
1. Gives every player their cubes, three of them active, and their architect
2. Draws a tile of the matching influence for every tile location, scanning
   the board column by column
3. Puts the leader cards for the number of players on the board
4. Makes the first player current and configures their turn menu
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.constants import (
    PlayerColor,
    NORMAL_COLORS,
    MIN_PLAYERS,
    MAX_PLAYERS,
    BOARD_COLUMNS,
    BOARD_LINES,
    CUBES_FOR_N_PLAYERS,
    INITIAL_ACTIVE_CUBES,
    leader_cards_for,
)
from core.board import BOARD, Location, TileState
from core.components import TileDeck
from core.game_state import GameState
from core.player import Player, PlayerState
from core.shuffler import Shuffler, CannedShuffler

from .rules import configure_possible_actions

logger = logging.getLogger(__name__)


def make_players(num_players: int, names: Optional[Sequence[str]] = None) -> list[Player]:
    """Create players with the first num_players colors.

    Args:
        num_players: Number of players (2-5).
        names: Optional player names, one per player.

    Raises:
        ValueError: If the number of players or names is invalid.
    """
    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        raise ValueError(f"Quebec is played by {MIN_PLAYERS} to {MAX_PLAYERS} players")
    if names is not None and len(names) != num_players:
        raise ValueError(f"Expected {num_players} names, got {len(names)}")
    return [
        Player(color, names[i] if names is not None else color.value.capitalize())
        for i, color in enumerate(NORMAL_COLORS[:num_players])
    ]


def create_tile_states(deck: TileDeck) -> list[TileState]:
    """Draw one tile per tile location, in board order."""
    tile_states = []
    for column in range(BOARD_COLUMNS):
        for line in range(BOARD_LINES):
            location = Location(column, line)
            info = BOARD.action_for_location(location)
            if info is None:
                continue
            tile_states.append(TileState(tile=deck.draw(info.influence), location=location))
    return tile_states


def reset_game_state(players: Sequence[Player], shuffler: Shuffler) -> GameState:
    """Create the initial state of a game.

    Args:
        players: The players in turn order. The first one starts.
        shuffler: Strategy used to shuffle the tile decks.

    Returns:
        A new GameState with the first player's turn menu configured.

    Raises:
        ValueError: If the number of players is invalid or colors repeat.
    """
    num_players = len(players)
    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        raise ValueError(f"Quebec is played by {MIN_PLAYERS} to {MAX_PLAYERS} players")
    colors = [player.color for player in players]
    if len(set(colors)) != num_players:
        raise ValueError(f"Player colors must be distinct: {[c.value for c in colors]}")

    nb_cubes = CUBES_FOR_N_PLAYERS[num_players]
    player_states = [
        PlayerState(
            player=player,
            nb_active_cubes=INITIAL_ACTIVE_CUBES,
            nb_passive_cubes=nb_cubes - INITIAL_ACTIVE_CUBES,
            is_current_player=(index == 0),
            is_holding_architect=True,
        )
        for index, player in enumerate(players)
    ]

    state = GameState(
        century=0,
        player_states=player_states,
        tile_states=create_tile_states(TileDeck(shuffler)),
        available_leader_cards=list(leader_cards_for(num_players)),
        cubes_per_player=nb_cubes,
    )
    configure_possible_actions(state)
    logger.debug(
        "New game: %d players, %d tiles, %d cubes each",
        num_players,
        len(state.tile_states),
        nb_cubes,
    )
    return state


def initialize_game(
    num_players: int = 4,
    shuffler: Optional[Shuffler] = None,
    names: Optional[Sequence[str]] = None,
) -> GameState:
    """Create the initial state of a game with default players.

    Args:
        num_players: Number of players (2-5).
        shuffler: Tile deck shuffler, deterministic by default.
        names: Optional player names.
    """
    players = make_players(num_players, names)
    return reset_game_state(players, shuffler if shuffler is not None else CannedShuffler())


def player_colors(state: GameState) -> list[PlayerColor]:
    """List the player colors of a state in turn order."""
    return [player_state.color for player_state in state.player_states]
