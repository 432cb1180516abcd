"""Core data models for the Quebec rule engine."""

from .constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    ScoringPhase,
    GamePhase,
    BoardActionKind,
    NORMAL_COLORS,
    TILE_INFLUENCES,
    ZONE_SCORING_PHASES,
    MIN_PLAYERS,
    MAX_PLAYERS,
    NB_CENTURIES,
    LAST_CENTURY,
    CUBES_FOR_N_PLAYERS,
    INITIAL_ACTIVE_CUBES,
    MAX_CUBES_TO_ACTIVATE,
    MAX_CASCADE,
    NB_SPOTS,
    MAX_STARS,
    BOARD_COLUMNS,
    BOARD_LINES,
    TILES_PER_CENTURY,
    leader_cards_for,
    points_for_cultural_leader,
    scoring_zone_for_century,
)

from .components import Tile, TileDeck

from .shuffler import Shuffler, CannedShuffler, RandomShuffler

from .board import (
    Location,
    BoardActionInfo,
    BoardTopology,
    TileState,
    build_board,
    BOARD,
)

from .player import Player, PlayerState

from .game_state import InfluenceZoneState, GameState

__all__ = [
    # Constants
    "PlayerColor",
    "InfluenceType",
    "LeaderCard",
    "ScoringPhase",
    "GamePhase",
    "BoardActionKind",
    "NORMAL_COLORS",
    "TILE_INFLUENCES",
    "ZONE_SCORING_PHASES",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "NB_CENTURIES",
    "LAST_CENTURY",
    "CUBES_FOR_N_PLAYERS",
    "INITIAL_ACTIVE_CUBES",
    "MAX_CUBES_TO_ACTIVATE",
    "MAX_CASCADE",
    "NB_SPOTS",
    "MAX_STARS",
    "BOARD_COLUMNS",
    "BOARD_LINES",
    "TILES_PER_CENTURY",
    "leader_cards_for",
    "points_for_cultural_leader",
    "scoring_zone_for_century",
    # Components
    "Tile",
    "TileDeck",
    # Shufflers
    "Shuffler",
    "CannedShuffler",
    "RandomShuffler",
    # Board
    "Location",
    "BoardActionInfo",
    "BoardTopology",
    "TileState",
    "build_board",
    "BOARD",
    # Player
    "Player",
    "PlayerState",
    # Game State
    "InfluenceZoneState",
    "GameState",
]
