"""Game engine for the Quebec board game.

This module provides the game logic including:
- State changes, the only way a game state evolves
- Actions and decision menus offered to players
- Board actions, turn rules and end of century scoring
- Phase state machine and game engine coordinating game play
"""

from .destinations import (
    CubeDestination,
    PlayerReserve,
    InfluenceZoneDestination,
    TileSpot,
    ArchitectDestination,
    PlayerArchitect,
    TileArchitect,
    OffboardNeutral,
    LeaderDestination,
    LeaderOnBoard,
    LeaderWithPlayer,
)

from .state_changes import (
    GameStateChange,
    ChangeVisitor,
    MoveCubes,
    MoveArchitect,
    MoveLeader,
    FlipTile,
    IncreaseStarToken,
    ScorePoints,
    NextPlayer,
    SetPlayer,
    QueuePossibleActions,
    PrepareAction,
    PrepareNextCentury,
    Instantaneous,
    Composite,
    flatten,
)

from .messages import (
    Message,
    Text,
    SelectWhereToEmptyTile,
    SendCubesToZones,
    MoveCubesSelectOrigin,
    MoveCubesSelectDestination,
    ScoringMessage,
    BoardActionDescription,
    SKIP,
    SCORING_PHASE_BEGINS,
)

from .possible_actions import (
    ActionMenu,
    PossibleActions,
    PossibleActionsComposite,
)

from . import actions

from .interjection import (
    BuildingCompletion,
    complete_building,
    interject,
)

from .scoring import (
    ScoringInformation,
    ZoneScoringInformation,
    BuildingGroupScore,
    compute_zone_scoring_information,
    perform_zone_scoring,
    calculate_zone_score,
    compute_incomplete_building_scoring_information,
    compute_active_cubes_scoring_information,
    compute_buildings_scoring_information,
    find_building_groups,
)

from .rules import (
    configure_possible_actions,
    possible_move_architect_actions,
    prepare_next_century,
)

from .board_actions import (
    BoardAction,
    board_action_for,
    board_action_at,
)

from .phase_machine import (
    PhaseMachine,
    PhaseTransitionResult,
    PHASE_TRANSITIONS,
    compute_phase,
    scoring_sequence,
)

from .setup import (
    make_players,
    reset_game_state,
    initialize_game,
)

from .game_engine import (
    GameEngine,
    StepResult,
)

__all__ = [
    # Destinations
    "CubeDestination",
    "PlayerReserve",
    "InfluenceZoneDestination",
    "TileSpot",
    "ArchitectDestination",
    "PlayerArchitect",
    "TileArchitect",
    "OffboardNeutral",
    "LeaderDestination",
    "LeaderOnBoard",
    "LeaderWithPlayer",
    # State changes
    "GameStateChange",
    "ChangeVisitor",
    "MoveCubes",
    "MoveArchitect",
    "MoveLeader",
    "FlipTile",
    "IncreaseStarToken",
    "ScorePoints",
    "NextPlayer",
    "SetPlayer",
    "QueuePossibleActions",
    "PrepareAction",
    "PrepareNextCentury",
    "Instantaneous",
    "Composite",
    "flatten",
    # Messages
    "Message",
    "Text",
    "SelectWhereToEmptyTile",
    "SendCubesToZones",
    "MoveCubesSelectOrigin",
    "MoveCubesSelectDestination",
    "ScoringMessage",
    "BoardActionDescription",
    "SKIP",
    "SCORING_PHASE_BEGINS",
    # Menus
    "ActionMenu",
    "PossibleActions",
    "PossibleActionsComposite",
    # Actions (module: action names clash with state change names)
    "actions",
    # Interjection
    "BuildingCompletion",
    "complete_building",
    "interject",
    # Scoring
    "ScoringInformation",
    "ZoneScoringInformation",
    "BuildingGroupScore",
    "compute_zone_scoring_information",
    "perform_zone_scoring",
    "calculate_zone_score",
    "compute_incomplete_building_scoring_information",
    "compute_active_cubes_scoring_information",
    "compute_buildings_scoring_information",
    "find_building_groups",
    # Rules
    "configure_possible_actions",
    "possible_move_architect_actions",
    "prepare_next_century",
    # Board actions
    "BoardAction",
    "board_action_for",
    "board_action_at",
    # Phase machine
    "PhaseMachine",
    "PhaseTransitionResult",
    "PHASE_TRANSITIONS",
    "compute_phase",
    "scoring_sequence",
    # Setup
    "make_players",
    "reset_game_state",
    "initialize_game",
    # Game engine
    "GameEngine",
    "StepResult",
]
