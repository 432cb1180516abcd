"""Configuration constants for the Quebec RL environment.

This module defines all configuration values for observation encoding,
action space sizing and reward calculation.
"""

from dataclasses import dataclass
from typing import ClassVar

from core.constants import (
    MAX_PLAYERS,
    NB_CENTURIES,
    NB_SPOTS,
    InfluenceType,
    LeaderCard,
    GamePhase,
    TILE_INFLUENCES,
)
from core.board import BOARD


@dataclass(frozen=True)
class ObservationConfig:
    """Configuration for observation tensor dimensions.

    All dimensions derive from the board topology and game rules to create
    fixed-size tensors suitable for neural networks.
    """

    # Board dimensions
    NUM_TILES: int = len(BOARD.tile_locations)
    MAX_PLAYERS: int = MAX_PLAYERS

    # Categorical dimensions
    INFLUENCES: int = len(TILE_INFLUENCES)
    ZONES: int = len(InfluenceType)
    CENTURIES: int = NB_CENTURIES
    LEADERS: int = len(LeaderCard)
    PHASES: int = len(GamePhase)
    SPOTS: int = NB_SPOTS

    # Normalization
    MAX_CUBES: int = 25
    MAX_SCORE: float = 150.0
    MAX_TURNS: float = 400.0

    # Feature dimensions per component
    # influence (4) + century (4) + architect self/other/neutral (3)
    # + spots self/other (6) + building facing (1) + star self/other (2) + stars (1)
    TILE_FEATURE_DIM: ClassVar[int] = 21
    # present (1) + active/passive (2) + score (1) + architects (2) + leader (5) + zones (5)
    PLAYER_FEATURE_DIM: ClassVar[int] = 16
    # century (4) + turn (1) + leaders available (5) + phase (4) + nb actions (1)
    GLOBAL_FEATURE_DIM: ClassVar[int] = 15

    @property
    def tile_features_size(self) -> int:
        """Total size of tile features tensor."""
        return self.NUM_TILES * self.TILE_FEATURE_DIM

    @property
    def player_features_size(self) -> int:
        """Total size of player features tensor."""
        return self.MAX_PLAYERS * self.PLAYER_FEATURE_DIM

    @property
    def global_features_size(self) -> int:
        return self.GLOBAL_FEATURE_DIM

    @property
    def total_observation_dim(self) -> int:
        """Total dimension of the flat observation tensor."""
        return self.tile_features_size + self.player_features_size + self.global_features_size


@dataclass(frozen=True)
class ActionSpaceConfig:
    """Configuration for the discrete action space.

    Actions are the indices of the pending menu, so the space only needs
    to be as large as the largest menu the rules can build.
    """

    MAX_ACTIONS: int = 64

    @property
    def total_actions(self) -> int:
        """Total number of discrete actions."""
        return self.MAX_ACTIONS


@dataclass
class RewardConfig:
    """Configuration for reward calculation.

    Default values give a small dense reward for points scored and a
    terminal reward based on the final ranking.
    """

    # Per point scored by the acting player
    score_reward_scale: float = 0.01

    # Terminal rewards
    win_reward: float = 1.0
    loss_reward: float = -1.0

    # Penalties
    invalid_action_penalty: float = -1.0


# Default configuration instances
DEFAULT_OBS_CONFIG = ObservationConfig()
DEFAULT_ACTION_CONFIG = ActionSpaceConfig()
DEFAULT_REWARD_CONFIG = RewardConfig()
