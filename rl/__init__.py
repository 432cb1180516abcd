"""Reinforcement learning interface for the Quebec board game.

QuebecEnv exposes a game as a Gymnasium environment whose actions are
indices of the pending decision menu. It carries no policy: training and
move selection belong to the caller.

- ObservationEncoder: flat [0, 1] encoding of a state for the deciding player
- ActionMaskGenerator: which indices of the action space the menu offers
- RewardCalculator: score based rewards of the acting player
"""

from .config import (
    ObservationConfig,
    ActionSpaceConfig,
    RewardConfig,
    DEFAULT_OBS_CONFIG,
    DEFAULT_ACTION_CONFIG,
    DEFAULT_REWARD_CONFIG,
)
from .observation import ObservationEncoder
from .action_masking import ActionMaskGenerator
from .reward import RewardCalculator, StepRewardInfo, score_deltas
from .quebec_env import QuebecEnv, make_quebec_env

__all__ = [
    "ObservationConfig",
    "ActionSpaceConfig",
    "RewardConfig",
    "DEFAULT_OBS_CONFIG",
    "DEFAULT_ACTION_CONFIG",
    "DEFAULT_REWARD_CONFIG",
    "ObservationEncoder",
    "ActionMaskGenerator",
    "RewardCalculator",
    "StepRewardInfo",
    "score_deltas",
    "QuebecEnv",
    "make_quebec_env",
]
