"""Gymnasium environment for the Quebec board game.

One environment drives a whole game for a shared self-play policy:
- Every step is an index into the menu pending in the current state
- The observation is always encoded for the player who decides next, which
  is the politic leader's holder during an out-of-turn decision
- action_masks() follows the sb3-contrib convention for maskable policies

Scoring steps award points to every player while only one of them acts, so
each step also reports the score change of every player in its info dict.
"""

from __future__ import annotations

import logging
from typing import Optional, Any, Tuple, SupportsFloat

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from core.constants import PlayerColor
from core.game_state import GameState
from engine.actions import GameAction
from engine.game_engine import GameEngine

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
from .reward import RewardCalculator, score_deltas

logger = logging.getLogger(__name__)


class QuebecEnv(gym.Env):
    """Turn-based Gymnasium environment over a GameEngine.

    Attributes:
        num_players: Player count of the next episode.
        random_layout: Whether each episode deals the tiles from its seed.
        observation_space: Flat [0, 1] observation of ObservationEncoder.
        action_space: One discrete action per menu index.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 1}

    def __init__(
        self,
        num_players: int = 4,
        render_mode: Optional[str] = None,
        random_layout: bool = True,
        max_steps: int = 2000,
        obs_config: ObservationConfig = DEFAULT_OBS_CONFIG,
        action_config: ActionSpaceConfig = DEFAULT_ACTION_CONFIG,
        reward_config: RewardConfig = DEFAULT_REWARD_CONFIG,
    ):
        """Create an environment. reset() must be called before stepping.

        Args:
            num_players: Number of players (2-5).
            render_mode: "human", "ansi" or None.
            random_layout: Deal the tiles with a seeded random shuffler.
                Otherwise every episode uses the fixed deterministic layout.
            max_steps: Steps after which an unfinished episode is truncated.
            obs_config: Observation encoding configuration.
            action_config: Action space configuration.
            reward_config: Reward configuration.
        """
        super().__init__()
        self.num_players = num_players
        self.render_mode = render_mode
        self.random_layout = random_layout
        self._max_steps = max_steps

        self._obs_config = obs_config
        self._action_config = action_config
        self._reward_config = reward_config
        self._encoder = ObservationEncoder(obs_config)
        self._masks = ActionMaskGenerator(action_config)
        self._rewards = RewardCalculator(reward_config)

        self._engine: Optional[GameEngine] = None
        self._step_count = 0

        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(obs_config.total_observation_dim,),
            dtype=np.float32,
        )
        self.action_space = spaces.Discrete(action_config.total_actions)

    # -------------------------------------------------------------------------
    # Gymnasium API
    # -------------------------------------------------------------------------

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Tuple[np.ndarray, dict]:
        """Start a new game.

        Args:
            seed: Seeds np_random, from which the tile layout is drawn.
            options: {"num_players": n} changes the player count from this
                episode on.

        Returns:
            Tuple of (observation, info).
        """
        super().reset(seed=seed)
        if options and "num_players" in options:
            self.num_players = int(options["num_players"])

        layout_seed = None
        if self.random_layout:
            layout_seed = int(self.np_random.integers(0, 2**31 - 1))

        self._engine = GameEngine()
        self._engine.reset(num_players=self.num_players, seed=layout_seed)
        self._step_count = 0
        logger.debug("Episode started: %d players, layout seed %s", self.num_players, layout_seed)
        return self._observe(), self._info()

    def step(self, action: int) -> Tuple[np.ndarray, SupportsFloat, bool, bool, dict]:
        """Play the action at an index of the pending menu.

        An index outside the menu leaves the game unchanged and earns the
        invalid action penalty.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info). The
            reward is the acting player's.
        """
        engine = self._require_engine()
        index = int(action)
        self._step_count += 1
        before = engine.state
        actor = before.current_player.color

        if not 0 <= index < engine.get_nb_actions():
            logger.debug("Invalid action %d for %s", index, actor.value)
            info = self._info()
            info["invalid_action"] = True
            terminated = engine.is_game_over()
            return (
                self._observe(),
                self._reward_config.invalid_action_penalty,
                terminated,
                not terminated and self._step_count > self._max_steps,
                info,
            )

        after = engine.step(index).state
        terminated = engine.is_game_over()
        truncated = not terminated and self._step_count > self._max_steps
        breakdown = self._rewards.compute_reward_detailed(after, before, actor, terminated)

        info = self._info()
        info["acting_player"] = actor.value
        info["reward_breakdown"] = {
            "score_reward": breakdown.score_reward,
            "terminal_reward": breakdown.terminal_reward,
        }
        info["score_deltas"] = {
            color.value: delta for color, delta in score_deltas(after, before).items()
        }
        if terminated or truncated:
            info["game_over"] = True
        return self._observe(), float(breakdown.total), terminated, truncated, info

    def action_masks(self) -> np.ndarray:
        """Boolean mask over the action space, True for indices of the pending menu."""
        if self._engine is None:
            return np.zeros(self._action_config.total_actions, dtype=np.bool_)
        return self._masks.generate_mask(self._engine.state)

    def render(self) -> Optional[str]:
        """Print the state in "human" mode or return it in "ansi" mode."""
        if self._engine is None:
            return None
        text = str(self._engine.state)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def close(self) -> None:
        self._engine = None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_engine(self) -> GameEngine:
        if self._engine is None:
            raise RuntimeError("Environment not initialized. Call reset() first.")
        return self._engine

    def _observe(self) -> np.ndarray:
        if self._engine is None:
            return np.zeros(self._obs_config.total_observation_dim, dtype=np.float32)
        return self._encoder.encode(self._engine.state)

    def _info(self) -> dict[str, Any]:
        if self._engine is None:
            return {}
        state = self._engine.state
        return {
            "phase": self._engine.phase.value,
            "century": state.century,
            "current_player": state.current_player.color.value,
            "valid_action_count": self._engine.get_nb_actions(),
            "scores": {p.color.value: p.score for p in state.player_states},
        }

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def get_state(self) -> Optional[GameState]:
        return self._engine.state if self._engine is not None else None

    def get_valid_actions(self) -> list[GameAction]:
        """Actions of the pending menu, in index order."""
        return self._engine.get_valid_actions() if self._engine is not None else []

    def get_current_player(self) -> Optional[PlayerColor]:
        """Color of the player who decides next."""
        if self._engine is None:
            return None
        return self._engine.state.current_player.color

    def clone(self) -> QuebecEnv:
        """Copy the environment for lookahead.

        Committed states are immutable, so both copies can share them.
        """
        copy = QuebecEnv(
            num_players=self.num_players,
            render_mode=self.render_mode,
            random_layout=self.random_layout,
            max_steps=self._max_steps,
            obs_config=self._obs_config,
            action_config=self._action_config,
            reward_config=self._reward_config,
        )
        if self._engine is not None:
            copy._engine = self._engine.clone()
            copy._step_count = self._step_count
        return copy


def make_quebec_env(
    num_players: int = 4,
    render_mode: Optional[str] = None,
    **kwargs: Any,
) -> QuebecEnv:
    """Create a QuebecEnv; extra keyword arguments go to its constructor."""
    return QuebecEnv(num_players=num_players, render_mode=render_mode, **kwargs)
