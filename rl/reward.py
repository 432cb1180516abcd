"""Rewards for the Quebec RL environment.

A step is rewarded from the point of view of the player who took it:
- Each point that player gained, scaled by score_reward_scale
- At the end of the game, win_reward when they share the highest score
  and loss_reward otherwise
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .config import RewardConfig, DEFAULT_REWARD_CONFIG

if TYPE_CHECKING:
    from core.constants import PlayerColor
    from core.game_state import GameState


@dataclass
class StepRewardInfo:
    """Reward of one step, split by origin."""

    score_reward: float = 0.0
    terminal_reward: float = 0.0

    @property
    def total(self) -> float:
        return self.score_reward + self.terminal_reward


def score_deltas(state: "GameState", prev_state: "GameState") -> dict["PlayerColor", int]:
    """Points gained by every player between two states of a game."""
    return {
        p.color: p.score - prev_state.player_state(p.color).score for p in state.player_states
    }


class RewardCalculator:
    """Computes the reward of the acting player."""

    def __init__(self, config: RewardConfig = DEFAULT_REWARD_CONFIG):
        self.config = config

    def compute_reward(
        self,
        state: "GameState",
        prev_state: "GameState",
        color: "PlayerColor",
        done: bool,
    ) -> float:
        """Reward of the player who moved from prev_state to state."""
        return self.compute_reward_detailed(state, prev_state, color, done).total

    def compute_reward_detailed(
        self,
        state: "GameState",
        prev_state: "GameState",
        color: "PlayerColor",
        done: bool,
    ) -> StepRewardInfo:
        """Reward of the acting player, split by origin.

        Args:
            state: State after the step.
            prev_state: State before the step.
            color: The acting player.
            done: Whether the step ended the game.
        """
        gained = score_deltas(state, prev_state)[color]
        info = StepRewardInfo(score_reward=gained * self.config.score_reward_scale)
        if done:
            best = max(p.score for p in state.player_states)
            won = state.player_state(color).score == best
            info.terminal_reward = self.config.win_reward if won else self.config.loss_reward
        return info
