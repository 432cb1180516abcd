"""Tests for rl/quebec_env.py - Gymnasium environment."""

import numpy as np
import pytest
from gymnasium import spaces

from core.constants import GamePhase
from rl import QuebecEnv, make_quebec_env
from rl.config import DEFAULT_OBS_CONFIG, RewardConfig


@pytest.fixture
def env():
    """Create a reset 4-player environment."""
    env = QuebecEnv(num_players=4)
    env.reset(seed=42)
    yield env
    env.close()


def play_masked(env, rng, max_steps=3000):
    """Play random valid actions until the episode ends.

    Returns:
        Tuple of (terminated, truncated, last info, summed score deltas).
    """
    score_totals = {}
    for _ in range(max_steps):
        valid = np.flatnonzero(env.action_masks())
        obs, reward, terminated, truncated, info = env.step(int(rng.choice(valid)))
        assert env.observation_space.contains(obs)
        for color, delta in info["score_deltas"].items():
            score_totals[color] = score_totals.get(color, 0) + delta
        if terminated or truncated:
            return terminated, truncated, info, score_totals
    pytest.fail(f"Episode did not end within {max_steps} steps")


class TestSpaces:
    """Tests for observation and action spaces."""

    def test_spaces(self):
        env = QuebecEnv()
        assert isinstance(env.observation_space, spaces.Box)
        assert env.observation_space.shape == (DEFAULT_OBS_CONFIG.total_observation_dim,)
        assert isinstance(env.action_space, spaces.Discrete)
        assert env.action_space.n == 64

    def test_factory(self):
        env = make_quebec_env(num_players=3, render_mode="ansi", max_steps=10)
        assert isinstance(env, QuebecEnv)
        assert env.num_players == 3
        assert env.render_mode == "ansi"


class TestReset:
    """Tests for reset."""

    def test_observation_and_info(self):
        env = QuebecEnv(num_players=4)
        obs, info = env.reset(seed=0)
        assert env.observation_space.contains(obs)
        assert info["phase"] == GamePhase.TURN.value
        assert info["century"] == 0
        assert info["current_player"] == "black"
        assert info["valid_action_count"] == 21
        assert info["scores"] == {"black": 0, "white": 0, "orange": 0, "green": 0}

    def test_same_seed_same_layout(self):
        first = QuebecEnv()
        second = QuebecEnv()
        first.reset(seed=3)
        second.reset(seed=3)
        assert first.get_state().state_hash() == second.get_state().state_hash()

    def test_fixed_layout(self):
        first = QuebecEnv(random_layout=False)
        second = QuebecEnv(random_layout=False)
        first.reset(seed=1)
        second.reset(seed=2)
        assert first.get_state().state_hash() == second.get_state().state_hash()

    def test_player_count_option(self):
        env = QuebecEnv(num_players=4)
        _, info = env.reset(seed=0, options={"num_players": 3})
        assert env.num_players == 3
        assert set(info["scores"]) == {"black", "white", "orange"}
        _, info = env.reset(seed=0)
        assert len(info["scores"]) == 3

    def test_uninitialized(self):
        env = QuebecEnv()
        assert env.get_state() is None
        assert env.get_current_player() is None
        assert env.get_valid_actions() == []
        assert env.render() is None
        assert not env.action_masks().any()
        with pytest.raises(RuntimeError):
            env.step(0)


class TestStep:
    """Tests for step."""

    def test_valid_step(self, env):
        obs, reward, terminated, truncated, info = env.step(0)
        assert env.observation_space.contains(obs)
        assert reward == 0.0
        assert not terminated
        assert not truncated
        assert info["acting_player"] == "black"
        assert info["current_player"] == "white"
        assert info["reward_breakdown"] == {"score_reward": 0.0, "terminal_reward": 0.0}
        assert info["score_deltas"] == {"black": 0, "white": 0, "orange": 0, "green": 0}

    def test_invalid_action(self, env):
        before = env.get_state()
        obs, reward, terminated, truncated, info = env.step(63)
        assert reward == -1.0
        assert info["invalid_action"]
        assert not terminated
        assert env.get_state() is before

    def test_custom_invalid_penalty(self):
        env = QuebecEnv(reward_config=RewardConfig(invalid_action_penalty=-0.25))
        env.reset(seed=0)
        _, reward, _, _, _ = env.step(50)
        assert reward == -0.25

    def test_truncation(self):
        env = QuebecEnv(max_steps=3)
        env.reset(seed=0)
        results = [env.step(0) for _ in range(4)]
        assert [r[3] for r in results] == [False, False, False, True]
        assert results[-1][4]["game_over"]

    def test_action_masks_match_menu(self, env):
        mask = env.action_masks()
        assert mask.sum() == len(env.get_valid_actions())


class TestEpisodes:
    """Integration tests playing complete episodes."""

    @pytest.mark.parametrize("num_players", [2, 4])
    def test_random_episode(self, num_players):
        env = QuebecEnv(num_players=num_players)
        env.reset(seed=num_players)
        terminated, truncated, info, score_totals = play_masked(
            env, np.random.default_rng(num_players)
        )
        assert terminated
        assert not truncated
        assert info["game_over"]
        assert info["phase"] == GamePhase.GAME_OVER.value
        assert not env.action_masks().any()
        assert info["reward_breakdown"]["terminal_reward"] in (1.0, -1.0)
        # Points awarded to everyone during scoring are all reported
        assert score_totals == info["scores"]

    def test_step_after_game_over_is_not_truncated(self):
        env = QuebecEnv(num_players=2)
        env.reset(seed=5)
        terminated, _, _, _ = play_masked(env, np.random.default_rng(5))
        assert terminated

        env._max_steps = 0
        _, reward, terminated, truncated, info = env.step(0)
        assert info["invalid_action"]
        assert reward == -1.0
        assert terminated
        assert not truncated


class TestUtilities:
    """Tests for render and clone."""

    def test_render_ansi(self):
        env = QuebecEnv(render_mode="ansi")
        env.reset(seed=0)
        text = env.render()
        assert isinstance(text, str)
        assert text == str(env.get_state())

    def test_render_none(self, env):
        assert env.render() is None

    def test_clone(self, env):
        env.step(0)
        copy = env.clone()
        assert copy.get_state() is env.get_state()
        copy.step(0)
        assert env.get_current_player() != copy.get_current_player()

    def test_close(self, env):
        env.close()
        assert env.get_state() is None
