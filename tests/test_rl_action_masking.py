"""Tests for rl/action_masking.py - Action mask generation."""

import numpy as np
import pytest

from engine.actions import PerformScoringPhase, scoring_menu
from engine.possible_actions import PossibleActions
from engine.setup import initialize_game
from rl.action_masking import ActionMaskGenerator
from rl.config import ActionSpaceConfig


@pytest.fixture
def game_state():
    """Create an initial 4-player game state."""
    return initialize_game(num_players=4)


@pytest.fixture
def mask_generator():
    """Create a mask generator with default config."""
    return ActionMaskGenerator()


class TestGenerateMask:
    """Tests for generate_mask."""

    def test_initial_menu(self, mask_generator, game_state):
        mask = mask_generator.generate_mask(game_state)
        assert mask.shape == (64,)
        assert mask.dtype == np.bool_
        assert mask[:21].all()
        assert not mask[21:].any()

    def test_scoring_menu(self, mask_generator, game_state):
        game_state.possible_actions = scoring_menu()
        mask = mask_generator.generate_mask(game_state)
        assert mask_generator.count_valid_actions(mask) == 1
        assert mask[0]

    def test_game_over(self, mask_generator, game_state):
        game_state.possible_actions = None
        assert not mask_generator.generate_mask(game_state).any()

    def test_empty_menu_is_an_error(self, mask_generator, game_state):
        game_state.possible_actions = PossibleActions()
        with pytest.raises(RuntimeError):
            mask_generator.generate_mask(game_state)

    def test_menu_too_large(self, game_state):
        generator = ActionMaskGenerator(ActionSpaceConfig(MAX_ACTIONS=8))
        with pytest.raises(RuntimeError):
            generator.generate_mask(game_state)

    def test_menu_fits_exactly(self, game_state):
        game_state.possible_actions = PossibleActions(actions=[PerformScoringPhase()] * 8)
        generator = ActionMaskGenerator(ActionSpaceConfig(MAX_ACTIONS=8))
        assert generator.generate_mask(game_state).all()


class TestMaskHelpers:
    """Tests for the mask helper methods."""

    def test_valid_action_indices(self, mask_generator, game_state):
        mask = mask_generator.generate_mask(game_state)
        np.testing.assert_array_equal(
            mask_generator.get_valid_action_indices(mask), np.arange(21)
        )

    def test_logits_mask(self, mask_generator, game_state):
        mask = mask_generator.generate_mask(game_state)
        logits = mask_generator.mask_to_logits_mask(mask)
        assert logits.dtype == np.float32
        assert (logits[:21] == 0.0).all()
        assert (logits[21:] == np.float32(-1e8)).all()

    def test_is_action_valid(self, mask_generator, game_state):
        mask = mask_generator.generate_mask(game_state)
        assert mask_generator.is_action_valid(0, mask)
        assert mask_generator.is_action_valid(20, mask)
        assert not mask_generator.is_action_valid(21, mask)
        assert not mask_generator.is_action_valid(-1, mask)
        assert not mask_generator.is_action_valid(64, mask)


class TestMaskForMenu:
    """Tests for mask_for_menu."""

    def test_none_menu(self, mask_generator):
        assert not mask_generator.mask_for_menu(None).any()

    def test_prefix(self, mask_generator):
        menu = PossibleActions(actions=[PerformScoringPhase()] * 3)
        mask = mask_generator.mask_for_menu(menu)
        assert list(mask_generator.get_valid_action_indices(mask)) == [0, 1, 2]
