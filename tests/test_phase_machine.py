"""Tests for the phase state machine.

Tests cover:
1. Phase transitions (valid and invalid)
2. Deriving the phase from a game state
3. The scoring sequence of each century
4. Syncing the machine along a game
"""

import pytest

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    GamePhase,
    ScoringPhase,
    LAST_CENTURY,
)
from core.game_state import GameState
from engine.actions import PerformScoringPhase, scoring_menu
from engine.phase_machine import (
    PhaseMachine,
    PhaseTransitionResult,
    PHASE_TRANSITIONS,
    compute_phase,
    scoring_sequence,
)
from engine.possible_actions import PossibleActions
from engine.setup import initialize_game
from engine.state_changes import Composite, NextPlayer


# =============================================================================
# Phase Transition Tests
# =============================================================================


class TestPhaseTransitions:
    """Test valid and invalid phase transitions."""

    def test_initial_phase(self):
        """Should start in TURN phase."""
        machine = PhaseMachine()
        assert machine.phase == GamePhase.TURN

    def test_custom_initial_phase(self):
        machine = PhaseMachine(initial_phase=GamePhase.SCORING)
        assert machine.phase == GamePhase.SCORING
        assert machine.is_scoring_phase()

    def test_turn_transitions(self):
        """A turn can lead to another turn, an interruption or scoring."""
        machine = PhaseMachine()
        assert machine.can_transition_to(GamePhase.TURN)
        assert machine.can_transition_to(GamePhase.OUT_OF_TURN)
        assert machine.can_transition_to(GamePhase.SCORING)
        assert not machine.can_transition_to(GamePhase.GAME_OVER)

    def test_out_of_turn_resumes(self):
        machine = PhaseMachine(initial_phase=GamePhase.OUT_OF_TURN)
        assert machine.is_out_of_turn_phase()
        result = machine.transition_to(GamePhase.TURN)
        assert result.success
        assert result.new_phase == GamePhase.TURN
        assert machine.phase == GamePhase.TURN

    def test_scoring_transitions(self):
        machine = PhaseMachine(initial_phase=GamePhase.SCORING)
        assert set(machine.get_valid_transitions()) == {
            GamePhase.SCORING,
            GamePhase.OUT_OF_TURN,
            GamePhase.TURN,
            GamePhase.GAME_OVER,
        }

    def test_invalid_transition(self):
        """Invalid transitions should fail with a reason and keep the phase."""
        machine = PhaseMachine()
        result = machine.transition_to(GamePhase.GAME_OVER)
        assert isinstance(result, PhaseTransitionResult)
        assert not result.success
        assert result.new_phase is None
        assert "turn" in result.reason
        assert machine.phase == GamePhase.TURN

    def test_game_over_is_terminal(self):
        machine = PhaseMachine(initial_phase=GamePhase.GAME_OVER)
        assert machine.is_game_over()
        assert machine.get_valid_transitions() == []
        assert PHASE_TRANSITIONS[GamePhase.GAME_OVER] == []
        for phase in GamePhase:
            assert not machine.transition_to(phase).success

    def test_every_phase_has_transitions_entry(self):
        assert set(PHASE_TRANSITIONS) == set(GamePhase)


# =============================================================================
# compute_phase Tests
# =============================================================================


@pytest.fixture
def game_state() -> GameState:
    """Create a fresh 4-player game."""
    return initialize_game(num_players=4)


class TestComputePhase:
    """Test deriving the phase from the pending menu."""

    def test_turn(self, game_state):
        assert compute_phase(game_state) == GamePhase.TURN

    def test_scoring(self, game_state):
        game_state.possible_actions = scoring_menu()
        assert compute_phase(game_state) == GamePhase.SCORING

    def test_out_of_turn(self, game_state):
        game_state.possible_actions = PossibleActions(
            actions=[PerformScoringPhase()], continuation=Composite([NextPlayer()])
        )
        assert compute_phase(game_state) == GamePhase.OUT_OF_TURN

    def test_game_over(self, game_state):
        game_state.possible_actions = None
        assert compute_phase(game_state) == GamePhase.GAME_OVER

    def test_empty_menu_is_turn(self, game_state):
        game_state.possible_actions = PossibleActions()
        assert compute_phase(game_state) == GamePhase.TURN


# =============================================================================
# Scoring sequence Tests
# =============================================================================


class TestScoringSequence:
    """Test the order of the scoring steps."""

    def test_first_centuries(self):
        for century in range(LAST_CENTURY):
            assert scoring_sequence(century) == [
                ScoringPhase.INIT_SCORING,
                ScoringPhase.SCORE_ZONE_1,
                ScoringPhase.SCORE_ZONE_2,
                ScoringPhase.SCORE_ZONE_3,
                ScoringPhase.SCORE_ZONE_4,
                ScoringPhase.SCORE_ZONE_5,
                ScoringPhase.PREPARE_NEXT_CENTURY,
            ]

    def test_last_century(self):
        assert scoring_sequence(LAST_CENTURY)[5:] == [
            ScoringPhase.SCORE_ZONE_5,
            ScoringPhase.SCORE_INCOMPLETE_BUILDINGS,
            ScoringPhase.SCORE_ACTIVE_CUBES,
            ScoringPhase.SCORE_BUILDINGS,
            ScoringPhase.FINISH_GAME,
        ]

    def test_terminal_phases_have_no_successor(self):
        with pytest.raises(ValueError):
            ScoringPhase.FINISH_GAME.next_phase(LAST_CENTURY)
        with pytest.raises(ValueError):
            ScoringPhase.PREPARE_NEXT_CENTURY.next_phase(0)


# =============================================================================
# Integration with GameState
# =============================================================================


class TestPhaseMachineSync:
    """Test following the phase of a game as its steps are applied."""

    def test_sync_through_scoring(self, game_state):
        """Running the whole scoring chain of the first century."""
        machine = PhaseMachine()
        state = game_state
        state.possible_actions = scoring_menu()
        assert machine.sync(state).success
        assert machine.phase == GamePhase.SCORING

        for _ in scoring_sequence(0):
            state = state.possible_actions.execute(0, state).apply(state)
            assert machine.sync(state).success

        assert machine.phase == GamePhase.TURN
        assert state.century == 1

    def test_sync_to_game_over(self, game_state):
        game_state.century = LAST_CENTURY
        game_state.possible_actions = scoring_menu()
        machine = PhaseMachine(initial_phase=GamePhase.SCORING)

        state = game_state
        while not machine.is_game_over():
            state = state.possible_actions.execute(0, state).apply(state)
            assert machine.sync(state).success
        assert state.possible_actions is None

    def test_sync_rejects_impossible_transition(self, game_state):
        machine = PhaseMachine(initial_phase=GamePhase.GAME_OVER)
        result = machine.sync(game_state)
        assert not result.success
        assert machine.phase == GamePhase.GAME_OVER

    def test_leaders_back_after_scoring(self, game_state):
        game_state.available_leader_cards.remove(LeaderCard.RELIGIOUS)
        game_state.player_state(PlayerColor.GREEN).leader_card = LeaderCard.RELIGIOUS
        game_state.player_state(PlayerColor.BLACK).remove_cubes(2, active=False)
        game_state.set_cubes_in_zone(InfluenceType.ECONOMIC, PlayerColor.BLACK, 2)
        game_state.possible_actions = scoring_menu()

        state = game_state
        for _ in scoring_sequence(0):
            state = state.possible_actions.execute(0, state).apply(state)
        assert state.player_state(PlayerColor.GREEN).leader_card is None
        assert state.player_state(PlayerColor.BLACK).score == 3
        assert state.validate() == []
