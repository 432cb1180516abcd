"""Phase state machine for the Quebec rule engine.

A game alternates between:
- Normal turns, where the current player picks from the turn menu or from
  the follow-up menus of a board action
- Out-of-turn decisions, where the politic leader's holder chooses where the
  cubes of a completed building go
- Scoring, a chain of single-choice menus at the end of each century
- Game over, once the last scoring step has run

The phase is never stored in the game state: it is derived from the pending
menu. The phase machine tracks it across steps and rejects impossible
transitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from core.constants import GamePhase, ScoringPhase

if TYPE_CHECKING:
    from core.game_state import GameState


# Valid phase transitions
PHASE_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.TURN: [GamePhase.TURN, GamePhase.OUT_OF_TURN, GamePhase.SCORING],
    GamePhase.OUT_OF_TURN: [GamePhase.TURN, GamePhase.SCORING],
    # The first scoring step can complete a building under the neutral architect
    GamePhase.SCORING: [
        GamePhase.SCORING,
        GamePhase.OUT_OF_TURN,
        GamePhase.TURN,
        GamePhase.GAME_OVER,
    ],
    # Terminal
    GamePhase.GAME_OVER: [],
}


@dataclass
class PhaseTransitionResult:
    """Result of a phase transition attempt.

    Attributes:
        success: Whether the transition was successful.
        new_phase: The new phase if successful, None otherwise.
        reason: Description of why the transition failed (if it did).
    """

    success: bool
    new_phase: Optional[GamePhase]
    reason: Optional[str] = None


def compute_phase(state: GameState) -> GamePhase:
    """Derive the phase of a state from its pending menu."""
    from .actions import PerformScoringPhase
    from .possible_actions import PossibleActions

    menu = state.possible_actions
    if menu is None:
        return GamePhase.GAME_OVER
    if isinstance(menu, PossibleActions):
        if menu.continuation is not None:
            return GamePhase.OUT_OF_TURN
        if menu.actions and all(isinstance(a, PerformScoringPhase) for a in menu.actions):
            return GamePhase.SCORING
    return GamePhase.TURN


def scoring_sequence(century: int) -> list[ScoringPhase]:
    """List the scoring steps run at the end of a century, in order."""
    phases = [ScoringPhase.INIT_SCORING]
    while phases[-1] not in (ScoringPhase.FINISH_GAME, ScoringPhase.PREPARE_NEXT_CENTURY):
        phases.append(phases[-1].next_phase(century))
    return phases


class PhaseMachine:
    """State machine tracking the phase of a game across steps.

    The phase machine does not modify game state. After every committed
    change, sync() recomputes the phase from the new state and checks the
    transition against PHASE_TRANSITIONS.
    """

    def __init__(self, initial_phase: GamePhase = GamePhase.TURN):
        """Initialize the phase machine.

        Args:
            initial_phase: The starting phase (default: TURN).
        """
        self._phase = initial_phase

    @property
    def phase(self) -> GamePhase:
        """Get the current phase."""
        return self._phase

    def get_valid_transitions(self) -> list[GamePhase]:
        """Get the list of valid next phases from the current phase."""
        return PHASE_TRANSITIONS.get(self._phase, [])

    def can_transition_to(self, target_phase: GamePhase) -> bool:
        return target_phase in self.get_valid_transitions()

    def transition_to(self, target_phase: GamePhase) -> PhaseTransitionResult:
        """Attempt to transition to a new phase.

        Args:
            target_phase: The phase to transition to.

        Returns:
            PhaseTransitionResult indicating success or failure.
        """
        if not self.can_transition_to(target_phase):
            valid = self.get_valid_transitions()
            return PhaseTransitionResult(
                success=False,
                new_phase=None,
                reason=f"Cannot transition from {self._phase.value} to {target_phase.value}. "
                f"Valid transitions: {[p.value for p in valid]}",
            )

        self._phase = target_phase
        return PhaseTransitionResult(success=True, new_phase=target_phase)

    def sync(self, state: GameState) -> PhaseTransitionResult:
        """Move to the phase of a state reached by one step."""
        return self.transition_to(compute_phase(state))

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self._phase == GamePhase.GAME_OVER

    def is_scoring_phase(self) -> bool:
        return self._phase == GamePhase.SCORING

    def is_out_of_turn_phase(self) -> bool:
        return self._phase == GamePhase.OUT_OF_TURN
