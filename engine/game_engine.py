"""Main game engine for the Quebec rule engine.

The GameEngine is the primary interface for playing the game. It provides:
- reset(): Initialize a new game
- preview(): Compute the change an action would make, without committing it
- step(): Execute an action by index and advance the game state
- get_valid_actions(): Return the actions offered to the current player

The engine never mutates a state it has handed out: every step commits a
new GameState. Action legality is enforced by construction, since only the
actions of the pending menu can be executed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Any, Sequence

from core.constants import PlayerColor, GamePhase
from core.game_state import GameState
from core.player import Player
from core.shuffler import Shuffler, CannedShuffler, RandomShuffler

from .actions import GameAction
from .phase_machine import PhaseMachine, compute_phase
from .possible_actions import ActionMenu
from .setup import make_players, reset_game_state
from .state_changes import GameStateChange

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Result of executing a step in the game.

    Attributes:
        change: The change that was committed.
        state: The game state after the action.
        acting_player: The player who took the action.
        done: Whether the game has ended.
        info: Additional information about the step.
    """

    change: GameStateChange
    state: GameState
    acting_player: PlayerColor
    done: bool
    info: dict[str, Any] = field(default_factory=dict)


class GameEngine:
    """Main engine for playing Quebec.

    Usage:
        engine = GameEngine()
        engine.reset(num_players=4)

        while not engine.is_game_over():
            index = select_action(engine.get_valid_actions())  # Player or agent selects
            result = engine.step(index)
    """

    def __init__(self):
        """Initialize the game engine."""
        self._state: Optional[GameState] = None
        self._initial_state: Optional[GameState] = None
        self._phase_machine: Optional[PhaseMachine] = None
        self._history: list[int] = []

    @property
    def state(self) -> GameState:
        """Get the current game state.

        Raises:
            RuntimeError: If the game has not been initialized.
        """
        if self._state is None:
            raise RuntimeError("Game not initialized. Call reset() first.")
        return self._state

    @property
    def phase(self) -> GamePhase:
        """Get the current game phase."""
        if self._phase_machine is None:
            raise RuntimeError("Game not initialized. Call reset() first.")
        return self._phase_machine.phase

    @property
    def history(self) -> list[int]:
        """Indices of the actions taken since the last reset."""
        return list(self._history)

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self._phase_machine is not None and self._phase_machine.is_game_over()

    # -------------------------------------------------------------------------
    # Game Initialization
    # -------------------------------------------------------------------------

    def reset(
        self,
        num_players: int = 4,
        players: Optional[Sequence[Player]] = None,
        seed: Optional[int] = None,
        shuffler: Optional[Shuffler] = None,
    ) -> GameState:
        """Initialize a new game.

        Args:
            num_players: Number of players (2-5), ignored when players is given.
            players: Optional players in turn order.
            seed: Seed for a random tile layout. Without it the layout is
                the fixed one of the deterministic shuffler.
            shuffler: Optional shuffler, overriding seed.

        Returns:
            The initial game state.
        """
        if players is None:
            players = make_players(num_players)
        if shuffler is None:
            shuffler = RandomShuffler(seed) if seed is not None else CannedShuffler()

        self._state = reset_game_state(players, shuffler)
        self._initial_state = self._state
        self._phase_machine = PhaseMachine(initial_phase=compute_phase(self._state))
        self._history = []
        logger.info("Game reset with %d players (seed=%s)", len(players), seed)
        return self._state

    # -------------------------------------------------------------------------
    # Action Execution
    # -------------------------------------------------------------------------

    @property
    def possible_actions(self) -> Optional[ActionMenu]:
        """The pending menu, None once the game is over."""
        return self.state.possible_actions

    def get_nb_actions(self) -> int:
        menu = self.possible_actions
        return menu.nb_actions if menu is not None else 0

    def get_valid_actions(self) -> list[GameAction]:
        """Get the actions of the pending menu, in index order."""
        menu = self.possible_actions
        return menu.all_actions() if menu is not None else []

    def preview(self, index: int) -> GameStateChange:
        """Compute the change the action at index would make.

        Args:
            index: Index of the action in the pending menu.

        Raises:
            ValueError: If index does not designate an action of the menu.
        """
        menu = self.possible_actions
        if menu is None or not 0 <= index < menu.nb_actions:
            raise ValueError(
                f"Invalid action index {index} ({self.get_nb_actions()} actions available)"
            )
        return menu.execute(index, self.state)

    def step(self, index: int) -> StepResult:
        """Execute an action and advance the game state.

        Args:
            index: Index of the action in the pending menu.

        Returns:
            StepResult with the outcome of the action.

        Raises:
            ValueError: If index is invalid.
            RuntimeError: If the resulting state is in an unreachable phase.
        """
        state = self.state
        acting_player = state.current_player.color
        previous_phase = self.phase
        change = self.preview(index)
        new_state = change.apply(state)

        transition = self._phase_machine.sync(new_state)
        if not transition.success:
            raise RuntimeError(transition.reason)

        self._state = new_state
        self._history.append(index)
        done = self.is_game_over()
        if transition.new_phase != previous_phase:
            logger.debug(
                "Phase %s -> %s after action %d of %s",
                previous_phase.value,
                transition.new_phase.value,
                index,
                acting_player.value,
            )
        if done:
            logger.info("Game over, scores: %s", self.get_scores())

        return StepResult(
            change=change,
            state=new_state,
            acting_player=acting_player,
            done=done,
            info={"phase": transition.new_phase.value, "century": new_state.century},
        )

    def replay(self, indices: Sequence[int]) -> GameState:
        """Replay actions from the initial state of the current game.

        Args:
            indices: Action indices, as returned by history.

        Returns:
            The state reached.
        """
        if self._initial_state is None:
            raise RuntimeError("Game not initialized. Call reset() first.")
        self._state = self._initial_state
        self._phase_machine = PhaseMachine(initial_phase=compute_phase(self._state))
        self._history = []
        for index in indices:
            self.step(index)
        return self.state

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def get_scores(self) -> dict[PlayerColor, int]:
        """Get the score of every player."""
        return {p.color: p.score for p in self.state.player_states}

    def get_winners(self) -> list[PlayerColor]:
        """Get the players sharing the highest score."""
        scores = self.get_scores()
        best = max(scores.values())
        return [color for color, score in scores.items() if score == best]

    def clone(self) -> GameEngine:
        """Create a copy of the engine for simulation.

        States are never mutated once committed, so the copy shares them.
        """
        new_engine = GameEngine()
        new_engine._state = self._state
        new_engine._initial_state = self._initial_state
        new_engine._phase_machine = PhaseMachine(initial_phase=self.phase)
        new_engine._history = list(self._history)
        return new_engine

    def get_game_summary(self) -> dict[str, Any]:
        """Get a summary of the current game state.

        Returns:
            Dictionary with game summary information.
        """
        state = self.state
        return {
            "phase": self.phase.value,
            "century": state.century,
            "turn": state.turn_number,
            "current_player": state.current_player.color.value,
            "nb_actions": self.get_nb_actions(),
            "players": [
                {
                    "color": p.color.value,
                    "score": p.score,
                    "active_cubes": p.nb_active_cubes,
                    "passive_cubes": p.nb_passive_cubes,
                    "leader": p.leader_card.value if p.leader_card else None,
                }
                for p in state.player_states
            ],
            "available_leaders": [card.value for card in state.available_leader_cards],
            "game_over": self.is_game_over(),
        }

    def __str__(self) -> str:
        """Return string representation of the engine."""
        if self._state is None:
            return "GameEngine(not initialized)"
        return f"GameEngine(phase={self.phase.value}, century={self.state.century})"
