"""Decision menus offered to the player holding the current decision.

A menu is an ordered list of actions. The host picks one by index and asks
the menu to execute it against the current state, which yields the
GameStateChange to preview and commit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, TYPE_CHECKING, Any

from core.game_state import GameState

from .messages import Message

if TYPE_CHECKING:
    from .actions import GameAction
    from .state_changes import GameStateChange


class ActionMenu(ABC):
    """Abstract base class for decision menus."""

    @property
    @abstractmethod
    def nb_actions(self) -> int:
        """Number of actions offered."""
        pass

    @abstractmethod
    def action_at(self, index: int) -> GameAction:
        """Get the action at a global index.

        Raises:
            IndexError: If index is out of range.
        """
        pass

    def execute(self, index: int, state: GameState) -> GameStateChange:
        """Execute the action at an index against a state.

        Args:
            index: Index of the action, lower than nb_actions.
            state: The current state. It is not modified.

        Returns:
            The change resulting from the action.
        """
        return self.action_at(index).execute(state)

    def all_actions(self) -> list[GameAction]:
        """List every action in index order."""
        return [self.action_at(i) for i in range(self.nb_actions)]


@dataclass
class PossibleActions(ActionMenu):
    """A flat menu of actions with an optional message.

    Attributes:
        message: Describes the decision to the player.
        actions: The actions offered, in index order.
        continuation: For out-of-turn decisions, the change every choice
            resumes once it has been resolved.
    """

    message: Optional[Message] = None
    actions: list[GameAction] = field(default_factory=list)
    continuation: Optional[GameStateChange] = None

    def add(self, action: GameAction) -> None:
        """Append an action to the menu."""
        self.actions.append(action)

    @property
    def nb_actions(self) -> int:
        return len(self.actions)

    def action_at(self, index: int) -> GameAction:
        if not 0 <= index < len(self.actions):
            raise IndexError(f"Action index {index} out of range (0-{len(self.actions) - 1})")
        return self.actions[index]

    def __iter__(self) -> Iterator[GameAction]:
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)


@dataclass
class PossibleActionsComposite(ActionMenu):
    """A menu made of several sub-menus.

    The index space is the concatenation of the children's index spaces,
    in list order.
    """

    children: list[ActionMenu] = field(default_factory=list)

    def add(self, menu: ActionMenu) -> None:
        """Append a sub-menu."""
        self.children.append(menu)

    @property
    def nb_actions(self) -> int:
        return sum(child.nb_actions for child in self.children)

    def locate(self, index: int) -> tuple[ActionMenu, int]:
        """Find the sub-menu owning a global index.

        Returns:
            Tuple of (sub-menu, index within that sub-menu).

        Raises:
            IndexError: If index is out of range.
        """
        if index >= 0:
            offset = 0
            for child in self.children:
                nb_actions = child.nb_actions
                if index < offset + nb_actions:
                    return child, index - offset
                offset += nb_actions
        raise IndexError(f"Action index {index} out of range (0-{self.nb_actions - 1})")

    def action_at(self, index: int) -> GameAction:
        child, local_index = self.locate(index)
        return child.action_at(local_index)

    def call_on_each(self, function: Callable[[ActionMenu], Any]) -> None:
        """Call a function on every sub-menu, in order."""
        for child in self.children:
            function(child)
