"""Action masking for the Quebec RL environment.

Actions are indices of the menu pending in a state, so the valid actions
are always a prefix of the action space: indices 0 to nb_actions - 1.
"""

from __future__ import annotations

import numpy as np
from typing import Optional, TYPE_CHECKING

from .config import ActionSpaceConfig, DEFAULT_ACTION_CONFIG

if TYPE_CHECKING:
    from core.game_state import GameState
    from engine.possible_actions import ActionMenu


# Logit given to masked actions, as in sb3-contrib's MaskableCategorical
MASKED_LOGIT = -1e8


class ActionMaskGenerator:
    """Builds boolean masks over the action space from pending menus."""

    def __init__(self, config: ActionSpaceConfig = DEFAULT_ACTION_CONFIG):
        self.config = config

    def mask_for_menu(self, menu: Optional["ActionMenu"]) -> np.ndarray:
        """Mask the indices of a menu.

        Args:
            menu: The pending menu, None once the game is over.

        Returns:
            Boolean array of shape (total_actions,), all False for None.

        Raises:
            RuntimeError: If the menu is empty or larger than the action space.
        """
        size = self.config.total_actions
        mask = np.zeros(size, dtype=np.bool_)
        if menu is None:
            return mask
        nb_actions = menu.nb_actions
        if nb_actions == 0:
            raise RuntimeError("A game in progress offers an empty menu")
        if nb_actions > size:
            raise RuntimeError(
                f"Menu offers {nb_actions} actions but the action space holds {size}"
            )
        mask[:nb_actions] = True
        return mask

    def generate_mask(self, state: "GameState") -> np.ndarray:
        """Mask the indices of the menu pending in a state."""
        return self.mask_for_menu(state.possible_actions)

    def get_valid_action_indices(self, mask: np.ndarray) -> np.ndarray:
        return np.flatnonzero(mask)

    def mask_to_logits_mask(self, mask: np.ndarray) -> np.ndarray:
        """Additive logits mask: 0 for valid actions, MASKED_LOGIT otherwise."""
        return np.where(mask, 0.0, MASKED_LOGIT).astype(np.float32)

    def count_valid_actions(self, mask: np.ndarray) -> int:
        return int(np.count_nonzero(mask))

    def is_action_valid(self, action_idx: int, mask: np.ndarray) -> bool:
        return 0 <= action_idx < mask.shape[0] and bool(mask[action_idx])
