"""Board actions of the Quebec rule engine.

The board has sixteen actions, four per influence color. Sending workers to
a tile triggers the action tied to the tile's location; each action builds
the menu of choices offered to the triggering player.
"""

from __future__ import annotations

from typing import Optional

from core.constants import BoardActionKind
from core.board import BOARD, Location

from .base import BoardAction, points_for_count, send_cubes_menu

from .purple import (
    PurpleAny,
    PurpleOneToCitadelOneToAny,
    PurpleOnePointOneToAnyActivateOne,
    PurpleOneToAnyMoveTwo,
)

from .red import (
    RedAny,
    RedTwoToCitadel,
    RedTwoToPurpleOrYellow,
    RedTwoToRedOrBlue,
)

from .yellow import (
    YellowAny,
    YellowActivateThree,
    YellowFillOneSpot,
    YellowMoveArchitect,
)

from .blue import (
    BlueAny,
    BlueAddStar,
    BlueScoreForCubesInHand,
    BlueScoreForZones,
)

_REGISTRY: dict[BoardActionKind, BoardAction] = {
    action.kind: action
    for action in (
        PurpleAny(),
        PurpleOneToCitadelOneToAny(),
        PurpleOnePointOneToAnyActivateOne(),
        PurpleOneToAnyMoveTwo(),
        RedAny(),
        RedTwoToCitadel(),
        RedTwoToPurpleOrYellow(),
        RedTwoToRedOrBlue(),
        YellowAny(),
        YellowActivateThree(),
        YellowFillOneSpot(),
        YellowMoveArchitect(),
        BlueAny(),
        BlueAddStar(),
        BlueScoreForCubesInHand(),
        BlueScoreForZones(),
    )
}


def board_action_for(kind: BoardActionKind) -> BoardAction:
    """Get the board action of a given kind."""
    return _REGISTRY[kind]


def board_action_at(location: Location) -> Optional[BoardAction]:
    """Get the board action triggered by a tile location, or None."""
    info = BOARD.action_for_location(location)
    if info is None:
        return None
    return _REGISTRY[info.kind]


__all__ = [
    # Base
    "BoardAction",
    "board_action_for",
    "board_action_at",
    "points_for_count",
    "send_cubes_menu",
    # Purple
    "PurpleAny",
    "PurpleOneToCitadelOneToAny",
    "PurpleOnePointOneToAnyActivateOne",
    "PurpleOneToAnyMoveTwo",
    # Red
    "RedAny",
    "RedTwoToCitadel",
    "RedTwoToPurpleOrYellow",
    "RedTwoToRedOrBlue",
    # Yellow
    "YellowAny",
    "YellowActivateThree",
    "YellowFillOneSpot",
    "YellowMoveArchitect",
    # Blue
    "BlueAny",
    "BlueAddStar",
    "BlueScoreForCubesInHand",
    "BlueScoreForZones",
]
