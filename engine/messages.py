"""Messages attached to decision menus and board actions.

Messages are opaque data carriers: a tag plus typed parameters. The engine
never formats them into text; a host renders or localizes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.constants import PlayerColor, InfluenceType, ScoringPhase, BoardActionKind


class Message:
    """Base class for all messages."""


@dataclass(frozen=True)
class Text(Message):
    """A message identified by a key only."""

    key: str


@dataclass(frozen=True)
class SelectWhereToEmptyTile(Message):
    """Ask a player, out of turn, where to send their cubes from a completed tile."""

    color: PlayerColor


@dataclass(frozen=True)
class SendCubesToZones(Message):
    """Ask a player to send cubes to one of the given zones."""

    nb_cubes: int
    color: PlayerColor
    zones: tuple[InfluenceType, ...]


@dataclass(frozen=True)
class MoveCubesSelectOrigin(Message):
    """Ask a player which zone to move cubes out of."""

    color: PlayerColor


@dataclass(frozen=True)
class MoveCubesSelectDestination(Message):
    """Ask a player where to move cubes from a zone."""

    nb_cubes: int
    color: PlayerColor
    origin: InfluenceType


@dataclass(frozen=True)
class ScoringMessage(Message):
    """Describe a scoring step and the scores it is about to award."""

    phase: ScoringPhase
    information: Any = None


@dataclass(frozen=True)
class BoardActionDescription(Message):
    """Describe a board action."""

    kind: BoardActionKind


SKIP = Text("skip")
SCORING_PHASE_BEGINS = Text("scoringPhaseBegins")
