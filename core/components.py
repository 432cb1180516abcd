"""Game components for the Quebec rule engine.

This module contains the Tile value and the TileDeck used to lay out the
board at the start of a game.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import InfluenceType, TILES_PER_CENTURY, TILE_INFLUENCES

if TYPE_CHECKING:
    from .shuffler import Shuffler


@dataclass(frozen=True)
class Tile:
    """A tile, identified by its influence, its century and an art index.

    Attributes:
        influence: Color of the tile, never the citadel.
        century: Century (0-3) during which an architect may build the tile.
        index: Index distinguishing tiles of the same influence and century.
    """

    influence: InfluenceType
    century: int
    index: int

    def __str__(self) -> str:
        return f"Tile({self.influence.value}, century={self.century}, #{self.index})"


class TileDeck:
    """One shuffled deck of tiles per tile influence.

    Each deck holds the tiles of every century and is shuffled with a seed
    equal to the index of its influence, so a deterministic shuffler always
    produces the same layout.
    """

    def __init__(self, shuffler: Shuffler):
        """Build and shuffle all the decks.

        Args:
            shuffler: Strategy used to shuffle each deck.
        """
        self._decks: dict[InfluenceType, list[Tile]] = {}
        for influence in TILE_INFLUENCES:
            deck = [
                Tile(influence, century, index)
                for century, nb_tiles in enumerate(TILES_PER_CENTURY[influence])
                for index in range(nb_tiles)
            ]
            shuffler.shuffle(deck, influence.index)
            self._decks[influence] = deck

    def draw(self, influence: InfluenceType) -> Tile:
        """Draw the top tile of a deck.

        Raises:
            ValueError: If the deck is empty or does not exist.
        """
        deck = self._decks.get(influence)
        if not deck:
            raise ValueError(f"No tile left in the {influence.value} deck")
        return deck.pop()

    def remaining(self, influence: InfluenceType) -> int:
        """Return the number of tiles left in a deck."""
        return len(self._decks.get(influence, []))
