"""Board model for the Quebec rule engine.

The board is an 18x8 grid of locations:
- Sixteen locations hold the board actions, four per influence color
- Forty-four locations hold tiles, each tied to one board action
- Topology is immutable and built once; only tile occupancy changes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .constants import (
    BoardActionKind,
    InfluenceType,
    PlayerColor,
    BOARD_COLUMNS,
    BOARD_LINES,
    NB_SPOTS,
    MAX_STARS,
)
from .components import Tile


class Location(NamedTuple):
    """A (column, line) position on the board grid."""

    column: int
    line: int

    def mirror(self) -> Location:
        """Return the location symmetric to this one through the board center."""
        return Location(BOARD_COLUMNS - 1 - self.column, BOARD_LINES - 1 - self.line)


@dataclass(frozen=True)
class BoardActionInfo:
    """Static information about one of the sixteen board actions.

    Attributes:
        kind: Which board action this is.
        location: Where the action is printed on the board.
        influence: Color of the action and of the tiles tied to it.
        cubes_per_spot: Number of cubes a worker spot requires on those tiles.
    """

    kind: BoardActionKind
    location: Location
    influence: InfluenceType
    cubes_per_spot: int


# Board actions in index order: (kind, column, line, influence, cubes per spot).
# Action i and action 15 - i sit on symmetric locations.
_BOARD_ACTIONS = (
    (BoardActionKind.BLUE_ANY, 3, 0, InfluenceType.CULTURAL, 1),
    (BoardActionKind.YELLOW_ACTIVATE_THREE, 7, 0, InfluenceType.ECONOMIC, 3),
    (BoardActionKind.RED_TWO_TO_CITADEL, 1, 2, InfluenceType.POLITIC, 3),
    (BoardActionKind.PURPLE_ONE_TO_CITADEL_ONE_TO_ANY, 6, 3, InfluenceType.RELIGIOUS, 2),
    (BoardActionKind.RED_TWO_TO_PURPLE_OR_YELLOW, 9, 2, InfluenceType.POLITIC, 2),
    (BoardActionKind.YELLOW_MOVE_ARCHITECT, 3, 4, InfluenceType.ECONOMIC, 2),
    (BoardActionKind.RED_TWO_TO_RED_OR_BLUE, 5, 6, InfluenceType.POLITIC, 2),
    (BoardActionKind.PURPLE_ANY, 1, 6, InfluenceType.RELIGIOUS, 1),
    (BoardActionKind.YELLOW_ANY, 16, 1, InfluenceType.ECONOMIC, 1),
    (BoardActionKind.BLUE_SCORE_FOR_CUBES_IN_HAND, 12, 1, InfluenceType.CULTURAL, 2),
    (BoardActionKind.PURPLE_ONE_POINT_ONE_TO_ANY_ACTIVATE_ONE, 14, 3, InfluenceType.RELIGIOUS, 2),
    (BoardActionKind.BLUE_SCORE_FOR_ZONES, 8, 5, InfluenceType.CULTURAL, 2),
    (BoardActionKind.YELLOW_FILL_ONE_SPOT, 11, 4, InfluenceType.ECONOMIC, 2),
    (BoardActionKind.BLUE_ADD_STAR, 16, 5, InfluenceType.CULTURAL, 3),
    (BoardActionKind.PURPLE_ONE_TO_ANY_MOVE_TWO, 10, 7, InfluenceType.RELIGIOUS, 3),
    (BoardActionKind.RED_ANY, 14, 7, InfluenceType.POLITIC, 1),
)

# Tile locations on one half of the board: (column, line, action index).
# The other half is obtained by mirroring the location and using action 15 - index.
_TILE_LOCATIONS = (
    (2, 1, 0), (4, 1, 0), (6, 1, 1), (8, 1, 1),
    (3, 2, 2), (5, 2, 3), (7, 2, 4),
    (0, 3, 2), (2, 3, 2), (4, 3, 5), (8, 3, 3),
    (1, 4, 5), (5, 4, 3), (7, 4, 11),
    (0, 5, 7), (2, 5, 7), (4, 5, 5), (6, 5, 6),
    (3, 6, 6), (7, 6, 11),
    (6, 7, 6), (8, 7, 14),
)

# Offsets reaching the six neighbors of a location
NEIGHBOR_OFFSETS = ((-2, 0), (2, 0), (-1, -1), (1, -1), (-1, 1), (1, 1))


@dataclass(frozen=True)
class BoardTopology:
    """Immutable lookup tables describing the board.

    Attributes:
        board_actions: The sixteen board actions in index order.
        tile_actions: Board action index for every tile location.
    """

    board_actions: tuple[BoardActionInfo, ...]
    tile_actions: dict[Location, int] = field(hash=False)

    @property
    def tile_locations(self) -> list[Location]:
        """All tile locations, column by column then line by line."""
        return sorted(self.tile_actions)

    def is_tile_location(self, location: Location) -> bool:
        """Check whether a tile sits at this location."""
        return location in self.tile_actions

    def action_for_location(self, location: Location) -> Optional[BoardActionInfo]:
        """Get the board action tied to a tile location.

        Returns:
            The board action, or None if no tile sits at this location.
        """
        index = self.tile_actions.get(Location(*location))
        if index is None:
            return None
        return self.board_actions[index]

    def board_action(self, kind: BoardActionKind) -> BoardActionInfo:
        """Get the board action of a given kind."""
        for info in self.board_actions:
            if info.kind == kind:
                return info
        raise ValueError(f"Unknown board action: {kind}")

    def cubes_per_spot(self, location: Location) -> int:
        """Get the number of cubes per spot for the tile at a location.

        Raises:
            ValueError: If no tile sits at this location.
        """
        info = self.action_for_location(location)
        if info is None:
            raise ValueError(f"No tile at location {location}")
        return info.cubes_per_spot

    def neighbors(self, location: Location) -> list[Location]:
        """Get the tile locations adjacent to a location."""
        result = []
        for d_column, d_line in NEIGHBOR_OFFSETS:
            neighbor = Location(location[0] + d_column, location[1] + d_line)
            if neighbor in self.tile_actions:
                result.append(neighbor)
        return result


def build_board() -> BoardTopology:
    """Build the board topology tables."""
    board_actions = tuple(
        BoardActionInfo(kind, Location(column, line), influence, cubes)
        for kind, column, line, influence, cubes in _BOARD_ACTIONS
    )
    last_action = len(board_actions) - 1
    tile_actions: dict[Location, int] = {}
    for column, line, action_index in _TILE_LOCATIONS:
        location = Location(column, line)
        tile_actions[location] = action_index
        tile_actions[location.mirror()] = last_action - action_index
    return BoardTopology(board_actions=board_actions, tile_actions=tile_actions)


BOARD = build_board()


@dataclass
class TileState:
    """Occupancy of a single tile on the board.

    Attributes:
        tile: The tile lying at this location.
        location: Where the tile lies.
        architect: Color of the architect on the tile, NONE if there is none.
        spots: Color of the cubes in each of the three worker spots.
        building_facing: Whether the tile was flipped to its building side.
        star_token_color: Color of the star token, NONE if there is none.
        nb_stars: Number of stars on the token (0 when there is no token).
    """

    tile: Tile
    location: Location
    architect: PlayerColor = PlayerColor.NONE
    spots: list[PlayerColor] = field(
        default_factory=lambda: [PlayerColor.NONE] * NB_SPOTS
    )
    building_facing: bool = False
    star_token_color: PlayerColor = PlayerColor.NONE
    nb_stars: int = 0

    @property
    def cubes_per_spot(self) -> int:
        return BOARD.cubes_per_spot(self.location)

    @property
    def board_action(self) -> BoardActionInfo:
        """The board action triggered by workers on this tile."""
        info = BOARD.action_for_location(self.location)
        assert info is not None
        return info

    def color_in_spot(self, spot: int) -> PlayerColor:
        return self.spots[spot]

    def set_color_in_spot(self, spot: int, color: PlayerColor) -> None:
        """Set the owner of the cubes in a spot.

        Raises:
            ValueError: If the color is neither NONE nor a player color.
        """
        if color is not PlayerColor.NONE and not color.is_normal:
            raise ValueError(f"Spot {spot} cannot hold cubes of color {color.value}")
        self.spots[spot] = color

    def first_empty_spot(self) -> Optional[int]:
        """Get the index of the first empty spot, or None if all are filled."""
        for spot, color in enumerate(self.spots):
            if color is PlayerColor.NONE:
                return spot
        return None

    def occupied_spots(self) -> list[int]:
        return [spot for spot, color in enumerate(self.spots) if color.is_normal]

    def has_architect(self) -> bool:
        return self.architect.is_architect_color

    def is_available_for_architect(self, century: int) -> bool:
        """Check whether an architect may be moved here during a century."""
        return (
            self.tile.century == century
            and not self.has_architect()
            and not self.building_facing
        )

    def set_star_token(self, color: PlayerColor, nb_stars: int) -> None:
        """Place a star token, or remove it with color NONE.

        Raises:
            ValueError: If nb_stars is out of range for the color.
        """
        if color is PlayerColor.NONE:
            if nb_stars != 0:
                raise ValueError("A missing star token cannot hold stars")
        elif not 1 <= nb_stars <= MAX_STARS:
            raise ValueError(f"Star token must hold 1 to {MAX_STARS} stars, got {nb_stars}")
        self.star_token_color = color
        self.nb_stars = nb_stars
