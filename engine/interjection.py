"""Building completion and out-of-turn interjections.

Completing a building sends the cubes of every occupied spot to the
tile's influence zone. A player holding the politic leader chooses the
zone instead, out of turn, before the interrupted turn resumes.

The interrupted turn is kept as an explicit continuation: every choice
offered to the out-of-turn player carries it, and it starts by handing the
decision back to the interrupted player.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import PlayerColor, LeaderCard, TILE_INFLUENCES, points_for_cultural_leader
from core.components import Tile
from core.board import TileState
from core.game_state import GameState
from core.player import PlayerState

from .destinations import TileSpot, InfluenceZoneDestination
from .messages import SelectWhereToEmptyTile
from .possible_actions import PossibleActions
from .state_changes import (
    GameStateChange,
    Composite,
    FlipTile,
    MoveCubes,
    QueuePossibleActions,
    ScorePoints,
    SetPlayer,
)


@dataclass
class BuildingCompletion:
    """Changes completing a building, and who must act out of turn.

    Attributes:
        tile: The completed tile.
        changes: Changes to run as part of the completing turn.
        nb_filled_spots: Number of occupied spots, which is the number of stars.
        out_of_turn_player: Holder of the politic leader with cubes on the
            tile, NONE if there is none.
    """

    tile: Tile
    changes: list[GameStateChange] = field(default_factory=list)
    nb_filled_spots: int = 0
    out_of_turn_player: PlayerColor = PlayerColor.NONE

    @property
    def needs_interjection(self) -> bool:
        return self.out_of_turn_player is not PlayerColor.NONE


def complete_building(
    state: GameState, player_state: PlayerState, tile_state: TileState
) -> BuildingCompletion:
    """Compute the changes completing the building under an architect.

    Args:
        state: The current state. It is not modified.
        player_state: The player completing the building, who gets the star token.
        tile_state: The tile being completed.

    Returns:
        The completion, whose changes empty the spots, flip the tile and
        award the cultural leader's points.
    """
    tile = tile_state.tile
    completion = BuildingCompletion(tile=tile)
    nb_cubes = tile_state.cubes_per_spot
    for spot in tile_state.occupied_spots():
        owner = tile_state.color_in_spot(spot)
        if state.player_state(owner).leader_card is LeaderCard.POLITIC:
            completion.out_of_turn_player = owner
        else:
            completion.changes.append(
                MoveCubes(
                    nb_cubes,
                    TileSpot(tile, owner, spot),
                    InfluenceZoneDestination(tile.influence, owner),
                )
            )
        completion.nb_filled_spots += 1

    nb_filled = completion.nb_filled_spots
    star_color = player_state.color if nb_filled > 0 else PlayerColor.NONE
    completion.changes.append(FlipTile(tile, star_color, nb_filled))

    if nb_filled > 0 and player_state.leader_card is LeaderCard.CULTURAL:
        points = points_for_cultural_leader(state.num_players(), nb_filled)
        completion.changes.append(ScorePoints(player_state.color, points))
    return completion


def interject(
    completion: BuildingCompletion, acting_color: PlayerColor, turn: Composite
) -> GameStateChange:
    """Wrap a turn so the politic leader's holder acts first if needed.

    Args:
        completion: The building completion that happened during the turn.
        acting_color: The player whose turn it is.
        turn: Every change of the turn, completion changes included.

    Returns:
        The turn itself when nobody needs to act out of turn. Otherwise a
        change handing the decision to the out-of-turn player with a menu of
        zones, each choice resuming the turn afterwards.
    """
    from .actions import EmptyTileToZone

    if not completion.needs_interjection:
        return turn

    continuation = Composite([SetPlayer(acting_color), *turn.changes])
    menu = PossibleActions(
        message=SelectWhereToEmptyTile(completion.out_of_turn_player),
        continuation=continuation,
    )
    for zone in TILE_INFLUENCES:
        menu.add(EmptyTileToZone(completion.tile, zone, continuation))
    return Composite([SetPlayer(completion.out_of_turn_player), QueuePossibleActions(menu)])
