"""Scoring engine for the end of each century.

Scoring runs as a sequence of steps (see ScoringPhase):
1. Five influence zones, in the order given by the century, each awarding
   one point per cube; the leading players cascade part of their cubes
   into the next zone, or into their active reserve after the last zone
2. One point per cube in every spot of a tile still under an architect
3. One point per two active cubes
4. Star tokens, with a bonus for the most valuable group of connected
   buildings of each player

The compute_* functions only read the state. perform_zone_scoring appends
the matching changes to a composite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from core.constants import (
    PlayerColor,
    InfluenceType,
    ScoringPhase,
    ZONE_SCORING_PHASES,
    MAX_CASCADE,
    scoring_zone_for_century,
)
from core.board import BOARD, Location, TileState
from core.game_state import GameState

from .destinations import CubeDestination, InfluenceZoneDestination, PlayerReserve
from .state_changes import Composite, MoveCubes, ScorePoints


@dataclass
class ScoringInformation:
    """Points awarded to each player by a scoring step.

    Attributes:
        scores: Points per player color.
    """

    scores: dict[PlayerColor, int] = field(default_factory=dict)

    def get_score(self, color: PlayerColor) -> int:
        return self.scores.get(color, 0)

    def set_score(self, color: PlayerColor, score: int) -> None:
        self.scores[color] = score

    def add_to_score(self, color: PlayerColor, points: int) -> None:
        self.scores[color] = self.get_score(color) + points


@dataclass
class ZoneScoringInformation(ScoringInformation):
    """Points and cascades resulting from the scoring of one zone.

    Attributes:
        zone_index: Position of the zone in the century's scoring order (0-4).
        zone: The zone being scored.
        cubes_to_cascade: Cubes each leading player moves out of the zone.
        origins: Where each cascade starts.
        destinations: Where each cascade ends.
    """

    zone_index: int = 0
    zone: Optional[InfluenceType] = None
    cubes_to_cascade: dict[PlayerColor, int] = field(default_factory=dict)
    origins: dict[PlayerColor, CubeDestination] = field(default_factory=dict)
    destinations: dict[PlayerColor, CubeDestination] = field(default_factory=dict)

    def get_cubes_to_cascade(self, color: PlayerColor) -> int:
        return self.cubes_to_cascade.get(color, 0)


def _player_colors(state: GameState) -> list[PlayerColor]:
    return [player_state.color for player_state in state.player_states]


# =============================================================================
# Zone scoring
# =============================================================================


def compute_zone_scoring_information(
    phase: ScoringPhase, state: GameState
) -> ZoneScoringInformation:
    """Compute the points and cascades of a zone scoring step.

    Every player scores one point per cube in the zone. The players tied at
    the highest count, if it is positive, each cascade min(5, count // 2)
    cubes.

    Raises:
        ValueError: If phase is not a zone scoring phase.
    """
    if not phase.is_zone_scoring_phase:
        raise ValueError(f"{phase.value} does not score a zone")
    index = phase.scoring_zone_index
    zone = scoring_zone_for_century(state.century, index)
    result = ZoneScoringInformation(zone_index=index, zone=zone)

    leading_count = 0
    for color in _player_colors(state):
        nb_cubes = state.cubes_in_zone(zone, color)
        result.set_score(color, nb_cubes)
        leading_count = max(leading_count, nb_cubes)

    if leading_count > 0:
        nb_to_cascade = min(MAX_CASCADE, leading_count // 2)
        last_index = len(ZONE_SCORING_PHASES) - 1
        for color in _player_colors(state):
            if state.cubes_in_zone(zone, color) != leading_count:
                continue
            result.cubes_to_cascade[color] = nb_to_cascade
            result.origins[color] = InfluenceZoneDestination(zone, color)
            if index == last_index:
                result.destinations[color] = PlayerReserve(color, active=True)
            else:
                next_zone = scoring_zone_for_century(state.century, index + 1)
                result.destinations[color] = InfluenceZoneDestination(next_zone, color)
    return result


def perform_zone_scoring(phase: ScoringPhase, state: GameState, result: Composite) -> None:
    """Append the changes of a zone scoring step to a composite.

    Points are computed on the state before any cascade, and every
    ScorePoints precedes the cascade moves.
    """
    info = compute_zone_scoring_information(phase, state)
    for color in _player_colors(state):
        score = info.get_score(color)
        if score > 0:
            result.add(ScorePoints(color, score))
    for color in _player_colors(state):
        nb_to_cascade = info.get_cubes_to_cascade(color)
        if nb_to_cascade > 0:
            result.add(MoveCubes(nb_to_cascade, info.origins[color], info.destinations[color]))


def calculate_zone_score(state: GameState) -> ScoringInformation:
    """Project the total points of the five zone scoring steps.

    Cascades of each step are taken into account for the following steps.
    """
    projected = state.clone()
    total = ScoringInformation()
    for phase in ZONE_SCORING_PHASES:
        info = compute_zone_scoring_information(phase, projected)
        cascade = Composite()
        for color in _player_colors(projected):
            total.add_to_score(color, info.get_score(color))
            nb_to_cascade = info.get_cubes_to_cascade(color)
            if nb_to_cascade > 0:
                cascade.add(
                    MoveCubes(nb_to_cascade, info.origins[color], info.destinations[color])
                )
        cascade.apply_in_place(projected)
    return total


# =============================================================================
# Other scoring steps
# =============================================================================


def compute_incomplete_building_scoring_information(state: GameState) -> ScoringInformation:
    """Each occupied spot of a tile still under an architect scores its cubes."""
    result = ScoringInformation()
    for tile_state in state.tile_states:
        if not tile_state.has_architect():
            continue
        for spot in tile_state.occupied_spots():
            result.add_to_score(tile_state.color_in_spot(spot), tile_state.cubes_per_spot)
    return result


def compute_active_cubes_scoring_information(state: GameState) -> ScoringInformation:
    """Each player scores one point per two active cubes."""
    result = ScoringInformation()
    for player_state in state.player_states:
        result.add_to_score(player_state.color, player_state.nb_active_cubes // 2)
    return result


@dataclass
class BuildingGroupScore:
    """Scores of a group of connected buildings of one player.

    Attributes:
        star_score: Sum of the stars of the group.
        value_score: Sum of the triangular value of each token's stars.
        locations: Tiles of the group, in discovery order.
    """

    star_score: int = 0
    value_score: int = 0
    locations: list[Location] = field(default_factory=list)


def find_building_groups(state: GameState, color: PlayerColor) -> list[BuildingGroupScore]:
    """Find the groups of connected tiles bearing a player's star tokens.

    Groups are discovered in tile order, and each group's tiles are visited
    depth first, so the result is deterministic.
    """
    visited: set[Location] = set()
    groups = []
    for tile_state in state.tile_states:
        if tile_state.star_token_color != color or tile_state.location in visited:
            continue
        group = BuildingGroupScore()
        stack: list[TileState] = [tile_state]
        visited.add(tile_state.location)
        while stack:
            current = stack.pop()
            nb_stars = current.nb_stars
            group.star_score += nb_stars
            group.value_score += nb_stars * (nb_stars + 1) // 2
            group.locations.append(current.location)
            for location in BOARD.neighbors(current.location):
                neighbor = state.find_tile_at_location(location)
                if (
                    neighbor is not None
                    and neighbor.star_token_color == color
                    and location not in visited
                ):
                    visited.add(location)
                    stack.append(neighbor)
        groups.append(group)
    return groups


def compute_buildings_scoring_information(state: GameState) -> ScoringInformation:
    """Score the star tokens of every player.

    Each group scores its number of stars, except the group with the
    highest value score, which scores its value instead. Among groups of
    equal value, the first one found in tile order is the largest.
    """
    result = ScoringInformation()
    for color in _player_colors(state):
        groups = find_building_groups(state, color)
        total = sum(group.star_score for group in groups)
        largest: Optional[BuildingGroupScore] = None
        for group in groups:
            if largest is None or group.value_score > largest.value_score:
                largest = group
        if largest is not None:
            total += largest.value_score - largest.star_score
        result.set_score(color, total)
    return result
