"""Game actions offered to players.

An action is one entry of a decision menu. Executing it against a state
computes the GameStateChange it stands for, without modifying the state.
Most actions end with a followup change, which is NextPlayer unless the
action is one step of a multi-step board action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    BoardActionKind,
    ScoringPhase,
    MAX_CUBES_TO_ACTIVATE,
)
from core.components import Tile
from core.game_state import GameState

from .destinations import (
    PlayerReserve,
    InfluenceZoneDestination,
    TileSpot,
    PlayerArchitect,
    TileArchitect,
    OffboardNeutral,
    LeaderOnBoard,
    LeaderWithPlayer,
)
from .interjection import BuildingCompletion, complete_building, interject
from .messages import Message, ScoringMessage, SKIP, SCORING_PHASE_BEGINS
from .possible_actions import PossibleActions
from .scoring import (
    ScoringInformation,
    compute_zone_scoring_information,
    compute_incomplete_building_scoring_information,
    compute_active_cubes_scoring_information,
    compute_buildings_scoring_information,
    perform_zone_scoring,
)
from .state_changes import (
    GameStateChange,
    Composite,
    Instantaneous,
    MoveArchitect as MoveArchitectChange,
    MoveCubes as MoveCubesChange,
    MoveLeader,
    NextPlayer,
    PrepareAction,
    PrepareNextCentury,
    QueuePossibleActions,
    IncreaseStarToken,
    ScorePoints,
)


class GameAction(ABC):
    """Abstract base class for all game actions."""

    @abstractmethod
    def execute(self, state: GameState) -> GameStateChange:
        """Compute the change this action stands for.

        Args:
            state: The current state. It is not modified.

        Returns:
            The change to apply.
        """
        pass


def _or_next_player(followup: Optional[GameStateChange]) -> GameStateChange:
    return followup if followup is not None else NextPlayer()


# =============================================================================
# Cube actions
# =============================================================================


@dataclass(frozen=True)
class ActivateCubes(GameAction):
    """Move cubes from the passive reserve to the active reserve."""

    nb_cubes: int
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        color = state.current_player.color
        return Composite([
            MoveCubesChange(
                self.nb_cubes, PlayerReserve(color, False), PlayerReserve(color, True)
            ),
            _or_next_player(self.followup),
        ])


@dataclass(frozen=True)
class SendCubesToZone(GameAction):
    """Send cubes from a reserve to an influence zone.

    When sending from the passive reserve, passive cubes are used first and
    active cubes make up for the missing ones.
    """

    nb_cubes: int
    zone: InfluenceType
    from_active: bool = True
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        player_state = state.current_player
        color = player_state.color
        destination = InfluenceZoneDestination(self.zone, color)
        result = Composite()
        nb_from_active = self.nb_cubes
        if not self.from_active:
            nb_from_passive = min(self.nb_cubes, player_state.nb_passive_cubes)
            if nb_from_passive > 0:
                result.add(
                    MoveCubesChange(nb_from_passive, PlayerReserve(color, False), destination)
                )
            nb_from_active -= nb_from_passive
        if nb_from_active > 0:
            result.add(MoveCubesChange(nb_from_active, PlayerReserve(color, True), destination))
        result.add(_or_next_player(self.followup))
        return result


@dataclass(frozen=True)
class MoveCubes(GameAction):
    """Move cubes of the current player from one zone to another."""

    nb_cubes: int
    origin: InfluenceType
    destination: InfluenceType
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        color = state.current_player.color
        return Composite([
            MoveCubesChange(
                self.nb_cubes,
                InfluenceZoneDestination(self.origin, color),
                InfluenceZoneDestination(self.destination, color),
            ),
            _or_next_player(self.followup),
        ])


@dataclass(frozen=True)
class SendWorkers(GameAction):
    """Place cubes on the first empty spot of a tile.

    Sending workers from the active reserve triggers the board action of the
    tile, unless the tile is under the player's own architect and the player
    does not hold the religious leader.

    Attributes:
        tile: The tile to work on.
        from_active: False when a board action sends the workers, in which
            case passive cubes are used first and no board action triggers.
        followup: Change to run instead of the default ending.
    """

    tile: Tile
    from_active: bool = True
    followup: Optional[GameStateChange] = None

    def can_execute_board_action(self, state: GameState) -> bool:
        player_state = state.current_player
        tile_state = state.find_tile_state(self.tile)
        return self.from_active and (
            not player_state.owns_architect(tile_state.architect)
            or player_state.leader_card is LeaderCard.RELIGIOUS
        )

    def execute(self, state: GameState) -> GameStateChange:
        player_state = state.current_player
        color = player_state.color
        tile_state = state.find_tile_state(self.tile)
        spot = tile_state.first_empty_spot()
        if spot is None:
            raise ValueError(f"{self.tile} has no empty spot")
        nb_cubes = tile_state.cubes_per_spot
        destination = TileSpot(self.tile, color, spot)

        result = Composite()
        if not self.from_active and player_state.nb_passive_cubes > 0:
            missing = max(0, nb_cubes - player_state.nb_passive_cubes)
            if missing > 0:
                result.add(Instantaneous(
                    MoveCubesChange(
                        missing, PlayerReserve(color, True), PlayerReserve(color, False)
                    )
                ))
            result.add(MoveCubesChange(nb_cubes, PlayerReserve(color, False), destination))
        else:
            result.add(MoveCubesChange(nb_cubes, PlayerReserve(color, True), destination))

        if self.followup is not None:
            result.add(self.followup)
        elif self.can_execute_board_action(state):
            result.add(PrepareAction(tile_state.board_action.kind, self.tile))
        else:
            result.add(NextPlayer())
        return result


@dataclass(frozen=True)
class EmptyTileToZone(GameAction):
    """Out of turn, send the cubes of a completed tile to a chosen zone.

    The current player is the politic leader's holder. Their cubes leave
    every spot they occupy, then the interrupted turn resumes.
    """

    tile: Tile
    zone: InfluenceType
    continuation: GameStateChange

    def execute(self, state: GameState) -> GameStateChange:
        color = state.current_player.color
        tile_state = state.find_tile_state(self.tile)
        result = Composite()
        for spot in tile_state.occupied_spots():
            if tile_state.color_in_spot(spot) == color:
                result.add(MoveCubesChange(
                    tile_state.cubes_per_spot,
                    TileSpot(self.tile, color, spot),
                    InfluenceZoneDestination(self.zone, color),
                ))
        result.add(self.continuation)
        return result


# =============================================================================
# Architect and leader actions
# =============================================================================


@dataclass(frozen=True)
class MoveArchitect(GameAction):
    """Move an architect to a tile, completing the building it leaves.

    Attributes:
        tile: Destination tile, or None to withdraw the architect.
        neutral: Whether the neutral architect moves instead of the player's own.
        cubes_to_activate: Passive cubes activated along with the move.
        followup: Change to run instead of the default ending.
    """

    tile: Optional[Tile]
    neutral: bool = False
    cubes_to_activate: int = 0
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        player_state = state.current_player
        color = player_state.color
        architect_color = PlayerColor.NEUTRAL if self.neutral else color
        holding = (
            player_state.is_holding_neutral_architect if self.neutral
            else player_state.is_holding_architect
        )

        result = Composite()
        completion: Optional[BuildingCompletion] = None
        if holding:
            origin = PlayerArchitect(color, self.neutral)
        else:
            origin_state = state.find_tile_under_architect(architect_color)
            if origin_state is None:
                raise ValueError(f"The {architect_color.value} architect is not in play")
            completion = complete_building(state, player_state, origin_state)
            result.changes.extend(completion.changes)
            origin = TileArchitect(origin_state.tile, architect_color)

        if self.tile is not None:
            result.add(MoveArchitectChange(origin, TileArchitect(self.tile, architect_color)))
            if self.cubes_to_activate > 0:
                result.add(MoveCubesChange(
                    self.cubes_to_activate, PlayerReserve(color, False), PlayerReserve(color, True)
                ))
            result.add(_or_next_player(self.followup))
        else:
            if self.neutral:
                result.add(MoveArchitectChange(origin, OffboardNeutral()))
                result.add(NextPlayer(advance_turn_counter=False, prepare_actions=False))
            elif isinstance(origin, TileArchitect):
                result.add(MoveArchitectChange(origin, PlayerArchitect(color, False)))
            if self.followup is not None:
                result.add(self.followup)
            else:
                result.add(QueuePossibleActions(scoring_menu()))

        if completion is not None:
            return interject(completion, color, result)
        return result


@dataclass(frozen=True)
class TakeLeaderCard(GameAction):
    """Take a leader card from the board.

    Taking a card activates one passive cube per player already holding a
    leader. The citadel leader immediately sends up to three cubes to the
    citadel, passive ones first. The economic leader comes with the neutral
    architect.
    """

    card: LeaderCard
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        player_state = state.current_player
        color = player_state.color
        result = Composite([
            MoveLeader(LeaderOnBoard(self.card), LeaderWithPlayer(self.card, color))
        ])

        nb_passive = player_state.nb_passive_cubes
        if self.card is LeaderCard.CITADEL:
            citadel = InfluenceZoneDestination(InfluenceType.CITADEL, color)
            nb_from_passive = min(MAX_CUBES_TO_ACTIVATE, nb_passive)
            if nb_from_passive > 0:
                result.add(MoveCubesChange(nb_from_passive, PlayerReserve(color, False), citadel))
            nb_from_active = min(
                player_state.nb_active_cubes, MAX_CUBES_TO_ACTIVATE - nb_from_passive
            )
            if nb_from_active > 0:
                result.add(MoveCubesChange(nb_from_active, PlayerReserve(color, True), citadel))
            nb_passive -= nb_from_passive

        nb_to_activate = min(nb_passive, state.nb_players_with_leaders())
        if nb_to_activate > 0:
            result.add(MoveCubesChange(
                nb_to_activate, PlayerReserve(color, False), PlayerReserve(color, True)
            ))

        if self.card is LeaderCard.ECONOMIC:
            result.add(MoveArchitectChange(OffboardNeutral(), PlayerArchitect(color, True)))

        result.add(_or_next_player(self.followup))
        return result


# =============================================================================
# Scoring actions
# =============================================================================


@dataclass(frozen=True)
class ScorePointsAction(GameAction):
    """Score points for the current player."""

    nb_points: int
    followup: Optional[GameStateChange] = None

    def execute(self, state: GameState) -> GameStateChange:
        result = Composite()
        if self.nb_points > 0:
            result.add(ScorePoints(state.current_player.color, self.nb_points))
        result.add(_or_next_player(self.followup))
        return result


@dataclass(frozen=True)
class IncreaseStar(GameAction):
    """Add a star to one of the current player's star tokens."""

    tile: Tile

    def execute(self, state: GameState) -> GameStateChange:
        color = state.current_player.color
        tile_state = state.find_tile_state(self.tile)
        return Composite([
            IncreaseStarToken(self.tile, color, tile_state.nb_stars + 1),
            NextPlayer(),
        ])


# =============================================================================
# Generic actions
# =============================================================================


@dataclass(frozen=True)
class Explicit(GameAction):
    """An action described by a message and resolving to a fixed change."""

    message: Message
    change: GameStateChange

    def execute(self, state: GameState) -> GameStateChange:
        return Composite([self.change])


def skip(followup: Optional[GameStateChange] = None) -> Explicit:
    """Create the action declining a choice.

    Args:
        followup: Change to run instead of passing to the next player.
    """
    return Explicit(SKIP, _or_next_player(followup))


@dataclass(frozen=True)
class SelectBoardAction(GameAction):
    """Choose one of the board actions offered by a wildcard action."""

    kind: BoardActionKind
    tile: Optional[Tile] = None

    def execute(self, state: GameState) -> GameStateChange:
        return Composite([PrepareAction(self.kind, self.tile)])


# =============================================================================
# End of century scoring
# =============================================================================


def scoring_menu() -> PossibleActions:
    """Build the menu starting the end of century scoring."""
    return PossibleActions(message=SCORING_PHASE_BEGINS, actions=[PerformScoringPhase()])


@dataclass(frozen=True)
class PerformScoringPhase(GameAction):
    """Run one step of the end of century scoring.

    Each step queues the next one, so a host sees every step as a single
    choice menu. The last step either prepares the next century or ends the
    game by clearing the pending menu.
    """

    phase: ScoringPhase = ScoringPhase.INIT_SCORING
    followup: Optional[GameStateChange] = None

    def scoring_information(self, state: GameState) -> Optional[ScoringInformation]:
        """Compute what this step is about to award, if it awards points."""
        if self.phase.is_zone_scoring_phase:
            return compute_zone_scoring_information(self.phase, state)
        if self.phase is ScoringPhase.SCORE_INCOMPLETE_BUILDINGS:
            return compute_incomplete_building_scoring_information(state)
        if self.phase is ScoringPhase.SCORE_ACTIVE_CUBES:
            return compute_active_cubes_scoring_information(state)
        if self.phase is ScoringPhase.SCORE_BUILDINGS:
            return compute_buildings_scoring_information(state)
        return None

    def message(self, state: GameState) -> ScoringMessage:
        return ScoringMessage(self.phase, self.scoring_information(state))

    def execute(self, state: GameState) -> GameStateChange:
        result = Composite()
        completion: Optional[BuildingCompletion] = None

        if self.phase is ScoringPhase.INIT_SCORING:
            completion = self._release_neutral_and_leaders(state, result)
        elif self.phase.is_zone_scoring_phase:
            perform_zone_scoring(self.phase, state, result)
        elif self.phase is ScoringPhase.PREPARE_NEXT_CENTURY:
            for player_state in state.player_states:
                color = player_state.color
                for zone in InfluenceType:
                    nb_cubes = state.cubes_in_zone(zone, color)
                    if nb_cubes > 0:
                        result.add(MoveCubesChange(
                            nb_cubes,
                            InfluenceZoneDestination(zone, color),
                            PlayerReserve(color, False),
                        ))
            result.add(PrepareNextCentury())
        elif self.phase is not ScoringPhase.FINISH_GAME:
            information = self.scoring_information(state)
            for player_state in state.player_states:
                points = information.get_score(player_state.color)
                if points > 0:
                    result.add(ScorePoints(player_state.color, points))

        if self.phase is ScoringPhase.FINISH_GAME:
            result.add(QueuePossibleActions(None))
        elif self.phase is not ScoringPhase.PREPARE_NEXT_CENTURY:
            next_step = PerformScoringPhase(self.phase.next_phase(state.century))
            projected = result.apply(state)
            result.add(QueuePossibleActions(
                PossibleActions(message=next_step.message(projected), actions=[next_step])
            ))

        if self.followup is not None:
            result.add(self.followup)
        if completion is not None:
            return interject(completion, state.current_player.color, result)
        return result

    def _release_neutral_and_leaders(
        self, state: GameState, result: Composite
    ) -> Optional[BuildingCompletion]:
        """Withdraw the neutral architect and return every leader card."""
        completion = None
        for player_state in state.player_states:
            if player_state.leader_card is not LeaderCard.ECONOMIC:
                continue
            origin = None
            tile_state = state.find_tile_under_architect(PlayerColor.NEUTRAL)
            if tile_state is not None:
                completion = complete_building(state, player_state, tile_state)
                result.changes.extend(completion.changes)
                origin = TileArchitect(tile_state.tile, PlayerColor.NEUTRAL)
            elif player_state.is_holding_neutral_architect:
                origin = PlayerArchitect(player_state.color, True)
            if origin is not None:
                result.add(MoveArchitectChange(origin, OffboardNeutral()))

        for player_state in state.player_states:
            card = player_state.leader_card
            if card is not None:
                result.add(
                    MoveLeader(LeaderWithPlayer(card, player_state.color), LeaderOnBoard(card))
                )
        return completion
