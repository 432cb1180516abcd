"""Tests for building completion and out-of-turn decisions.

Tests cover:
1. complete_building for each kind of owner
2. interject when nobody or someone holds the politic leader
3. Resuming the interrupted turn after the out-of-turn choice
"""

import pytest

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    GamePhase,
    ScoringPhase,
    TILE_INFLUENCES,
)
from core.game_state import GameState
from engine.actions import EmptyTileToZone, MoveArchitect, PerformScoringPhase
from engine.destinations import InfluenceZoneDestination, TileSpot
from engine.interjection import complete_building, interject
from engine.messages import SelectWhereToEmptyTile
from engine.phase_machine import compute_phase
from engine.setup import initialize_game
from engine.state_changes import (
    Composite,
    FlipTile,
    MoveCubes,
    NextPlayer,
    QueuePossibleActions,
    ScorePoints,
    SetPlayer,
    flatten,
)


BLACK = PlayerColor.BLACK
WHITE = PlayerColor.WHITE
ORANGE = PlayerColor.ORANGE


# =============================================================================
# Fixtures and helpers
# =============================================================================


def put_workers(state, tile_state, spot, color):
    state.player_state(color).remove_cubes(tile_state.cubes_per_spot, active=False)
    tile_state.set_color_in_spot(spot, color)


def give_leader(state, color, card):
    state.available_leader_cards.remove(card)
    state.player_state(color).leader_card = card


@pytest.fixture
def game_state() -> GameState:
    """Create a 3-player game where BLACK's architect stands on a tile.

    WHITE and ORANGE have workers on the tile.
    """
    state = initialize_game(num_players=3)
    tile_state = next(t for t in state.tile_states if t.tile.century == 0)
    tile_state.architect = BLACK
    state.player_state(BLACK).is_holding_architect = False
    put_workers(state, tile_state, 0, WHITE)
    put_workers(state, tile_state, 1, ORANGE)
    return state


def building(state):
    return state.find_tile_under_architect(BLACK)


def destination_tile(state):
    return next(t for t in state.tile_states if t.is_available_for_architect(0)).tile


# =============================================================================
# complete_building
# =============================================================================


class TestCompleteBuilding:
    """Tests for complete_building."""

    def test_cubes_go_to_tile_zone(self, game_state):
        tile_state = building(game_state)
        tile = tile_state.tile
        nb_cubes = tile_state.cubes_per_spot
        completion = complete_building(game_state, game_state.current_player, tile_state)

        assert not completion.needs_interjection
        assert completion.nb_filled_spots == 2
        assert completion.changes == [
            MoveCubes(nb_cubes, TileSpot(tile, WHITE, 0),
                      InfluenceZoneDestination(tile.influence, WHITE)),
            MoveCubes(nb_cubes, TileSpot(tile, ORANGE, 1),
                      InfluenceZoneDestination(tile.influence, ORANGE)),
            FlipTile(tile, BLACK, 2),
        ]

    def test_empty_tile_has_no_star(self):
        state = initialize_game(num_players=3)
        tile_state = state.tile_states[0]
        completion = complete_building(state, state.current_player, tile_state)
        assert completion.changes == [FlipTile(tile_state.tile, PlayerColor.NONE, 0)]

    def test_politic_leader_keeps_cubes(self, game_state):
        give_leader(game_state, WHITE, LeaderCard.POLITIC)
        tile_state = building(game_state)
        completion = complete_building(game_state, game_state.current_player, tile_state)

        assert completion.needs_interjection
        assert completion.out_of_turn_player == WHITE
        moved = [c.color for c in completion.changes if isinstance(c, MoveCubes)]
        assert moved == [ORANGE]
        assert FlipTile(tile_state.tile, BLACK, 2) in completion.changes

    def test_cultural_leader_points(self, game_state):
        give_leader(game_state, BLACK, LeaderCard.CULTURAL)
        tile_state = building(game_state)
        completion = complete_building(game_state, game_state.current_player, tile_state)
        assert completion.changes[-1] == ScorePoints(BLACK, 2)


# =============================================================================
# interject
# =============================================================================


class TestInterject:
    """Tests for interject."""

    def test_no_interjection_returns_turn(self, game_state):
        tile_state = building(game_state)
        completion = complete_building(game_state, game_state.current_player, tile_state)
        turn = Composite(list(completion.changes) + [NextPlayer()])
        assert interject(completion, BLACK, turn) is turn

    def test_interjection_menu(self, game_state):
        give_leader(game_state, WHITE, LeaderCard.POLITIC)
        tile_state = building(game_state)
        completion = complete_building(game_state, game_state.current_player, tile_state)
        turn = Composite(list(completion.changes) + [NextPlayer()])

        change = interject(completion, BLACK, turn)
        assert isinstance(change, Composite)
        assert change.changes[0] == SetPlayer(WHITE)
        queue = change.changes[1]
        assert isinstance(queue, QueuePossibleActions)

        menu = queue.possible_actions
        assert menu.message == SelectWhereToEmptyTile(WHITE)
        assert [a.zone for a in menu.all_actions()] == list(TILE_INFLUENCES)
        assert all(isinstance(a, EmptyTileToZone) for a in menu.all_actions())
        assert menu.continuation.changes[0] == SetPlayer(BLACK)
        assert menu.continuation.changes[1:] == turn.changes


# =============================================================================
# Full out-of-turn flow
# =============================================================================


class TestOutOfTurnFlow:
    """Tests for an architect move interrupted by the politic leader's holder."""

    def test_politic_holder_chooses_zone(self, game_state):
        """Test that the interrupted turn resumes once the zone is chosen."""
        give_leader(game_state, WHITE, LeaderCard.POLITIC)
        tile_state = building(game_state)
        tile = tile_state.tile
        nb_cubes = tile_state.cubes_per_spot
        destination = destination_tile(game_state)

        state = MoveArchitect(destination).execute(game_state).apply(game_state)
        assert state.current_player.color == WHITE
        assert compute_phase(state) == GamePhase.OUT_OF_TURN
        assert state.turn_number == game_state.turn_number
        # Nothing of the turn has happened yet
        assert state.find_tile_state(tile).spots[:2] == [WHITE, ORANGE]
        assert state.find_tile_state(destination).architect == PlayerColor.NONE

        menu = state.possible_actions
        assert menu.nb_actions == 4
        index = list(TILE_INFLUENCES).index(InfluenceType.CULTURAL)
        change = menu.execute(index, state)

        changes = flatten(change)
        next_players = [i for i, c in enumerate(changes) if isinstance(c, NextPlayer)]
        assert len(next_players) == 1
        assert changes.index(SetPlayer(BLACK)) < next_players[0]

        final = change.apply(state)
        assert final.cubes_in_zone(InfluenceType.CULTURAL, WHITE) == nb_cubes
        assert final.cubes_in_zone(tile.influence, ORANGE) == nb_cubes
        built = final.find_tile_state(tile)
        assert built.building_facing
        assert built.star_token_color == BLACK
        assert built.nb_stars == 2
        assert built.spots == [PlayerColor.NONE] * 3
        assert final.find_tile_state(destination).architect == BLACK
        # BLACK's turn is over: the player after BLACK plays next
        assert final.current_player.color == WHITE
        assert final.turn_number == game_state.turn_number + 1
        assert compute_phase(final) == GamePhase.TURN
        assert final.validate() == []

    def test_acting_player_holds_politic_leader(self, game_state):
        give_leader(game_state, BLACK, LeaderCard.POLITIC)
        tile_state = building(game_state)
        put_workers(game_state, tile_state, 2, BLACK)

        state = MoveArchitect(destination_tile(game_state)).execute(game_state).apply(game_state)
        assert state.current_player.color == BLACK
        assert compute_phase(state) == GamePhase.OUT_OF_TURN

        final = state.possible_actions.execute(0, state).apply(state)
        assert final.cubes_in_zone(TILE_INFLUENCES[0], BLACK) == tile_state.cubes_per_spot
        assert final.current_player.color == WHITE
        assert final.validate() == []

    def test_neutral_building_completed_during_scoring(self):
        """Test that releasing the neutral architect can also interject."""
        state = initialize_game(num_players=3)
        tile_state = next(t for t in state.tile_states if t.tile.century == 0)
        tile_state.architect = PlayerColor.NEUTRAL
        give_leader(state, BLACK, LeaderCard.ECONOMIC)
        give_leader(state, ORANGE, LeaderCard.POLITIC)
        put_workers(state, tile_state, 0, ORANGE)

        change = PerformScoringPhase(ScoringPhase.INIT_SCORING).execute(state)
        out_of_turn = change.apply(state)
        assert out_of_turn.current_player.color == ORANGE
        assert compute_phase(out_of_turn) == GamePhase.OUT_OF_TURN

        final = out_of_turn.possible_actions.execute(0, out_of_turn).apply(out_of_turn)
        assert final.current_player.color == BLACK
        assert compute_phase(final) == GamePhase.SCORING
        assert final.find_tile_under_architect(PlayerColor.NEUTRAL) is None
        assert sorted(c.value for c in final.available_leader_cards) == sorted(
            c.value for c in LeaderCard if c is not LeaderCard.CITADEL
        )
        assert final.validate() == []
