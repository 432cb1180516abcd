"""Tests for the core data models.

Tests cover:
1. Constants and helper tables
2. Tiles, decks and shufflers
3. Board topology
4. Player and tile state
5. GameState access, cloning and validation
"""

import pytest

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    ScoringPhase,
    BoardActionKind,
    TILE_INFLUENCES,
    NB_SPOTS,
    leader_cards_for,
    points_for_cultural_leader,
    scoring_zone_for_century,
)
from core.components import Tile, TileDeck
from core.shuffler import CannedShuffler, RandomShuffler
from core.board import BOARD, Location, TileState
from core.player import Player, PlayerState
from core.game_state import GameState
from engine.setup import initialize_game


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def game_state() -> GameState:
    """Create a fresh 4-player game."""
    return initialize_game(num_players=4)


@pytest.fixture
def tile_state() -> TileState:
    """Create a century 0 tile at a one-cube location."""
    return TileState(tile=Tile(InfluenceType.CULTURAL, 0, 0), location=Location(2, 1))


# =============================================================================
# Constants
# =============================================================================


class TestConstants:
    """Tests for enums and rule tables."""

    def test_normal_colors(self):
        """Test that only real player colors are normal."""
        assert PlayerColor.BLACK.is_normal
        assert not PlayerColor.NONE.is_normal
        assert not PlayerColor.NEUTRAL.is_normal
        assert PlayerColor.NEUTRAL.is_architect_color
        assert not PlayerColor.NONE.is_architect_color

    def test_scoring_zones_first_century(self):
        """Test zone order during the first century."""
        zones = [scoring_zone_for_century(0, i) for i in range(5)]
        assert zones == [
            InfluenceType.RELIGIOUS,
            InfluenceType.POLITIC,
            InfluenceType.ECONOMIC,
            InfluenceType.CULTURAL,
            InfluenceType.CITADEL,
        ]

    def test_scoring_zones_rotate(self):
        """Test that colored zones rotate and the citadel stays last."""
        zones = [scoring_zone_for_century(1, i) for i in range(5)]
        assert zones == [
            InfluenceType.POLITIC,
            InfluenceType.ECONOMIC,
            InfluenceType.CULTURAL,
            InfluenceType.RELIGIOUS,
            InfluenceType.CITADEL,
        ]

    def test_scoring_zone_invalid_index(self):
        with pytest.raises(ValueError):
            scoring_zone_for_century(0, 5)

    def test_next_scoring_phase(self):
        """Test the scoring sequence transitions."""
        assert ScoringPhase.INIT_SCORING.next_phase(0) == ScoringPhase.SCORE_ZONE_1
        assert ScoringPhase.SCORE_ZONE_1.next_phase(0) == ScoringPhase.SCORE_ZONE_2
        assert ScoringPhase.SCORE_ZONE_5.next_phase(0) == ScoringPhase.PREPARE_NEXT_CENTURY
        assert ScoringPhase.SCORE_ZONE_5.next_phase(3) == ScoringPhase.SCORE_INCOMPLETE_BUILDINGS
        assert ScoringPhase.SCORE_BUILDINGS.next_phase(3) == ScoringPhase.FINISH_GAME

    def test_terminal_scoring_phases_have_no_next(self):
        with pytest.raises(ValueError):
            ScoringPhase.FINISH_GAME.next_phase(3)
        with pytest.raises(ValueError):
            ScoringPhase.PREPARE_NEXT_CENTURY.next_phase(0)

    def test_scoring_zone_index(self):
        assert ScoringPhase.SCORE_ZONE_3.scoring_zone_index == 2
        assert ScoringPhase.SCORE_BUILDINGS.scoring_zone_index == -1

    def test_cultural_leader_points(self):
        """Test the cultural leader table for small and large games."""
        assert points_for_cultural_leader(2, 1) == 1
        assert points_for_cultural_leader(3, 3) == 3
        assert points_for_cultural_leader(4, 3) == 4
        assert points_for_cultural_leader(5, 2) == 3
        assert points_for_cultural_leader(4, 0) == 0

    def test_cultural_leader_points_out_of_range(self):
        with pytest.raises(ValueError):
            points_for_cultural_leader(6, 1)
        with pytest.raises(ValueError):
            points_for_cultural_leader(4, 4)

    def test_leader_cards_for_player_counts(self):
        """Test that three-player games leave the citadel leader out."""
        assert LeaderCard.CITADEL not in leader_cards_for(3)
        assert len(leader_cards_for(3)) == 4
        assert len(leader_cards_for(2)) == 5
        assert len(leader_cards_for(5)) == 5


# =============================================================================
# Tiles and shufflers
# =============================================================================


class TestTileDeck:
    """Tests for TileDeck and shufflers."""

    def test_deck_sizes(self):
        """Test that every deck holds eleven tiles."""
        deck = TileDeck(CannedShuffler())
        for influence in TILE_INFLUENCES:
            assert deck.remaining(influence) == 11

    def test_draw_removes_tile(self):
        deck = TileDeck(CannedShuffler())
        tile = deck.draw(InfluenceType.POLITIC)
        assert tile.influence == InfluenceType.POLITIC
        assert deck.remaining(InfluenceType.POLITIC) == 10

    def test_draw_from_empty_deck(self):
        deck = TileDeck(CannedShuffler())
        for _ in range(11):
            deck.draw(InfluenceType.RELIGIOUS)
        with pytest.raises(ValueError):
            deck.draw(InfluenceType.RELIGIOUS)

    def test_no_citadel_deck(self):
        deck = TileDeck(CannedShuffler())
        with pytest.raises(ValueError):
            deck.draw(InfluenceType.CITADEL)

    def test_canned_shuffler_is_deterministic(self):
        """Test that the canned shuffler always gives the same permutation."""
        first = list(range(10))
        second = list(range(10))
        CannedShuffler().shuffle(first, 2)
        CannedShuffler().shuffle(second, 2)
        assert first == second
        assert sorted(first) == list(range(10))

    def test_random_shuffler_same_seed(self):
        first = list(range(20))
        second = list(range(20))
        RandomShuffler(42).shuffle(first, 0)
        RandomShuffler(42).shuffle(second, 0)
        assert first == second
        assert sorted(first) == list(range(20))


# =============================================================================
# Board
# =============================================================================


class TestBoard:
    """Tests for the board topology."""

    def test_tile_location_count(self):
        assert len(BOARD.tile_locations) == 44

    def test_board_actions(self):
        """Test that every board action is printed exactly once."""
        kinds = [info.kind for info in BOARD.board_actions]
        assert len(kinds) == 16
        assert set(kinds) == set(BoardActionKind)

    def test_tiles_per_influence(self):
        """Test that locations match the tiles of each deck."""
        for influence in TILE_INFLUENCES:
            nb_locations = sum(
                1
                for location in BOARD.tile_locations
                if BOARD.action_for_location(location).influence == influence
            )
            assert nb_locations == 11

    def test_board_is_symmetric(self):
        """Test that mirrored locations hold mirrored actions."""
        for location in BOARD.tile_locations:
            mirrored = location.mirror()
            assert BOARD.is_tile_location(mirrored)
            index = BOARD.tile_actions[location]
            assert BOARD.tile_actions[mirrored] == 15 - index

    def test_cubes_per_spot(self):
        assert BOARD.cubes_per_spot(Location(2, 1)) == 1
        assert BOARD.cubes_per_spot(Location(6, 1)) == 3
        assert BOARD.cubes_per_spot(Location(3, 2)) == 3

    def test_no_tile_at_location(self):
        assert BOARD.action_for_location(Location(0, 0)) is None
        with pytest.raises(ValueError):
            BOARD.cubes_per_spot(Location(0, 0))

    def test_neighbors(self):
        neighbors = BOARD.neighbors(Location(2, 1))
        assert Location(4, 1) in neighbors
        assert Location(3, 2) in neighbors
        assert Location(8, 7) not in neighbors

    def test_neighbors_are_mutual(self):
        for location in BOARD.tile_locations:
            for neighbor in BOARD.neighbors(location):
                assert location in BOARD.neighbors(neighbor)


# =============================================================================
# Player and tile state
# =============================================================================


class TestPlayerState:
    """Tests for Player and PlayerState."""

    def test_player_needs_normal_color(self):
        with pytest.raises(ValueError):
            Player(PlayerColor.NEUTRAL)

    def test_add_and_remove_cubes(self):
        player_state = PlayerState(Player(PlayerColor.BLACK), nb_active_cubes=2)
        player_state.add_cubes(3, active=False)
        player_state.remove_cubes(2, active=True)
        assert player_state.nb_active_cubes == 0
        assert player_state.nb_passive_cubes == 3
        assert player_state.nb_total_cubes == 3

    def test_remove_too_many_cubes(self):
        player_state = PlayerState(Player(PlayerColor.BLACK), nb_active_cubes=1)
        with pytest.raises(ValueError):
            player_state.remove_cubes(2, active=True)

    def test_negative_score(self):
        player_state = PlayerState(Player(PlayerColor.BLACK))
        with pytest.raises(ValueError):
            player_state.add_score(-1)

    def test_owns_neutral_architect_with_economic_leader(self):
        """Test that the economic leader controls the neutral architect."""
        player_state = PlayerState(Player(PlayerColor.WHITE))
        assert player_state.owns_architect(PlayerColor.WHITE)
        assert not player_state.owns_architect(PlayerColor.NEUTRAL)
        player_state.leader_card = LeaderCard.ECONOMIC
        assert player_state.owns_architect(PlayerColor.NEUTRAL)


class TestTileState:
    """Tests for TileState."""

    def test_initial_tile(self, tile_state):
        assert tile_state.spots == [PlayerColor.NONE] * NB_SPOTS
        assert tile_state.first_empty_spot() == 0
        assert tile_state.occupied_spots() == []
        assert tile_state.cubes_per_spot == 1
        assert tile_state.board_action.kind == BoardActionKind.BLUE_ANY

    def test_first_empty_spot(self, tile_state):
        tile_state.set_color_in_spot(0, PlayerColor.BLACK)
        tile_state.set_color_in_spot(1, PlayerColor.WHITE)
        assert tile_state.first_empty_spot() == 2
        tile_state.set_color_in_spot(2, PlayerColor.BLACK)
        assert tile_state.first_empty_spot() is None
        assert tile_state.occupied_spots() == [0, 1, 2]

    def test_neutral_cubes_rejected(self, tile_state):
        with pytest.raises(ValueError):
            tile_state.set_color_in_spot(0, PlayerColor.NEUTRAL)

    def test_available_for_architect(self, tile_state):
        """Test availability by century, architect and building side."""
        assert tile_state.is_available_for_architect(0)
        assert not tile_state.is_available_for_architect(1)
        tile_state.architect = PlayerColor.NEUTRAL
        assert not tile_state.is_available_for_architect(0)
        tile_state.architect = PlayerColor.NONE
        tile_state.building_facing = True
        assert not tile_state.is_available_for_architect(0)

    def test_star_token_range(self, tile_state):
        tile_state.set_star_token(PlayerColor.BLACK, 3)
        assert tile_state.nb_stars == 3
        with pytest.raises(ValueError):
            tile_state.set_star_token(PlayerColor.BLACK, 4)
        with pytest.raises(ValueError):
            tile_state.set_star_token(PlayerColor.NONE, 1)


# =============================================================================
# Game state
# =============================================================================


class TestGameState:
    """Tests for GameState."""

    def test_initial_state_is_valid(self, game_state):
        assert game_state.validate() == []

    def test_current_player(self, game_state):
        assert game_state.current_player.color == PlayerColor.BLACK

    def test_next_player_wraps(self, game_state):
        for _ in range(4):
            game_state.next_player()
        assert game_state.current_player.color == PlayerColor.BLACK
        game_state.next_player()
        assert game_state.current_player.color == PlayerColor.WHITE

    def test_set_current_player(self, game_state):
        game_state.set_current_player(PlayerColor.GREEN)
        assert game_state.current_player.color == PlayerColor.GREEN
        with pytest.raises(ValueError):
            game_state.set_current_player(PlayerColor.PINK)

    def test_total_cubes(self, game_state):
        """Test that cubes are counted wherever they are."""
        assert game_state.total_cubes_for(PlayerColor.BLACK) == 22
        tile_state = game_state.tile_states[0]
        game_state.player_state(PlayerColor.BLACK).remove_cubes(
            tile_state.cubes_per_spot, active=False
        )
        tile_state.set_color_in_spot(0, PlayerColor.BLACK)
        game_state.player_state(PlayerColor.BLACK).remove_cubes(2, active=False)
        game_state.set_cubes_in_zone(InfluenceType.CITADEL, PlayerColor.BLACK, 2)
        assert game_state.total_cubes_for(PlayerColor.BLACK) == 22
        assert game_state.validate() == []

    def test_validate_detects_lost_cubes(self, game_state):
        game_state.player_state(PlayerColor.WHITE).remove_cubes(1, active=True)
        errors = game_state.validate()
        assert len(errors) == 1
        assert "white" in errors[0]

    def test_validate_detects_duplicate_leader(self, game_state):
        game_state.player_state(PlayerColor.BLACK).leader_card = LeaderCard.POLITIC
        assert any("leader" in error for error in game_state.validate())

    def test_clone_is_independent(self, game_state):
        """Test that mutating a clone leaves the original untouched."""
        clone = game_state.clone()
        clone.player_state(PlayerColor.BLACK).add_score(5)
        clone.tile_states[0].set_color_in_spot(0, PlayerColor.BLACK)
        clone.available_leader_cards.pop()
        assert game_state.player_state(PlayerColor.BLACK).score == 0
        assert game_state.tile_states[0].spots[0] == PlayerColor.NONE
        assert len(game_state.available_leader_cards) == 5

    def test_state_hash(self, game_state):
        clone = game_state.clone()
        assert clone.state_hash() == game_state.state_hash()
        clone.player_state(PlayerColor.BLACK).add_score(1)
        assert clone.state_hash() != game_state.state_hash()

    def test_find_tile(self, game_state):
        tile_state = game_state.tile_states[3]
        assert game_state.find_tile_state(tile_state.tile) is tile_state
        assert game_state.find_tile_at_location(tile_state.location) is tile_state
        assert game_state.find_tile_under_architect(PlayerColor.BLACK) is None

    def test_unknown_tile(self, game_state):
        with pytest.raises(ValueError):
            game_state.find_tile_state(Tile(InfluenceType.RELIGIOUS, 0, 99))

    def test_to_dict(self, game_state):
        data = game_state.to_dict()
        assert data["century"] == 0
        assert len(data["players"]) == 4
        assert len(data["tiles"]) == 44
        assert data["nb_possible_actions"] == game_state.possible_actions.nb_actions
