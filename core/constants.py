"""Constants and enums for the Quebec rule engine."""

from __future__ import annotations

from enum import Enum


class PlayerColor(Enum):
    """Colors of players and architects.

    NONE marks an empty spot or a missing architect. NEUTRAL is the color
    of the neutral architect, which is never a player.
    """

    NONE = "none"
    BLACK = "black"
    WHITE = "white"
    ORANGE = "orange"
    GREEN = "green"
    PINK = "pink"
    NEUTRAL = "neutral"

    @property
    def is_normal(self) -> bool:
        """Whether this is the color of an actual player."""
        return self not in (PlayerColor.NONE, PlayerColor.NEUTRAL)

    @property
    def is_architect_color(self) -> bool:
        """Whether an architect can have this color."""
        return self is not PlayerColor.NONE


class InfluenceType(Enum):
    """Influence zones. The four first ones also color tiles."""

    RELIGIOUS = "religious"
    POLITIC = "politic"
    ECONOMIC = "economic"
    CULTURAL = "cultural"
    CITADEL = "citadel"

    @property
    def index(self) -> int:
        return list(InfluenceType).index(self)


class LeaderCard(Enum):
    """Leader cards, each granting a passive ability to its holder."""

    RELIGIOUS = "religious"
    POLITIC = "politic"
    ECONOMIC = "economic"
    CULTURAL = "cultural"
    CITADEL = "citadel"


class ScoringPhase(Enum):
    """Steps of the scoring sequence run at the end of every century.

    Declaration order matters: the sequence advances in this order, except
    that INIT_SCORING leads to SCORE_ZONE_1 and SCORE_ZONE_5 leads to
    PREPARE_NEXT_CENTURY before the last century.
    """

    SCORE_ZONE_1 = "score_zone_1"
    SCORE_ZONE_2 = "score_zone_2"
    SCORE_ZONE_3 = "score_zone_3"
    SCORE_ZONE_4 = "score_zone_4"
    SCORE_ZONE_5 = "score_zone_5"
    SCORE_INCOMPLETE_BUILDINGS = "score_incomplete_buildings"
    SCORE_ACTIVE_CUBES = "score_active_cubes"
    SCORE_BUILDINGS = "score_buildings"
    FINISH_GAME = "finish_game"
    PREPARE_NEXT_CENTURY = "prepare_next_century"
    INIT_SCORING = "init_scoring"

    @property
    def is_zone_scoring_phase(self) -> bool:
        return self in ZONE_SCORING_PHASES

    @property
    def scoring_zone_index(self) -> int:
        """Index of the zone scored by this phase, or -1 for other phases."""
        if self.is_zone_scoring_phase:
            return ZONE_SCORING_PHASES.index(self)
        return -1

    def next_phase(self, century: int) -> ScoringPhase:
        """Return the phase following this one during the given century.

        Raises:
            ValueError: If this phase terminates the scoring sequence.
        """
        if self in (ScoringPhase.FINISH_GAME, ScoringPhase.PREPARE_NEXT_CENTURY):
            raise ValueError(f"{self.value} has no next scoring phase")
        if self is ScoringPhase.INIT_SCORING:
            return ScoringPhase.SCORE_ZONE_1
        if self is ScoringPhase.SCORE_ZONE_5 and century < LAST_CENTURY:
            return ScoringPhase.PREPARE_NEXT_CENTURY
        phases = list(ScoringPhase)
        return phases[phases.index(self) + 1]


class GamePhase(Enum):
    """Kind of decision pending in a game state."""

    TURN = "turn"
    OUT_OF_TURN = "out_of_turn"
    SCORING = "scoring"
    GAME_OVER = "game_over"


class BoardActionKind(Enum):
    """The sixteen actions printed on the board, four per influence color."""

    PURPLE_ANY = "purple_any"
    PURPLE_ONE_TO_CITADEL_ONE_TO_ANY = "purple_one_to_citadel_one_to_any"
    PURPLE_ONE_POINT_ONE_TO_ANY_ACTIVATE_ONE = "purple_one_point_one_to_any_activate_one"
    PURPLE_ONE_TO_ANY_MOVE_TWO = "purple_one_to_any_move_two"
    RED_ANY = "red_any"
    RED_TWO_TO_PURPLE_OR_YELLOW = "red_two_to_purple_or_yellow"
    RED_TWO_TO_RED_OR_BLUE = "red_two_to_red_or_blue"
    RED_TWO_TO_CITADEL = "red_two_to_citadel"
    YELLOW_ANY = "yellow_any"
    YELLOW_MOVE_ARCHITECT = "yellow_move_architect"
    YELLOW_FILL_ONE_SPOT = "yellow_fill_one_spot"
    YELLOW_ACTIVATE_THREE = "yellow_activate_three"
    BLUE_ANY = "blue_any"
    BLUE_SCORE_FOR_CUBES_IN_HAND = "blue_score_for_cubes_in_hand"
    BLUE_SCORE_FOR_ZONES = "blue_score_for_zones"
    BLUE_ADD_STAR = "blue_add_star"


NORMAL_COLORS = (
    PlayerColor.BLACK,
    PlayerColor.WHITE,
    PlayerColor.ORANGE,
    PlayerColor.GREEN,
    PlayerColor.PINK,
)

# Influence types that tiles and board actions can have
TILE_INFLUENCES = (
    InfluenceType.RELIGIOUS,
    InfluenceType.POLITIC,
    InfluenceType.ECONOMIC,
    InfluenceType.CULTURAL,
)

ZONE_SCORING_PHASES = (
    ScoringPhase.SCORE_ZONE_1,
    ScoringPhase.SCORE_ZONE_2,
    ScoringPhase.SCORE_ZONE_3,
    ScoringPhase.SCORE_ZONE_4,
    ScoringPhase.SCORE_ZONE_5,
)

# Player limits
MIN_PLAYERS = 2
MAX_PLAYERS = 5

# Centuries are numbered 0 to 3
NB_CENTURIES = 4
LAST_CENTURY = NB_CENTURIES - 1

# Cubes
CUBES_FOR_N_PLAYERS = {2: 25, 3: 25, 4: 22, 5: 20}
INITIAL_ACTIVE_CUBES = 3
MAX_CUBES_TO_ACTIVATE = 3
MAX_CASCADE = 5

# Tiles
NB_SPOTS = 3
MAX_STARS = 3
BOARD_COLUMNS = 18
BOARD_LINES = 8

# Number of tiles of each influence for centuries 0 to 3
TILES_PER_CENTURY = {
    InfluenceType.RELIGIOUS: (4, 2, 3, 2),
    InfluenceType.POLITIC: (2, 4, 2, 3),
    InfluenceType.ECONOMIC: (3, 2, 4, 2),
    InfluenceType.CULTURAL: (2, 3, 2, 4),
}

# Leader cards
THREE_PLAYERS_LEADERS = (
    LeaderCard.RELIGIOUS,
    LeaderCard.POLITIC,
    LeaderCard.ECONOMIC,
    LeaderCard.CULTURAL,
)
FOUR_FIVE_PLAYERS_LEADERS = (
    LeaderCard.RELIGIOUS,
    LeaderCard.POLITIC,
    LeaderCard.ECONOMIC,
    LeaderCard.CULTURAL,
    LeaderCard.CITADEL,
)

# Rows: 2-3 players, 4-5 players. Columns: 1, 2, 3 stars.
CULTURAL_LEADER_POINTS = (
    (1, 2, 3),
    (2, 3, 4),
)


def leader_cards_for(num_players: int) -> tuple[LeaderCard, ...]:
    """Return the leader cards available in a game with num_players."""
    if num_players == 3:
        return THREE_PLAYERS_LEADERS
    return FOUR_FIVE_PLAYERS_LEADERS


def points_for_cultural_leader(num_players: int, nb_stars: int) -> int:
    """Points earned by the cultural leader when placing a star token.

    Raises:
        ValueError: If num_players or nb_stars is out of range.
    """
    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS or not 0 <= nb_stars <= MAX_STARS:
        raise ValueError(
            f"Invalid cultural leader query: {num_players} players, {nb_stars} stars"
        )
    if nb_stars == 0:
        return 0
    return CULTURAL_LEADER_POINTS[(num_players - 2) // 2][nb_stars - 1]


def scoring_zone_for_century(century: int, index: int) -> InfluenceType:
    """Return the zone scored at position index (0-4) during century.

    The four colored zones rotate by one every century and the citadel is
    always scored last.
    """
    if not 0 <= index < len(ZONE_SCORING_PHASES):
        raise ValueError(f"Invalid scoring zone index: {index}")
    if index == len(TILE_INFLUENCES):
        return InfluenceType.CITADEL
    return TILE_INFLUENCES[(century + index) % len(TILE_INFLUENCES)]
