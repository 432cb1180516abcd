"""Observation encoding for the Quebec RL environment.

Encodes a GameState into a flat numpy array suitable for neural network
input. Uses self-relative player encoding where the current player is
always index 0.
"""

from __future__ import annotations

import numpy as np
from typing import Optional

from core.constants import (
    PlayerColor,
    InfluenceType,
    LeaderCard,
    GamePhase,
    TILE_INFLUENCES,
)
from core.game_state import GameState
from engine.phase_machine import compute_phase

from .config import ObservationConfig, DEFAULT_OBS_CONFIG, DEFAULT_ACTION_CONFIG


class ObservationEncoder:
    """Encodes GameState into flat observation tensor.

    The observation is structured as follows:
    1. Tile features [NUM_TILES x TILE_FEATURE_DIM], in board order
    2. Player features [MAX_PLAYERS x PLAYER_FEATURE_DIM]
    3. Global state [GLOBAL_FEATURE_DIM]

    All features are normalized to the [0, 1] range. Players are reordered
    so the perspective player is always index 0, and ownership is encoded
    as self or other.
    """

    def __init__(self, config: ObservationConfig = DEFAULT_OBS_CONFIG):
        """Initialize the encoder with configuration.

        Args:
            config: Observation configuration defining tensor dimensions.
        """
        self.config = config
        self._leaders = list(LeaderCard)
        self._zones = list(InfluenceType)
        self._phases = list(GamePhase)

    @property
    def observation_dim(self) -> int:
        """Total dimension of the flat observation tensor."""
        return self.config.total_observation_dim

    def encode(self, state: GameState, perspective: Optional[PlayerColor] = None) -> np.ndarray:
        """Encode complete game state into flat observation tensor.

        Args:
            state: The GameState to encode.
            perspective: The player whose perspective to use. If None,
                uses the current player.

        Returns:
            Flat numpy array of shape (total_observation_dim,) with dtype float32.
        """
        if perspective is None:
            perspective = state.current_player.color

        obs = np.zeros(self.config.total_observation_dim, dtype=np.float32)

        offset = 0
        offset = self._encode_tiles(state, perspective, obs, offset)
        offset = self._encode_players(state, perspective, obs, offset)
        offset = self._encode_global(state, obs, offset)

        return obs

    def _ratio(self, value: float, maximum: float) -> float:
        return min(1.0, max(0.0, value / maximum))

    def _encode_tiles(
        self, state: GameState, perspective: PlayerColor, obs: np.ndarray, offset: int
    ) -> int:
        feature_dim = self.config.TILE_FEATURE_DIM
        for idx, tile_state in enumerate(state.tile_states[: self.config.NUM_TILES]):
            base = offset + idx * feature_dim
            i = 0

            # Influence and century (one-hot)
            obs[base + i + TILE_INFLUENCES.index(tile_state.tile.influence)] = 1.0
            i += self.config.INFLUENCES
            obs[base + i + tile_state.tile.century] = 1.0
            i += self.config.CENTURIES

            # Architect
            architect = tile_state.architect
            obs[base + i] = 1.0 if architect == perspective else 0.0
            obs[base + i + 1] = 1.0 if architect.is_normal and architect != perspective else 0.0
            obs[base + i + 2] = 1.0 if architect is PlayerColor.NEUTRAL else 0.0
            i += 3

            # Worker spots
            for spot_color in tile_state.spots:
                obs[base + i] = 1.0 if spot_color == perspective else 0.0
                other = spot_color.is_normal and spot_color != perspective
                obs[base + i + 1] = 1.0 if other else 0.0
                i += 2

            # Building and star token
            obs[base + i] = 1.0 if tile_state.building_facing else 0.0
            i += 1
            star_color = tile_state.star_token_color
            obs[base + i] = 1.0 if star_color == perspective else 0.0
            obs[base + i + 1] = 1.0 if star_color.is_normal and star_color != perspective else 0.0
            i += 2
            obs[base + i] = tile_state.nb_stars / 3.0

        return offset + self.config.tile_features_size

    def _encode_players(
        self, state: GameState, perspective: PlayerColor, obs: np.ndarray, offset: int
    ) -> int:
        feature_dim = self.config.PLAYER_FEATURE_DIM
        colors = [p.color for p in state.player_states]
        start = colors.index(perspective)
        ordered = state.player_states[start:] + state.player_states[:start]

        for rel_idx, player_state in enumerate(ordered[: self.config.MAX_PLAYERS]):
            base = offset + rel_idx * feature_dim
            i = 0
            obs[base + i] = 1.0
            i += 1
            obs[base + i] = self._ratio(player_state.nb_active_cubes, self.config.MAX_CUBES)
            obs[base + i + 1] = self._ratio(player_state.nb_passive_cubes, self.config.MAX_CUBES)
            i += 2
            obs[base + i] = self._ratio(player_state.score, self.config.MAX_SCORE)
            i += 1
            obs[base + i] = 1.0 if player_state.is_holding_architect else 0.0
            obs[base + i + 1] = 1.0 if player_state.is_holding_neutral_architect else 0.0
            i += 2
            if player_state.leader_card is not None:
                obs[base + i + self._leaders.index(player_state.leader_card)] = 1.0
            i += self.config.LEADERS
            for zone in self._zones:
                obs[base + i] = self._ratio(
                    state.cubes_in_zone(zone, player_state.color), self.config.MAX_CUBES
                )
                i += 1

        return offset + self.config.player_features_size

    def _encode_global(self, state: GameState, obs: np.ndarray, offset: int) -> int:
        base = offset
        i = 0
        obs[base + i + state.century] = 1.0
        i += self.config.CENTURIES
        obs[base + i] = self._ratio(state.turn_number, self.config.MAX_TURNS)
        i += 1
        for card in state.available_leader_cards:
            obs[base + i + self._leaders.index(card)] = 1.0
        i += self.config.LEADERS
        obs[base + i + self._phases.index(compute_phase(state))] = 1.0
        i += self.config.PHASES
        menu = state.possible_actions
        nb_actions = menu.nb_actions if menu is not None else 0
        obs[base + i] = self._ratio(nb_actions, DEFAULT_ACTION_CONFIG.total_actions)

        return offset + self.config.global_features_size
