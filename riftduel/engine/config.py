"""
Match Configuration

Rules constants, opponent pacing and logging for one match.
"""

from dataclasses import dataclass, fields
from typing import Optional
import os

from .types import MAX_BOARD_SIZE, MAX_HAND_SIZE, MAX_MANA, STARTING_HP


@dataclass
class GameConfig:
    """Configuration for a match."""

    # Rules
    starting_hp: int = STARTING_HP
    max_hand_size: int = MAX_HAND_SIZE
    max_board_size: int = MAX_BOARD_SIZE
    max_mana: int = MAX_MANA

    # Opening hands
    player_opening_draw: int = 3
    opponent_opening_draw: int = 4

    # The human's first turn skips the start-of-turn sequence, so it is
    # given its crystal up front.
    player_starting_mana: int = 1
    opponent_starting_mana: int = 0

    # Opponent pacing (seconds)
    opponent_think_delay: float = 1.0
    opponent_action_delay: float = 0.5

    # Death sweep recursion limit
    max_resolution_depth: int = 32

    seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides) -> 'GameConfig':
        """Defaults, then RIFTDUEL_* environment variables, then overrides."""
        values = {}
        env_map = {
            'seed': ('RIFTDUEL_SEED', int),
            'opponent_think_delay': ('RIFTDUEL_THINK_DELAY', float),
            'opponent_action_delay': ('RIFTDUEL_ACTION_DELAY', float),
            'log_level': ('RIFTDUEL_LOG_LEVEL', str),
        }
        for name, (env_var, cast) in env_map.items():
            raw = os.environ.get(env_var)
            if raw:
                values[name] = cast(raw)
        values.update(overrides)
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config fields: {sorted(unknown)}")
        return cls(**values)

    @classmethod
    def instant(cls, **overrides) -> 'GameConfig':
        """Config with no pacing delays, for tests and simulations."""
        overrides.setdefault('opponent_think_delay', 0.0)
        overrides.setdefault('opponent_action_delay', 0.0)
        return cls(**overrides)
