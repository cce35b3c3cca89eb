"""Configuration helpers for positions, team codes and runtime settings."""

from .positions import (
    NFL_POSITIONS,
    PositionRules,
    canonical_position,
    iter_positions,
    position_priority,
)
from .settings import Settings, load_settings
from .teams import canonical_team, espn_team

__all__ = [
    "NFL_POSITIONS",
    "PositionRules",
    "Settings",
    "canonical_position",
    "canonical_team",
    "espn_team",
    "iter_positions",
    "load_settings",
    "position_priority",
]
