"""Pydantic models shared by every layer of waiverwire."""

from .games import GameStatusRecord, ProjectionRecord
from .league import LeagueRef, LeagueSource
from .player import (
    LeagueRosterSnapshot,
    PlayerIdentity,
    Provider,
    ResolutionStats,
    ResolvedRosterSet,
    RosterEntry,
)

__all__ = [
    "GameStatusRecord",
    "LeagueRef",
    "LeagueRosterSnapshot",
    "LeagueSource",
    "PlayerIdentity",
    "ProjectionRecord",
    "Provider",
    "ResolutionStats",
    "ResolvedRosterSet",
    "RosterEntry",
]
