"""Canonical player and roster models shared across identity and availability layers."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Provider(str, Enum):
    """ID space a roster snapshot is expressed in."""

    NATIVE = "native"
    FOREIGN = "foreign"


class PlayerIdentity(BaseModel):
    """One real-world athlete keyed by the native (Sleeper) player ID."""

    native_id: str = Field(..., min_length=1)
    foreign_id: Optional[str] = None
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    team: Optional[str] = None
    status: Optional[str] = None
    search_rank: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class RosterEntry(BaseModel):
    """Raw occupied roster slot, carrying a native ID or a foreign ID plus metadata."""

    native_id: Optional[str] = None
    foreign_id: Optional[str] = None
    full_name: Optional[str] = None
    team: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class LeagueRosterSnapshot(BaseModel):
    provider: Provider
    league_id: str = ""
    entries: Tuple[RosterEntry, ...] = ()

    model_config = ConfigDict(frozen=True)


class ResolutionStats(BaseModel):
    """Diagnostic tally of how foreign roster entries were resolved."""

    canonical_hits: int = 0
    fallback_hits: int = 0
    misses: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> int:
        return self.canonical_hits + self.fallback_hits + self.misses

    def __add__(self, other: "ResolutionStats") -> "ResolutionStats":
        return ResolutionStats(
            canonical_hits=self.canonical_hits + other.canonical_hits,
            fallback_hits=self.fallback_hits + other.fallback_hits,
            misses=self.misses + other.misses,
        )


class ResolvedRosterSet(BaseModel):
    """Rostered players in native-ID space plus the foreign IDs observed while resolving."""

    native_ids: frozenset[str] = Field(default_factory=frozenset)
    foreign_ids: frozenset[str] = Field(default_factory=frozenset)
    stats: ResolutionStats = Field(default_factory=ResolutionStats)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> "ResolvedRosterSet":
        return cls()

    def merge(self, other: "ResolvedRosterSet") -> "ResolvedRosterSet":
        return ResolvedRosterSet(
            native_ids=self.native_ids | other.native_ids,
            foreign_ids=self.foreign_ids | other.foreign_ids,
            stats=self.stats + other.stats,
        )
