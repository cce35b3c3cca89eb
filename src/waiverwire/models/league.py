"""Tracked league references."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import Provider


class LeagueSource(str, Enum):
    SLEEPER = "sleeper"
    ESPN = "espn"

    @property
    def provider(self) -> Provider:
        return Provider.NATIVE if self is LeagueSource.SLEEPER else Provider.FOREIGN


class LeagueRef(BaseModel):
    source: LeagueSource
    league_id: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: str) -> "LeagueRef":
        """Parse ``"sleeper:123"`` / ``"espn:456"`` into a reference."""

        if ":" not in value:
            raise ValueError(f"league must look like 'SOURCE:ID', got {value!r}")
        source, league_id = value.split(":", 1)
        return cls(source=LeagueSource(source.strip().lower()), league_id=league_id.strip())

    def __str__(self) -> str:
        return f"{self.source.value}:{self.league_id}"
