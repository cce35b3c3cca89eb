from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class AvailablePlayerResponse(BaseModel):
    player_id: str
    name: str
    position: str
    team: str | None = None
    points: float | None = None


class ResolutionStatsResponse(BaseModel):
    canonical_hits: int = 0
    fallback_hits: int = 0
    misses: int = 0


class AvailableResponse(BaseModel):
    leagues: List[str]
    position: str | None = None
    rostered_count: int
    available_count: int
    resolution: ResolutionStatsResponse = Field(default_factory=ResolutionStatsResponse)
    players: List[AvailablePlayerResponse]
    warnings: List[str] = Field(default_factory=list)
