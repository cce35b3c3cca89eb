"""Game schedule and projection payloads consumed by the cadence and ranking layers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.config import ConfigDict


class GameStatusRecord(BaseModel):
    """One scheduled or in-progress NFL game from the live status feed."""

    game_id: str = ""
    home_team: str = ""
    away_team: str = ""
    start_time: Optional[datetime] = None
    is_live: bool = False
    status: str = ""

    model_config = ConfigDict(frozen=True)


class ProjectionRecord(BaseModel):
    """Pre-computed weekly fantasy points for one player."""

    pts_ppr: Optional[float] = None
    pts_half_ppr: Optional[float] = None
    pts_std: Optional[float] = None

    model_config = ConfigDict(frozen=True, extra="ignore")
