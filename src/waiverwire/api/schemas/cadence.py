from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from waiverwire.models import GameStatusRecord


class CadenceRequest(BaseModel):
    now: datetime | None = None
    games: List[GameStatusRecord] = Field(default_factory=list)


class CadenceResponse(BaseModel):
    interval_seconds: float
    show_countdown: bool
    reason: str
    has_live_games: bool
