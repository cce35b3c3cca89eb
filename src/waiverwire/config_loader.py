"""Persist and load CLI league profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from waiverwire.models import LeagueRef


@dataclass
class LeagueProfile:
    leagues: List[LeagueRef]
    season: Optional[str] = None
    scoring_format: str = "ppr"

    @classmethod
    def load(cls, path: Path) -> "LeagueProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            leagues=[LeagueRef.parse(value) for value in data.get("leagues", [])],
            season=data.get("season"),
            scoring_format=data.get("scoring_format", "ppr"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "leagues": [str(league) for league in self.leagues],
            "season": self.season,
            "scoring_format": self.scoring_format,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
