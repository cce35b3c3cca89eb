"""NFL team code normalization shared by both providers."""

from __future__ import annotations

import re
from typing import Dict, Optional


NFL_TEAM_ALIAS_GROUPS: dict[str, list[str]] = {
    "ARI": ["ARI", "ARZ"],
    "ATL": ["ATL"],
    "BAL": ["BAL"],
    "BUF": ["BUF"],
    "CAR": ["CAR"],
    "CHI": ["CHI"],
    "CIN": ["CIN"],
    "CLE": ["CLE"],
    "DAL": ["DAL"],
    "DEN": ["DEN"],
    "DET": ["DET"],
    "GB": ["GB", "GNB"],
    "HOU": ["HOU"],
    "IND": ["IND"],
    "JAX": ["JAX", "JAC"],
    "KC": ["KC", "KAN"],
    "LAC": ["LAC", "SD"],
    "LAR": ["LAR", "LA", "STL"],
    "LV": ["LV", "LVR", "OAK"],
    "MIA": ["MIA"],
    "MIN": ["MIN"],
    "NE": ["NE", "NEP", "NWE"],
    "NO": ["NO", "NOR"],
    "NYG": ["NYG"],
    "NYJ": ["NYJ"],
    "PHI": ["PHI"],
    "PIT": ["PIT"],
    "SEA": ["SEA"],
    "SF": ["SF", "SFO"],
    "TB": ["TB", "TAM"],
    "TEN": ["TEN"],
    "WAS": ["WAS", "WSH"],
}

# ESPN proTeamId -> team abbreviation (0 is the free-agent pseudo team).
ESPN_PRO_TEAM_IDS: Dict[int, str] = {
    1: "ATL", 2: "BUF", 3: "CHI", 4: "CIN", 5: "CLE", 6: "DAL", 7: "DEN", 8: "DET",
    9: "GB", 10: "TEN", 11: "IND", 12: "KC", 13: "LV", 14: "LAR", 15: "MIA", 16: "MIN",
    17: "NE", 18: "NO", 19: "NYG", 20: "NYJ", 21: "PHI", 22: "ARI", 23: "PIT", 24: "LAC",
    25: "SF", 26: "SEA", 27: "TB", 28: "WSH", 29: "CAR", 30: "JAX", 33: "BAL", 34: "HOU",
}


def _team_token(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", value.upper())


def _build_alias_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for abbr, variants in NFL_TEAM_ALIAS_GROUPS.items():
        for variant in variants:
            key = _team_token(variant)
            if key:
                lookup.setdefault(key, abbr)
    return lookup


TEAM_ALIAS_LOOKUP = _build_alias_lookup()


def canonical_team(team: Optional[str]) -> Optional[str]:
    """Return the canonical abbreviation for ``team`` or ``None`` when blank."""

    if team is None:
        return None
    token = _team_token(team)
    if not token:
        return None
    return TEAM_ALIAS_LOOKUP.get(token, token)


def espn_team(pro_team_id: Optional[int]) -> Optional[str]:
    if pro_team_id is None:
        return None
    return ESPN_PRO_TEAM_IDS.get(pro_team_id)
