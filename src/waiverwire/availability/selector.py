"""Helpers for deriving and ranking unrostered players."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence

from waiverwire.config import canonical_position, position_priority
from waiverwire.models import PlayerIdentity, ProjectionRecord, ResolvedRosterSet


class ScoringFormat(str, Enum):
    PPR = "ppr"
    HALF_PPR = "half_ppr"
    STANDARD = "std"

    @property
    def field_name(self) -> str:
        return _SCORING_FIELDS[self]


_SCORING_FIELDS = {
    ScoringFormat.PPR: "pts_ppr",
    ScoringFormat.HALF_PPR: "pts_half_ppr",
    ScoringFormat.STANDARD: "pts_std",
}

_SCORING_ALIASES = {
    "ppr": ScoringFormat.PPR,
    "full": ScoringFormat.PPR,
    "full_ppr": ScoringFormat.PPR,
    "half_ppr": ScoringFormat.HALF_PPR,
    "half": ScoringFormat.HALF_PPR,
    "std": ScoringFormat.STANDARD,
    "standard": ScoringFormat.STANDARD,
}


def parse_scoring_format(value: Optional[str | ScoringFormat]) -> ScoringFormat:
    """Map a scoring format label to a :class:`ScoringFormat`; unknown labels mean full PPR."""

    if isinstance(value, ScoringFormat):
        return value
    key = (value or "").strip().lower().replace("-", "_")
    return _SCORING_ALIASES.get(key, ScoringFormat.PPR)


@dataclass(frozen=True)
class RankedPlayer:
    """Available player joined with its projected points."""

    native_id: str
    points: float


def _sort_key(player: PlayerIdentity) -> tuple[int, str]:
    return position_priority(player.position), player.full_name


def compute_available(
    universe: Iterable[PlayerIdentity],
    rostered: ResolvedRosterSet,
    position_filter: Optional[str] = None,
) -> List[PlayerIdentity]:
    """Return every player not rostered anywhere, ordered by position then name."""

    wanted = canonical_position(position_filter) if position_filter else None
    available = [
        player
        for player in universe
        if (wanted is None or canonical_position(player.position) == wanted)
        and player.native_id not in rostered.native_ids
    ]
    available.sort(key=_sort_key)
    return available


def rank_by_projection(
    available: Sequence[PlayerIdentity],
    projections: Mapping[str, ProjectionRecord],
    scoring_format: Optional[str | ScoringFormat] = ScoringFormat.PPR,
    limit: Optional[int] = None,
) -> List[RankedPlayer]:
    """Rank available players by projected points, best first.

    Players without a projection (or without a value for the chosen scoring
    field) are left out rather than treated as zero.
    """

    field = parse_scoring_format(scoring_format).field_name
    ranked: List[RankedPlayer] = []
    for player in available:
        projection = projections.get(player.native_id)
        if projection is None:
            continue
        points = getattr(projection, field)
        if points is None:
            continue
        ranked.append(RankedPlayer(native_id=player.native_id, points=float(points)))

    ranked.sort(key=lambda item: item.points, reverse=True)
    if limit is not None:
        ranked = ranked[: max(0, limit)]
    return ranked
