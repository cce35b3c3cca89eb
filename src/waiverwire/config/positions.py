"""Position ordering and aliases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PositionRules:
    order: Tuple[str, ...]
    aliases: Mapping[str, str]

    def canonical(self, position: Optional[str]) -> str:
        """Uppercase a position and fold provider aliases (DST, D/ST -> DEF)."""

        token = (position or "").strip().upper()
        return self.aliases.get(token, token)

    def priority(self, position: Optional[str]) -> int:
        """Rank of a position in display order; unknown positions sort last."""

        token = self.canonical(position)
        try:
            return self.order.index(token)
        except ValueError:
            return len(self.order)


NFL_POSITIONS = PositionRules(
    order=("QB", "RB", "WR", "TE", "K", "DEF"),
    aliases={
        "DST": "DEF",
        "D/ST": "DEF",
        "D": "DEF",
        "DEFENSE": "DEF",
        "PK": "K",
    },
)


def position_priority(position: Optional[str]) -> int:
    return NFL_POSITIONS.priority(position)


def canonical_position(position: Optional[str]) -> str:
    return NFL_POSITIONS.canonical(position)


def iter_positions() -> Iterable[str]:
    """Return the known positions in priority order."""

    return iter(NFL_POSITIONS.order)
