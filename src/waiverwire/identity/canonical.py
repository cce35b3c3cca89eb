"""One-to-one foreign (ESPN) to native (Sleeper) player ID mapping."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from waiverwire.config import canonical_position
from waiverwire.identity.names import normalize_name
from waiverwire.models import PlayerIdentity


logger = logging.getLogger(__name__)

_MISSING_SEARCH_RANK = 9999


def _preference_key(player: PlayerIdentity) -> Tuple[int, int, int, str]:
    is_active = (player.status or "").strip().lower() == "active"
    rank = player.search_rank if player.search_rank is not None else _MISSING_SEARCH_RANK
    return (0 if is_active else 1, rank, 0 if player.team else 1, player.native_id)


def select_canonical_player(players: Iterable[PlayerIdentity]) -> PlayerIdentity:
    """Pick the preferred record among duplicates of the same athlete.

    Active status wins, then the lowest search rank, then having a team, then
    the lowest native ID.
    """

    candidates = list(players)
    if not candidates:
        raise ValueError("cannot select a canonical player from an empty group")
    return min(candidates, key=_preference_key)


class Canonicalizer:
    """Direct lookup table from foreign IDs to native IDs.

    Lookups return ``None`` when the table has no entry; callers never have to
    compare the result against the foreign ID they passed in.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None, *, duplicates_resolved: int = 0):
        self._mapping: Dict[str, str] = dict(mapping or {})
        self.duplicates_resolved = duplicates_resolved

    def __len__(self) -> int:
        return len(self._mapping)

    def get_canonical_native_id(self, foreign_id: str) -> Optional[str]:
        return self._mapping.get(foreign_id)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._mapping)

    @classmethod
    def from_players(cls, players: Iterable[PlayerIdentity]) -> "Canonicalizer":
        """Build the table from a player directory, collapsing duplicate records.

        Players that carry a foreign ID are grouped by normalized name and
        position; every foreign ID in a group maps to the group's canonical
        player. When one foreign ID shows up in several groups the most
        preferred canonical player keeps it.
        """

        groups: Dict[Tuple[str, str], List[PlayerIdentity]] = defaultdict(list)
        for player in players:
            if not player.foreign_id:
                continue
            key = (normalize_name(player.full_name), canonical_position(player.position))
            groups[key].append(player)

        owners: Dict[str, PlayerIdentity] = {}
        for key in sorted(groups):
            members = groups[key]
            canonical = select_canonical_player(members)
            if len(members) > 1:
                logger.debug(
                    "Collapsed %d records for %r onto %s",
                    len(members),
                    key[0],
                    canonical.native_id,
                )
            for member in members:
                foreign_id = member.foreign_id or ""
                current = owners.get(foreign_id)
                if current is None or _preference_key(canonical) < _preference_key(current):
                    owners[foreign_id] = canonical

        mapping = {foreign_id: owner.native_id for foreign_id, owner in owners.items()}
        # Records whose own native ID lost out to another record for their foreign ID.
        collapsed = sum(
            1
            for members in groups.values()
            for member in members
            if mapping[member.foreign_id or ""] != member.native_id
        )

        logger.info(
            "Built canonical mapping: %d foreign IDs, %d records collapsed",
            len(mapping),
            collapsed,
        )
        return cls(mapping, duplicates_resolved=collapsed)
