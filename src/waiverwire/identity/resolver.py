"""Two-tier resolution of foreign player IDs into native IDs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Protocol, Tuple, Union

from waiverwire.config import canonical_team
from waiverwire.identity.names import normalize_name
from waiverwire.models import PlayerIdentity


logger = logging.getLogger(__name__)


class CanonicalLookup(Protocol):
    def get_canonical_native_id(self, foreign_id: str) -> Optional[str]:
        ...


class ResolutionOutcome(str, Enum):
    CANONICAL = "canonical"
    FALLBACK = "fallback"
    MISS = "miss"


@dataclass(frozen=True)
class PlayerMetadata:
    """Best-effort descriptive data attached to a foreign roster entry."""

    full_name: Optional[str] = None
    team: Optional[str] = None


@dataclass(frozen=True)
class Resolution:
    native_id: Optional[str]
    outcome: ResolutionOutcome


_MISS = Resolution(native_id=None, outcome=ResolutionOutcome.MISS)


def _fallback_key(name: Optional[str], team: Optional[str]) -> Optional[Tuple[str, str]]:
    if not name:
        return None
    normalized_team = canonical_team(team)
    if not normalized_team:
        return None
    normalized_name = normalize_name(name)
    if not normalized_name:
        return None
    return normalized_name, normalized_team


class IdentityResolver:
    """Map foreign IDs to native IDs via the canonical table, then name and team.

    The fallback scan walks the player universe sorted by native ID so that
    when two players share a normalized name and team the lowest native ID
    always wins.
    """

    def __init__(
        self,
        canonicalizer: CanonicalLookup,
        universe: Union[Mapping[str, PlayerIdentity], Iterable[PlayerIdentity]],
    ):
        self._canonicalizer = canonicalizer
        players = universe.values() if isinstance(universe, Mapping) else universe
        self._players = tuple(sorted(players, key=lambda player: player.native_id))
        self._fallback_index: Optional[Dict[Tuple[str, str], str]] = None

    def _index(self) -> Dict[Tuple[str, str], str]:
        if self._fallback_index is None:
            index: Dict[Tuple[str, str], str] = {}
            for player in self._players:
                key = _fallback_key(player.full_name, player.team)
                if key is not None:
                    index.setdefault(key, player.native_id)
            self._fallback_index = index
        return self._fallback_index

    def resolve_outcome(self, foreign_id: str, metadata: Optional[PlayerMetadata] = None) -> Resolution:
        native_id = self._canonicalizer.get_canonical_native_id(foreign_id)
        if native_id is not None:
            return Resolution(native_id=native_id, outcome=ResolutionOutcome.CANONICAL)

        if metadata is None:
            return _MISS
        key = _fallback_key(metadata.full_name, metadata.team)
        if key is None:
            return _MISS
        match = self._index().get(key)
        if match is None:
            logger.debug("No match for foreign ID %s (%s, %s)", foreign_id, *key)
            return _MISS
        logger.debug("Fallback match for foreign ID %s -> %s", foreign_id, match)
        return Resolution(native_id=match, outcome=ResolutionOutcome.FALLBACK)

    def resolve(self, foreign_id: str, metadata: Optional[PlayerMetadata] = None) -> Optional[str]:
        """Return the native ID for ``foreign_id`` or ``None`` when unresolvable."""

        return self.resolve_outcome(foreign_id, metadata).native_id
