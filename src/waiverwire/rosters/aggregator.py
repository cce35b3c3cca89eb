"""Aggregate rostered players across leagues into native-ID space."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional, Sequence

import httpx

from waiverwire.identity import IdentityResolver, PlayerMetadata, ResolutionOutcome
from waiverwire.ingest.clients import RosterFetchError
from waiverwire.models import (
    LeagueRef,
    LeagueRosterSnapshot,
    Provider,
    ResolutionStats,
    ResolvedRosterSet,
)


logger = logging.getLogger(__name__)

RosterFetch = Callable[[LeagueRef], Awaitable[LeagueRosterSnapshot]]

# Failures that make a single league contribute nothing instead of failing the batch.
# AttributeError and TypeError cover payloads whose nesting does not match the expected shape.
FETCH_FAILURES = (
    RosterFetchError,
    httpx.HTTPError,
    asyncio.TimeoutError,
    ValueError,
    KeyError,
    AttributeError,
    TypeError,
)


class RosterAggregator:
    def __init__(self, resolver: IdentityResolver, *, fetch_timeout: Optional[float] = None):
        self._resolver = resolver
        self._fetch_timeout = fetch_timeout

    def aggregate(self, snapshot: LeagueRosterSnapshot) -> ResolvedRosterSet:
        """Resolve one league snapshot into the set of rostered native IDs."""

        if snapshot.provider is Provider.NATIVE:
            native_ids = frozenset(entry.native_id for entry in snapshot.entries if entry.native_id)
            return ResolvedRosterSet(native_ids=native_ids)

        native_ids: set[str] = set()
        foreign_ids: set[str] = set()
        canonical_hits = fallback_hits = misses = 0
        for entry in snapshot.entries:
            if not entry.foreign_id:
                continue
            foreign_ids.add(entry.foreign_id)
            metadata = None
            if entry.full_name or entry.team:
                metadata = PlayerMetadata(full_name=entry.full_name, team=entry.team)
            resolution = self._resolver.resolve_outcome(entry.foreign_id, metadata)
            if resolution.outcome is ResolutionOutcome.CANONICAL:
                canonical_hits += 1
            elif resolution.outcome is ResolutionOutcome.FALLBACK:
                fallback_hits += 1
            else:
                misses += 1
                continue
            native_ids.add(resolution.native_id)

        stats = ResolutionStats(canonical_hits=canonical_hits, fallback_hits=fallback_hits, misses=misses)
        logger.info(
            "League %s: %d canonical, %d fallback, %d unresolved of %d entries",
            snapshot.league_id or "?",
            canonical_hits,
            fallback_hits,
            misses,
            stats.total,
        )
        return ResolvedRosterSet(
            native_ids=frozenset(native_ids),
            foreign_ids=frozenset(foreign_ids),
            stats=stats,
        )

    async def aggregate_league(self, league: LeagueRef, fetch: RosterFetch) -> ResolvedRosterSet:
        """Fetch and resolve one league; any fetch failure yields an empty set."""

        try:
            if self._fetch_timeout is not None:
                snapshot = await asyncio.wait_for(fetch(league), timeout=self._fetch_timeout)
            else:
                snapshot = await fetch(league)
        except FETCH_FAILURES as exc:
            logger.warning("Roster fetch failed for league %s; treating as empty: %s", league, exc)
            return ResolvedRosterSet.empty()
        return self.aggregate(snapshot)

    async def aggregate_leagues(self, leagues: Iterable[LeagueRef], fetch: RosterFetch) -> ResolvedRosterSet:
        """Fetch every league concurrently and union the results."""

        unique: Sequence[LeagueRef] = list(dict.fromkeys(leagues))
        if not unique:
            return ResolvedRosterSet.empty()
        results = await asyncio.gather(*(self.aggregate_league(league, fetch) for league in unique))
        merged = ResolvedRosterSet.empty()
        for result in results:
            merged = merged.merge(result)
        logger.info(
            "Aggregated %d leagues: %d rostered players",
            len(unique),
            len(merged.native_ids),
        )
        return merged
