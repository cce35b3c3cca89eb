"""Wire the identity, roster and availability layers around injected collaborators."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, List, Mapping, Optional

import httpx

from waiverwire.availability import (
    RankedPlayer,
    ScoringFormat,
    compute_available,
    parse_scoring_format,
    rank_by_projection,
)
from waiverwire.identity import Canonicalizer, IdentityResolver
from waiverwire.models import LeagueRef, PlayerIdentity, ProjectionRecord, ResolvedRosterSet
from waiverwire.rosters import RosterAggregator, RosterFetch


logger = logging.getLogger(__name__)

ProjectionsFetch = Callable[[int, str], Awaitable[Mapping[str, ProjectionRecord]]]

_PROJECTION_FAILURES = (httpx.HTTPError, asyncio.TimeoutError, ValueError, KeyError, AttributeError, TypeError)


@dataclass
class AvailabilityResult:
    players: List[PlayerIdentity]
    rostered: ResolvedRosterSet
    ranked: Optional[List[RankedPlayer]] = None
    warnings: List[str] = field(default_factory=list)


class AvailabilityService:
    """Compute who is available across a set of tracked leagues.

    Every collaborator is passed in explicitly; nothing here reaches for a
    process-wide instance.
    """

    def __init__(
        self,
        universe: Mapping[str, PlayerIdentity],
        roster_fetch: RosterFetch,
        *,
        canonicalizer: Optional[Canonicalizer] = None,
        projections_fetch: Optional[ProjectionsFetch] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.universe = universe
        self.canonicalizer = canonicalizer or Canonicalizer.from_players(universe.values())
        self.resolver = IdentityResolver(self.canonicalizer, universe)
        self.aggregator = RosterAggregator(self.resolver, fetch_timeout=fetch_timeout)
        self._roster_fetch = roster_fetch
        self._projections_fetch = projections_fetch
        self._fetch_timeout = fetch_timeout

    async def rostered(self, leagues: Iterable[LeagueRef]) -> ResolvedRosterSet:
        return await self.aggregator.aggregate_leagues(leagues, self._roster_fetch)

    async def available(
        self,
        leagues: Iterable[LeagueRef],
        *,
        position: Optional[str] = None,
    ) -> AvailabilityResult:
        rostered = await self.rostered(leagues)
        players = compute_available(self.universe.values(), rostered, position)
        logger.info(
            "Found %d available players%s",
            len(players),
            f" at {position}" if position else "",
        )
        return AvailabilityResult(players=players, rostered=rostered)

    async def _load_projections(self, week: int, year: str) -> Optional[Mapping[str, ProjectionRecord]]:
        if self._projections_fetch is None:
            return None
        try:
            coro = self._projections_fetch(week, year)
            if self._fetch_timeout is not None:
                return await asyncio.wait_for(coro, timeout=self._fetch_timeout)
            return await coro
        except _PROJECTION_FAILURES as exc:
            logger.warning("Projections fetch failed for week %s %s: %s", week, year, exc)
            return None

    async def top_available(
        self,
        leagues: Iterable[LeagueRef],
        *,
        week: int,
        year: str,
        position: Optional[str] = None,
        scoring_format: Optional[str | ScoringFormat] = ScoringFormat.PPR,
        limit: int = 20,
    ) -> AvailabilityResult:
        """Available players ranked by projected points; empty ranking if projections are unavailable."""

        result = await self.available(leagues, position=position)
        projections = await self._load_projections(week, str(year))
        if projections is None:
            result.ranked = []
            result.warnings.append("projections unavailable")
            return result
        fmt = parse_scoring_format(scoring_format)
        result.ranked = rank_by_projection(result.players, projections, fmt, limit)
        return result
