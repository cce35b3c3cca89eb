import httpx
import pytest

from waiverwire.identity import Canonicalizer
from waiverwire.models import (
    LeagueRef,
    LeagueRosterSnapshot,
    PlayerIdentity,
    ProjectionRecord,
    Provider,
    RosterEntry,
)
from waiverwire.service import AvailabilityService


UNIVERSE = {
    "4046": PlayerIdentity(native_id="4046", foreign_id="3139477", full_name="Patrick Mahomes", position="QB", team="KC", status="Active"),
    "4984": PlayerIdentity(native_id="4984", foreign_id="3918298", full_name="Josh Allen", position="QB", team="BUF", status="Active"),
    "6794": PlayerIdentity(native_id="6794", foreign_id="4262921", full_name="Justin Jefferson", position="WR", team="MIN", status="Active"),
    "7564": PlayerIdentity(native_id="7564", full_name="Terry McLaurin", position="WR", team="WAS", status="Active"),
    "9509": PlayerIdentity(native_id="9509", full_name="Marvin Harrison", position="WR", team="ARI", status="Active"),
}


async def _fetch(league: LeagueRef) -> LeagueRosterSnapshot:
    if league.source.provider is Provider.NATIVE:
        return LeagueRosterSnapshot(
            provider=Provider.NATIVE,
            league_id=league.league_id,
            entries=(RosterEntry(native_id="6794"),),
        )
    return LeagueRosterSnapshot(
        provider=Provider.FOREIGN,
        league_id=league.league_id,
        entries=(
            RosterEntry(foreign_id="3139477", full_name="Patrick Mahomes", team="KC"),
            RosterEntry(foreign_id="3121422", full_name="Terry McLaurin", team="WSH"),
        ),
    )


LEAGUES = [LeagueRef.parse("sleeper:1"), LeagueRef.parse("espn:2")]


@pytest.mark.anyio
async def test_available_combines_both_providers():
    service = AvailabilityService(UNIVERSE, _fetch)

    result = await service.available(LEAGUES)

    assert [player.native_id for player in result.players] == ["4984", "9509"]
    assert result.rostered.stats.canonical_hits == 1
    assert result.rostered.stats.fallback_hits == 1
    assert result.warnings == []


@pytest.mark.anyio
async def test_available_uses_injected_canonicalizer():
    service = AvailabilityService(UNIVERSE, _fetch, canonicalizer=Canonicalizer({"3139477": "4984"}))

    result = await service.available(LEAGUES, position="QB")

    assert [player.native_id for player in result.players] == ["4046"]


@pytest.mark.anyio
async def test_top_available_ranks_with_projections():
    async def projections(week: int, year: str):
        assert (week, year) == (7, "2025")
        return {
            "4984": ProjectionRecord(pts_ppr=25.0, pts_std=20.0),
            "9509": ProjectionRecord(pts_ppr=14.0, pts_std=9.0),
        }

    service = AvailabilityService(UNIVERSE, _fetch, projections_fetch=projections)

    result = await service.top_available(LEAGUES, week=7, year="2025", scoring_format="std", limit=1)

    assert [(item.native_id, item.points) for item in result.ranked] == [("4984", 20.0)]


@pytest.mark.anyio
async def test_top_available_degrades_when_projections_fail():
    async def projections(week: int, year: str):
        raise httpx.ConnectError("projections down")

    service = AvailabilityService(UNIVERSE, _fetch, projections_fetch=projections)

    result = await service.top_available(LEAGUES, week=7, year="2025")

    assert result.ranked == []
    assert result.warnings == ["projections unavailable"]
    assert [player.native_id for player in result.players] == ["4984", "9509"]


@pytest.mark.anyio
async def test_top_available_without_projection_source():
    service = AvailabilityService(UNIVERSE, _fetch)

    result = await service.top_available(LEAGUES, week=1, year="2025")

    assert result.ranked == []
    assert result.warnings == ["projections unavailable"]
