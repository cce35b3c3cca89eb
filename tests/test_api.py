import pytest
from httpx import ASGITransport, AsyncClient

from waiverwire.api import create_app
from waiverwire.config import Settings
from waiverwire.models import (
    LeagueRef,
    LeagueRosterSnapshot,
    PlayerIdentity,
    ProjectionRecord,
    Provider,
    RosterEntry,
)
from waiverwire.service import AvailabilityService


def _universe() -> dict[str, PlayerIdentity]:
    return {
        "4046": PlayerIdentity(native_id="4046", foreign_id="3139477", full_name="Patrick Mahomes", position="QB", team="KC", status="Active"),
        "4984": PlayerIdentity(native_id="4984", full_name="Josh Allen", position="QB", team="BUF", status="Active"),
        "6794": PlayerIdentity(native_id="6794", full_name="Justin Jefferson", position="WR", team="MIN", status="Active"),
        "7564": PlayerIdentity(native_id="7564", full_name="Terry McLaurin", position="WR", team="WAS", status="Active"),
    }


async def _fetch(league: LeagueRef) -> LeagueRosterSnapshot:
    if league.source.provider is Provider.NATIVE:
        return LeagueRosterSnapshot(provider=Provider.NATIVE, entries=(RosterEntry(native_id="6794"),))
    return LeagueRosterSnapshot(
        provider=Provider.FOREIGN,
        entries=(RosterEntry(foreign_id="3139477", full_name="Patrick Mahomes", team="KC"),),
    )


async def _projections(week: int, year: str) -> dict[str, ProjectionRecord]:
    return {
        "4984": ProjectionRecord(pts_ppr=23.5),
        "7564": ProjectionRecord(pts_ppr=15.25),
    }


@pytest.fixture
async def client():
    service = AvailabilityService(_universe(), _fetch, projections_fetch=_projections)
    app = create_app(service, settings=Settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_available_endpoint(client: AsyncClient):
    resp = await client.get("/available", params=[("league", "sleeper:1"), ("league", "espn:2")])
    assert resp.status_code == 200
    body = resp.json()
    assert body["leagues"] == ["sleeper:1", "espn:2"]
    assert body["rostered_count"] == 2
    assert body["available_count"] == 2
    assert [player["player_id"] for player in body["players"]] == ["4984", "7564"]
    assert body["resolution"] == {"canonical_hits": 1, "fallback_hits": 0, "misses": 0}
    assert body["warnings"] == []


@pytest.mark.anyio
async def test_available_position_filter(client: AsyncClient):
    resp = await client.get("/available", params={"league": "sleeper:1", "position": "wr"})
    assert resp.status_code == 200
    body = resp.json()
    assert [player["player_id"] for player in body["players"]] == ["7564"]


@pytest.mark.anyio
async def test_available_requires_league(client: AsyncClient):
    resp = await client.get("/available")
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_available_rejects_malformed_league(client: AsyncClient):
    resp = await client.get("/available", params={"league": "yahoo:1"})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_top_available_endpoint(client: AsyncClient):
    resp = await client.get(
        "/available/top",
        params={"league": "espn:2", "week": 7, "year": "2025", "limit": 1},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["players"]) == 1
    top = body["players"][0]
    assert top["player_id"] == "4984"
    assert top["points"] == pytest.approx(23.5)


@pytest.mark.anyio
async def test_top_available_validates_week(client: AsyncClient):
    resp = await client.get("/available/top", params={"league": "espn:2", "week": 0, "year": "2025"})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_cadence_endpoint_tracks_live_state(client: AsyncClient):
    live_payload = {
        "now": "2025-10-19T18:00:00+00:00",
        "games": [
            {
                "game_id": "401",
                "home_team": "KC",
                "away_team": "BUF",
                "start_time": "2025-10-19T17:00:00+00:00",
                "is_live": False,
                "status": "2nd 4:12",
            }
        ],
    }
    resp = await client.post("/cadence", json=live_payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["interval_seconds"] == 15
    assert body["show_countdown"] is True
    assert body["reason"] == "live_games"
    assert client.app.state.cadence_tracker.has_live_games is True

    resp = await client.post("/cadence", json={"now": "2025-10-21T12:00:00+00:00", "games": []})
    assert resp.status_code == 200
    body = resp.json()
    assert body["interval_seconds"] == 3600
    assert body["reason"] == "no_game_day"
    assert client.app.state.cadence_tracker.has_live_games is False
