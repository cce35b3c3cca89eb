"""Thin async httpx clients for the Sleeper and ESPN endpoints the pipeline reads."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from waiverwire.ingest.payloads import (
    games_from_scoreboard,
    players_from_sleeper,
    projections_from_sleeper,
    snapshot_from_espn_league,
    snapshot_from_sleeper_rosters,
)
from waiverwire.models import (
    GameStatusRecord,
    LeagueRef,
    LeagueRosterSnapshot,
    LeagueSource,
    PlayerIdentity,
    ProjectionRecord,
)


logger = logging.getLogger(__name__)

SLEEPER_BASE_URL = "https://api.sleeper.app/v1"
ESPN_FANTASY_BASE_URL = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl/seasons"
ESPN_SCOREBOARD_URL = "https://site.api.espn.com/apis/site/v2/sports/football/nfl/scoreboard"
DEFAULT_TIMEOUT = 10.0


class RosterFetchError(RuntimeError):
    """Raised when a provider answers but the roster cannot be retrieved."""


class _BaseClient:
    def __init__(self, *, client: httpx.AsyncClient | None = None, timeout: float = DEFAULT_TIMEOUT):
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _get_json(self, url: str, **kwargs: Any) -> Any:
        logger.debug("GET %s", url)
        resp = await self._client.get(url, **kwargs)
        resp.raise_for_status()
        return resp.json()


class SleeperClient(_BaseClient):
    def __init__(self, *, base_url: str = SLEEPER_BASE_URL, **kwargs: Any):
        super().__init__(**kwargs)
        self._base_url = base_url.rstrip("/")

    async def fetch_players(self) -> Dict[str, PlayerIdentity]:
        payload = await self._get_json(f"{self._base_url}/players/nfl")
        players = players_from_sleeper(payload)
        logger.info("Loaded %d players from Sleeper directory", len(players))
        return players

    async def fetch_league_rosters(self, league_id: str) -> LeagueRosterSnapshot:
        payload = await self._get_json(f"{self._base_url}/league/{league_id}/rosters")
        return snapshot_from_sleeper_rosters(league_id, payload)

    async def fetch_projections(
        self,
        week: int,
        year: int | str,
        *,
        season_type: str = "regular",
    ) -> Dict[str, ProjectionRecord]:
        payload = await self._get_json(f"{self._base_url}/projections/nfl/{season_type}/{year}/{week}")
        projections = projections_from_sleeper(payload)
        logger.info("Fetched %d player projections for week %s %s", len(projections), week, year)
        return projections


class ESPNClient(_BaseClient):
    def __init__(
        self,
        season: int | str,
        *,
        espn_s2: Optional[str] = None,
        swid: Optional[str] = None,
        base_url: str = ESPN_FANTASY_BASE_URL,
        scoreboard_url: str = ESPN_SCOREBOARD_URL,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._season = str(season)
        self._base_url = base_url.rstrip("/")
        self._scoreboard_url = scoreboard_url
        self._cookies: Dict[str, str] = {}
        if espn_s2:
            self._cookies["espn_s2"] = espn_s2
        if swid:
            self._cookies["SWID"] = swid

    async def fetch_league_rosters(self, league_id: str) -> LeagueRosterSnapshot:
        url = f"{self._base_url}/{self._season}/segments/0/leagues/{league_id}"
        headers = {"Accept": "application/json"}
        if self._cookies:
            headers["Cookie"] = "; ".join(f"{key}={value}" for key, value in self._cookies.items())
        resp = await self._client.get(url, params={"view": "mRoster"}, headers=headers)
        if resp.status_code in (401, 403):
            raise RosterFetchError(f"ESPN league {league_id} requires valid espn_s2/SWID cookies")
        resp.raise_for_status()
        return snapshot_from_espn_league(league_id, resp.json())

    async def fetch_scoreboard(self) -> List[GameStatusRecord]:
        payload = await self._get_json(self._scoreboard_url)
        return games_from_scoreboard(payload)


class LeagueRosterFetcher:
    """Dispatch roster fetches to the client matching each league's provider."""

    def __init__(self, sleeper: SleeperClient, espn: ESPNClient | None = None):
        self._sleeper = sleeper
        self._espn = espn

    async def __call__(self, league: LeagueRef) -> LeagueRosterSnapshot:
        if league.source is LeagueSource.SLEEPER:
            return await self._sleeper.fetch_league_rosters(league.league_id)
        if self._espn is None:
            raise RosterFetchError(f"No ESPN client configured for league {league}")
        return await self._espn.fetch_league_rosters(league.league_id)
