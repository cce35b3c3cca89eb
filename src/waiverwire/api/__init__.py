"""REST API exposing player availability and refresh cadence."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request

from waiverwire.api.schemas import (
    AvailablePlayerResponse,
    AvailableResponse,
    CadenceRequest,
    CadenceResponse,
    ResolutionStatsResponse,
)
from waiverwire.availability import RankedPlayer
from waiverwire.config import Settings, load_settings
from waiverwire.ingest import ESPNClient, LeagueRosterFetcher, SleeperClient
from waiverwire.models import LeagueRef
from waiverwire.refresh import CadenceTracker, RefreshCadencePolicy
from waiverwire.service import AvailabilityResult, AvailabilityService


def _parse_leagues(values: List[str]) -> List[LeagueRef]:
    if not values:
        raise HTTPException(status_code=400, detail="at least one league=SOURCE:ID is required")
    try:
        return [LeagueRef.parse(value) for value in values]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _to_response(
    leagues: List[LeagueRef],
    position: Optional[str],
    result: AvailabilityResult,
    ranked: Optional[List[RankedPlayer]] = None,
) -> AvailableResponse:
    if ranked is None:
        players = [
            AvailablePlayerResponse(
                player_id=player.native_id,
                name=player.full_name,
                position=player.position,
                team=player.team,
            )
            for player in result.players
        ]
    else:
        by_id = {player.native_id: player for player in result.players}
        players = [
            AvailablePlayerResponse(
                player_id=item.native_id,
                name=by_id[item.native_id].full_name,
                position=by_id[item.native_id].position,
                team=by_id[item.native_id].team,
                points=item.points,
            )
            for item in ranked
        ]
    stats = result.rostered.stats
    return AvailableResponse(
        leagues=[str(league) for league in leagues],
        position=position,
        rostered_count=len(result.rostered.native_ids),
        available_count=len(result.players),
        resolution=ResolutionStatsResponse(
            canonical_hits=stats.canonical_hits,
            fallback_hits=stats.fallback_hits,
            misses=stats.misses,
        ),
        players=players,
        warnings=list(result.warnings),
    )


async def _build_default_service(app: FastAPI, settings: Settings) -> None:
    sleeper = SleeperClient(timeout=settings.fetch_timeout)
    espn = ESPNClient(
        datetime.now().year,
        espn_s2=settings.espn_s2,
        swid=settings.espn_swid,
        timeout=settings.fetch_timeout,
    )
    universe = await sleeper.fetch_players()

    async def fetch_projections(week: int, year: str):
        return await sleeper.fetch_projections(week, year, season_type=settings.season_type)

    app.state.service = AvailabilityService(
        universe,
        LeagueRosterFetcher(sleeper, espn),
        projections_fetch=fetch_projections,
        fetch_timeout=settings.fetch_timeout,
    )
    app.state.clients = (sleeper, espn)


def create_app(
    service: Optional[AvailabilityService] = None,
    *,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.service is None:
            await _build_default_service(app, settings)
        try:
            yield
        finally:
            for client in getattr(app.state, "clients", ()):
                await client.aclose()

    app = FastAPI(title="waiverwire", lifespan=lifespan)
    app.state.service = service
    app.state.cadence_tracker = CadenceTracker(
        RefreshCadencePolicy(live_interval=settings.live_refresh_seconds)
    )

    def get_service(request: Request) -> AvailabilityService:
        current = request.app.state.service
        if current is None:
            raise HTTPException(status_code=503, detail="player directory not loaded")
        return current

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/available", response_model=AvailableResponse)
    async def available(
        request: Request,
        league: Optional[List[str]] = Query(default=None),
        position: Optional[str] = None,
    ) -> AvailableResponse:
        leagues = _parse_leagues(league or [])
        result = await get_service(request).available(leagues, position=position)
        return _to_response(leagues, position, result)

    @app.get("/available/top", response_model=AvailableResponse)
    async def top_available(
        request: Request,
        week: int = Query(..., ge=1, le=22),
        year: str = Query(..., min_length=4, max_length=4),
        league: Optional[List[str]] = Query(default=None),
        position: Optional[str] = None,
        scoring_format: str = "ppr",
        limit: int = Query(default=settings.top_limit, ge=1, le=500),
    ) -> AvailableResponse:
        leagues = _parse_leagues(league or [])
        result = await get_service(request).top_available(
            leagues,
            week=week,
            year=year,
            position=position,
            scoring_format=scoring_format,
            limit=limit,
        )
        return _to_response(leagues, position, result, ranked=result.ranked or [])

    @app.post("/cadence", response_model=CadenceResponse)
    async def cadence(request: Request, payload: CadenceRequest) -> CadenceResponse:
        now = payload.now or datetime.now().astimezone()
        decision = request.app.state.cadence_tracker.tick(now, payload.games)
        return CadenceResponse(
            interval_seconds=decision.interval_seconds,
            show_countdown=decision.show_countdown,
            reason=decision.reason.value,
            has_live_games=decision.has_live_games,
        )

    return app
