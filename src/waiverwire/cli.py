"""Command-line interface for listing available players and checking refresh cadence."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from waiverwire.availability import available_to_csv, export_available_to_csv
from waiverwire.config import Settings, iter_positions, load_settings
from waiverwire.config_loader import LeagueProfile
from waiverwire.ingest import ESPNClient, LeagueRosterFetcher, SleeperClient
from waiverwire.models import LeagueRef
from waiverwire.refresh import RefreshCadencePolicy
from waiverwire.service import AvailabilityService


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find unrostered players across Sleeper and ESPN leagues")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    available = sub.add_parser("available", help="List players not rostered in any tracked league")
    available.add_argument(
        "--league",
        action="append",
        default=[],
        help="League to track as SOURCE:ID (e.g., sleeper:1234, espn:5678); repeatable",
    )
    available.add_argument("--load-profile", type=Path, help="Load tracked leagues from JSON", default=None)
    available.add_argument("--save-profile", type=Path, help="Save tracked leagues to JSON", default=None)
    available.add_argument(
        "--position",
        default=None,
        type=str.upper,
        choices=list(iter_positions()),
        help="Only list players at this position",
    )
    available.add_argument("--season", default=None, help="Season year for ESPN leagues and projections")
    available.add_argument("--week", type=int, default=None, help="Rank by projections for this week")
    available.add_argument("--scoring", default=None, help="Scoring format: ppr, half_ppr or std")
    available.add_argument("--limit", type=int, default=None, help="Maximum ranked players to show")
    available.add_argument("--output", type=Path, default=None, help="Write results to this CSV path")

    sub.add_parser("cadence", help="Show the refresh cadence for the current NFL schedule")
    return parser.parse_args(argv)


def _resolve_leagues(args: argparse.Namespace) -> tuple[List[LeagueRef], LeagueProfile]:
    profile = LeagueProfile(leagues=[])
    if args.load_profile:
        profile = LeagueProfile.load(args.load_profile)
    leagues = list(profile.leagues)
    for value in args.league:
        league = LeagueRef.parse(value)
        if league not in leagues:
            leagues.append(league)
    profile.leagues = leagues
    if args.season:
        profile.season = args.season
    if args.scoring:
        profile.scoring_format = args.scoring
    return leagues, profile


async def _run_available(args: argparse.Namespace, settings: Settings) -> None:
    leagues, profile = _resolve_leagues(args)
    if not leagues:
        raise SystemExit("No leagues given; pass --league SOURCE:ID or --load-profile")
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved league profile to {args.save_profile}")

    season = profile.season or str(datetime.now().year)
    async with SleeperClient(timeout=settings.fetch_timeout) as sleeper, ESPNClient(
        season,
        espn_s2=settings.espn_s2,
        swid=settings.espn_swid,
        timeout=settings.fetch_timeout,
    ) as espn:
        universe = await sleeper.fetch_players()

        async def fetch_projections(week: int, year: str):
            return await sleeper.fetch_projections(week, year, season_type=settings.season_type)

        service = AvailabilityService(
            universe,
            LeagueRosterFetcher(sleeper, espn),
            projections_fetch=fetch_projections,
            fetch_timeout=settings.fetch_timeout,
        )
        if args.week is not None:
            result = await service.top_available(
                leagues,
                week=args.week,
                year=season,
                position=args.position,
                scoring_format=profile.scoring_format,
                limit=args.limit or settings.top_limit,
            )
        else:
            result = await service.available(leagues, position=args.position)

    stats = result.rostered.stats
    print(
        f"Rostered {len(result.rostered.native_ids)} players across {len(leagues)} leagues "
        f"({stats.canonical_hits} canonical, {stats.fallback_hits} fallback, {stats.misses} unresolved)"
    )
    for warning in result.warnings:
        print(f"Warning: {warning}")

    players = result.players
    if args.week is None and args.limit:
        players = players[: args.limit]
    if args.output:
        export_available_to_csv(args.output, players, result.ranked)
        print(f"Wrote {len(result.ranked if result.ranked is not None else players)} rows to {args.output}")
    else:
        print(available_to_csv(players, result.ranked), end="")


async def _run_cadence(settings: Settings) -> None:
    async with ESPNClient(datetime.now().year, timeout=settings.fetch_timeout) as espn:
        games = await espn.fetch_scoreboard()
    policy = RefreshCadencePolicy(live_interval=settings.live_refresh_seconds)
    decision = policy.evaluate(datetime.now().astimezone(), games)
    print(
        f"{decision.reason.value}: refresh every {decision.interval_seconds:g}s"
        f" (countdown {'on' if decision.show_countdown else 'off'})"
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    if args.command == "available":
        asyncio.run(_run_available(args, settings))
    elif args.command == "cadence":
        asyncio.run(_run_cadence(settings))


if __name__ == "__main__":
    main()
