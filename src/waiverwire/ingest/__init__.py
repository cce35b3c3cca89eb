"""Input adapters that normalize provider payloads."""

from .clients import ESPNClient, LeagueRosterFetcher, RosterFetchError, SleeperClient
from .payloads import (
    games_from_scoreboard,
    players_from_sleeper,
    projections_from_sleeper,
    snapshot_from_espn_league,
    snapshot_from_sleeper_rosters,
)

__all__ = [
    "ESPNClient",
    "LeagueRosterFetcher",
    "RosterFetchError",
    "SleeperClient",
    "games_from_scoreboard",
    "players_from_sleeper",
    "projections_from_sleeper",
    "snapshot_from_espn_league",
    "snapshot_from_sleeper_rosters",
]
