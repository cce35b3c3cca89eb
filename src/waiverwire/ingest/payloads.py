"""Helpers that turn provider JSON payloads into canonical models."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from waiverwire.config import canonical_position, canonical_team, espn_team
from waiverwire.models import (
    GameStatusRecord,
    LeagueRosterSnapshot,
    PlayerIdentity,
    ProjectionRecord,
    Provider,
    RosterEntry,
)


logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _require_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError(f"{what} payload must be an object, got {type(payload).__name__}")
    return payload


def _require_list(payload: Any, what: str) -> Sequence[Any]:
    if not isinstance(payload, list):
        raise ValueError(f"{what} payload must be a list, got {type(payload).__name__}")
    return payload


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> Sequence[Any]:
    return value if isinstance(value, list) else ()


def player_from_sleeper(player_id: str, row: Mapping[str, Any]) -> PlayerIdentity:
    first = _text(row.get("first_name"))
    last = _text(row.get("last_name"))
    full_name = _text(row.get("full_name")) or " ".join(part for part in (first, last) if part)
    return PlayerIdentity(
        native_id=_text(row.get("player_id")) or player_id,
        foreign_id=_optional_text(row.get("espn_id")),
        full_name=full_name,
        first_name=first,
        last_name=last,
        position=canonical_position(_optional_text(row.get("position"))),
        team=canonical_team(_optional_text(row.get("team"))),
        status=_optional_text(row.get("status")),
        search_rank=_optional_int(row.get("search_rank")),
    )


def players_from_sleeper(payload: Any) -> Dict[str, PlayerIdentity]:
    """Parse the Sleeper ``/players/nfl`` directory keyed by native ID."""

    rows = _require_mapping(payload, "players")
    players: Dict[str, PlayerIdentity] = {}
    skipped = 0
    for player_id, row in rows.items():
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        try:
            player = player_from_sleeper(str(player_id), row)
        except ValidationError:
            skipped += 1
            continue
        players[player.native_id] = player
    if skipped:
        logger.debug("Skipped %d malformed player rows", skipped)
    return players


def snapshot_from_sleeper_rosters(league_id: str, payload: Any) -> LeagueRosterSnapshot:
    """Collect every rostered native ID from a Sleeper ``/league/<id>/rosters`` payload."""

    entries: List[RosterEntry] = []
    for roster in _require_list(payload, "rosters"):
        if not isinstance(roster, Mapping):
            continue
        for player_id in _as_list(roster.get("players")):
            native_id = _text(player_id)
            if native_id:
                entries.append(RosterEntry(native_id=native_id))
    return LeagueRosterSnapshot(provider=Provider.NATIVE, league_id=league_id, entries=tuple(entries))


def _espn_entries(teams: Iterable[Any]) -> Iterable[RosterEntry]:
    for team in teams:
        if not isinstance(team, Mapping):
            continue
        roster = _as_mapping(team.get("roster"))
        for entry in _as_list(roster.get("entries")):
            if not isinstance(entry, Mapping) or entry.get("playerId") is None:
                continue
            player = _as_mapping(_as_mapping(entry.get("playerPoolEntry")).get("player"))
            yield RosterEntry(
                foreign_id=_text(entry.get("playerId")),
                full_name=_optional_text(player.get("fullName")),
                team=espn_team(_optional_int(player.get("proTeamId"))),
            )


def snapshot_from_espn_league(league_id: str, payload: Any) -> LeagueRosterSnapshot:
    """Collect every roster entry from an ESPN league payload fetched with ``view=mRoster``."""

    league = _require_mapping(payload, "league")
    entries = tuple(_espn_entries(_as_list(league.get("teams"))))
    return LeagueRosterSnapshot(provider=Provider.FOREIGN, league_id=league_id, entries=entries)


def projections_from_sleeper(payload: Any) -> Dict[str, ProjectionRecord]:
    """Parse the Sleeper weekly projections map (native ID -> stat line)."""

    rows = _require_mapping(payload, "projections")
    projections: Dict[str, ProjectionRecord] = {}
    for player_id, row in rows.items():
        if not isinstance(row, Mapping):
            continue
        try:
            projections[str(player_id)] = ProjectionRecord.model_validate(row)
        except ValidationError:
            logger.debug("Skipping malformed projection for %s", player_id)
    return projections


def _parse_start_time(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, (int, float)):
        # Epoch milliseconds.
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    text = _text(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def games_from_scoreboard(payload: Any) -> List[GameStatusRecord]:
    """Parse an ESPN NFL scoreboard payload into game status records."""

    board = _require_mapping(payload, "scoreboard")
    games: List[GameStatusRecord] = []
    for event in _as_list(board.get("events")):
        if not isinstance(event, Mapping):
            continue
        competition = _as_mapping(next(iter(_as_list(event.get("competitions"))), None))
        teams = {"home": "", "away": ""}
        for competitor in _as_list(competition.get("competitors")):
            if not isinstance(competitor, Mapping):
                continue
            side = competitor.get("homeAway")
            if side in ("home", "away"):
                abbreviation = _as_mapping(competitor.get("team")).get("abbreviation")
                teams[side] = canonical_team(_optional_text(abbreviation)) or ""
        status_type = _as_mapping(_as_mapping(event.get("status")).get("type"))
        games.append(
            GameStatusRecord(
                game_id=_text(event.get("id")),
                home_team=teams["home"],
                away_team=teams["away"],
                start_time=_parse_start_time(event.get("date")),
                is_live=_text(status_type.get("state")).lower() == "in",
                status=_text(status_type.get("shortDetail") or status_type.get("description")),
            )
        )
    return games
