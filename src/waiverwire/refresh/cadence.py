"""Refresh cadence selection from the NFL game schedule.

The policy classifies "now" into one of a handful of buckets (no-game day,
live games, kickoff soon, games later today, nothing left today) and maps each
bucket to a polling interval. :class:`CadenceTracker` layers the only piece of
cross-tick state on top: whether games were live on the previous evaluation,
so a keep-display-awake hook can be told when that flips.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, List, Optional, Sequence

from waiverwire.models import GameStatusRecord


logger = logging.getLogger(__name__)

STARTING_SOON_INTERVAL = 60.0
SCHEDULED_INTERVAL = 900.0
DORMANT_INTERVAL = 3600.0
DEFAULT_LIVE_INTERVAL = 15.0
STARTING_SOON_WINDOW = timedelta(minutes=30)

_LIVE_STATUS_PATTERN = re.compile(
    r"\b(?:1st|2nd|3rd|4th|q[1-4]|ot|overtime|halftime|in progress|in_progress)\b"
)

# Python weekday numbers (Monday == 0).
_TUESDAY, _WEDNESDAY, _FRIDAY, _SATURDAY = 1, 2, 4, 5


class CadenceReason(str, Enum):
    NO_GAME_DAY = "no_game_day"
    LIVE_GAMES = "live_games"
    STARTING_SOON = "starting_soon"
    SCHEDULED_TODAY = "scheduled_today"
    ALL_FINISHED = "all_finished"
    NO_GAMES_TODAY = "no_games_today"


@dataclass(frozen=True)
class CadenceDecision:
    interval_seconds: float
    show_countdown: bool
    reason: CadenceReason
    has_live_games: bool = False


def is_live_status(game: GameStatusRecord) -> bool:
    """True when the feed flags the game live or its status names a period in progress."""

    if game.is_live:
        return True
    status = game.status.strip().lower()
    if not status or "final" in status:
        return False
    return bool(_LIVE_STATUS_PATTERN.search(status))


def thanksgiving(year: int) -> date:
    """Fourth Thursday of November."""

    first = date(year, 11, 1)
    offset = (3 - first.weekday()) % 7
    return first + timedelta(days=offset + 21)


def is_thanksgiving_friday(day: date) -> bool:
    return day == thanksgiving(day.year) + timedelta(days=1)


def is_playoff_window(day: date) -> bool:
    """Mid-December through February, when Saturdays carry games."""

    return (day.month == 12 and day.day >= 14) or day.month in (1, 2)


def _align(ts: datetime, now: datetime) -> datetime:
    if now.tzinfo is None:
        if ts.tzinfo is not None:
            return ts.astimezone().replace(tzinfo=None)
        return ts
    if ts.tzinfo is None:
        return ts.replace(tzinfo=now.tzinfo)
    return ts.astimezone(now.tzinfo)


class RefreshCadencePolicy:
    """Pure classifier from (now, today's games) to a :class:`CadenceDecision`."""

    def __init__(
        self,
        *,
        live_interval: float = DEFAULT_LIVE_INTERVAL,
        starting_soon_interval: float = STARTING_SOON_INTERVAL,
        scheduled_interval: float = SCHEDULED_INTERVAL,
        dormant_interval: float = DORMANT_INTERVAL,
        starting_soon_window: timedelta = STARTING_SOON_WINDOW,
    ):
        self.live_interval = live_interval
        self.starting_soon_interval = starting_soon_interval
        self.scheduled_interval = scheduled_interval
        self.dormant_interval = dormant_interval
        self.starting_soon_window = starting_soon_window

    def _dormant(self, reason: CadenceReason) -> CadenceDecision:
        return CadenceDecision(self.dormant_interval, False, reason)

    @staticmethod
    def todays_games(now: datetime, games: Sequence[GameStatusRecord]) -> List[GameStatusRecord]:
        today = now.date()
        return [
            game
            for game in games
            if game.start_time is not None and _align(game.start_time, now).date() == today
        ]

    def is_no_game_day(self, now: datetime, todays_games: Sequence[GameStatusRecord]) -> bool:
        weekday = now.weekday()
        if weekday in (_TUESDAY, _WEDNESDAY):
            return True
        if weekday == _FRIDAY:
            return not is_thanksgiving_friday(now.date()) and not todays_games
        if weekday == _SATURDAY:
            return not is_playoff_window(now.date()) and not todays_games
        return False

    def evaluate(self, now: datetime, games: Sequence[GameStatusRecord]) -> CadenceDecision:
        todays = self.todays_games(now, games)

        if self.is_no_game_day(now, todays):
            logger.debug("No-game day (%s); dormant cadence", now.strftime("%A"))
            return self._dormant(CadenceReason.NO_GAME_DAY)

        if not todays:
            logger.debug("No games scheduled today (%d in feed)", len(games))
            return self._dormant(CadenceReason.NO_GAMES_TODAY)

        live = [game for game in todays if is_live_status(game)]
        if live:
            logger.debug("%d live games; fast cadence", len(live))
            return CadenceDecision(self.live_interval, True, CadenceReason.LIVE_GAMES, has_live_games=True)

        window = self.starting_soon_window
        upcoming = [game for game in todays if _align(game.start_time, now) > now]
        if any(_align(game.start_time, now) - now <= window for game in upcoming):
            return CadenceDecision(self.starting_soon_interval, False, CadenceReason.STARTING_SOON)
        if upcoming:
            return CadenceDecision(self.scheduled_interval, False, CadenceReason.SCHEDULED_TODAY)
        return self._dormant(CadenceReason.ALL_FINISHED)


class CadenceTracker:
    """Evaluate the policy tick by tick and report live-state transitions.

    Not re-entrant: ticks must be issued from a single timeline.
    """

    def __init__(
        self,
        policy: RefreshCadencePolicy,
        notifier: Optional[Callable[[bool], None]] = None,
    ):
        self._policy = policy
        self._notifier = notifier
        self._has_live_games = False
        self.last_decision: Optional[CadenceDecision] = None

    @property
    def has_live_games(self) -> bool:
        return self._has_live_games

    def tick(self, now: datetime, games: Sequence[GameStatusRecord]) -> CadenceDecision:
        decision = self._policy.evaluate(now, games)
        previous = self._has_live_games
        self._has_live_games = decision.has_live_games
        self.last_decision = decision
        if decision.has_live_games != previous:
            logger.info("Live game status changed: %s -> %s", previous, decision.has_live_games)
            if self._notifier is not None:
                self._notifier(decision.has_live_games)
        return decision
