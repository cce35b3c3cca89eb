"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

_LIVE_REFRESH_ENV = "WAIVERWIRE_LIVE_REFRESH_SECONDS"
_FETCH_TIMEOUT_ENV = "WAIVERWIRE_FETCH_TIMEOUT"
_SEASON_TYPE_ENV = "WAIVERWIRE_SEASON_TYPE"
_TOP_LIMIT_ENV = "WAIVERWIRE_TOP_LIMIT"
_ESPN_S2_ENV = "WAIVERWIRE_ESPN_S2"
_ESPN_SWID_ENV = "WAIVERWIRE_ESPN_SWID"

_LIVE_REFRESH_DEFAULT = 15.0
_FETCH_TIMEOUT_DEFAULT = 10.0
_SEASON_TYPE_DEFAULT = "regular"
_TOP_LIMIT_DEFAULT = 20


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    live_refresh_seconds: float = _LIVE_REFRESH_DEFAULT
    fetch_timeout: float = _FETCH_TIMEOUT_DEFAULT
    season_type: str = _SEASON_TYPE_DEFAULT
    top_limit: int = _TOP_LIMIT_DEFAULT
    espn_s2: str | None = None
    espn_swid: str | None = None


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults on bad values."""

    season_type = os.getenv(_SEASON_TYPE_ENV, _SEASON_TYPE_DEFAULT).strip().lower()
    if season_type not in {"regular", "post"}:
        logger.warning("Invalid season type %s; using %s", season_type, _SEASON_TYPE_DEFAULT)
        season_type = _SEASON_TYPE_DEFAULT
    return Settings(
        live_refresh_seconds=_env_float(_LIVE_REFRESH_ENV, _LIVE_REFRESH_DEFAULT, clamp_min=1.0),
        fetch_timeout=_env_float(_FETCH_TIMEOUT_ENV, _FETCH_TIMEOUT_DEFAULT, clamp_min=0.1),
        season_type=season_type,
        top_limit=_env_int(_TOP_LIMIT_ENV, _TOP_LIMIT_DEFAULT, min_value=1),
        espn_s2=os.getenv(_ESPN_S2_ENV) or None,
        espn_swid=os.getenv(_ESPN_SWID_ENV) or None,
    )
