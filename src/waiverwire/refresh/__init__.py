"""Polling cadence selection for live scoring refreshes."""

from .cadence import (
    CadenceDecision,
    CadenceReason,
    CadenceTracker,
    RefreshCadencePolicy,
    is_live_status,
    is_playoff_window,
    is_thanksgiving_friday,
    thanksgiving,
)

__all__ = [
    "CadenceDecision",
    "CadenceReason",
    "CadenceTracker",
    "RefreshCadencePolicy",
    "is_live_status",
    "is_playoff_window",
    "is_thanksgiving_friday",
    "thanksgiving",
]
