"""Roster aggregation across Sleeper and ESPN leagues."""

from .aggregator import FETCH_FAILURES, RosterAggregator, RosterFetch

__all__ = ["FETCH_FAILURES", "RosterAggregator", "RosterFetch"]
