"""Pydantic models for API I/O."""

from .availability import AvailablePlayerResponse, AvailableResponse, ResolutionStatsResponse
from .cadence import CadenceRequest, CadenceResponse

__all__ = [
    "AvailablePlayerResponse",
    "AvailableResponse",
    "CadenceRequest",
    "CadenceResponse",
    "ResolutionStatsResponse",
]
