"""Available-player derivation, ranking and export."""

from .export import available_to_csv, export_available_to_csv
from .selector import (
    RankedPlayer,
    ScoringFormat,
    compute_available,
    parse_scoring_format,
    rank_by_projection,
)

__all__ = [
    "RankedPlayer",
    "ScoringFormat",
    "available_to_csv",
    "compute_available",
    "export_available_to_csv",
    "parse_scoring_format",
    "rank_by_projection",
]
