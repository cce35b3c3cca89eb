"""Cross-provider player identity reconciliation."""

from .canonical import Canonicalizer, select_canonical_player
from .names import normalize_name
from .resolver import (
    IdentityResolver,
    PlayerMetadata,
    Resolution,
    ResolutionOutcome,
)

__all__ = [
    "Canonicalizer",
    "IdentityResolver",
    "PlayerMetadata",
    "Resolution",
    "ResolutionOutcome",
    "normalize_name",
    "select_canonical_player",
]
