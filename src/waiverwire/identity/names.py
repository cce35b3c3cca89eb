"""Player name normalization for cross-provider matching."""

from __future__ import annotations

import re


_STRIP_PATTERN = re.compile(r"['‘’.]")
_NAME_SUFFIX_TOKENS = {"jr", "sr", "iii", "ii"}


def normalize_name(name: str) -> str:
    """Reduce a display name to a comparable key.

    Lowercases, drops apostrophes (straight and curly) and periods, turns
    hyphens into spaces and removes trailing generational suffixes. Interior
    letters are never edited, so two distinct spellings stay distinct.

    >>> normalize_name("O'Brien Jr.")
    'obrien'
    >>> normalize_name("Amon-Ra St. Brown")
    'amon ra st brown'
    """

    lowered = _STRIP_PATTERN.sub("", name.lower())
    tokens = lowered.replace("-", " ").split()
    while len(tokens) > 1 and tokens[-1] in _NAME_SUFFIX_TOKENS:
        tokens.pop()
    return " ".join(tokens)
