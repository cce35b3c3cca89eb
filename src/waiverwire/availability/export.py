"""CSV export helpers for available-player lists."""

from __future__ import annotations

import csv
from io import StringIO
from pathlib import Path
from typing import Mapping, Optional, Sequence

from waiverwire.availability.selector import RankedPlayer
from waiverwire.models import PlayerIdentity


AVAILABLE_HEADERS: tuple[str, ...] = ("rank", "player_id", "name", "position", "team", "points")


def _rows(
    players: Sequence[PlayerIdentity],
    ranked: Optional[Sequence[RankedPlayer]],
) -> list[list[str]]:
    rows: list[list[str]] = []
    if ranked is None:
        for index, player in enumerate(players, start=1):
            rows.append([str(index), player.native_id, player.full_name, player.position, player.team or "", ""])
        return rows

    by_id: Mapping[str, PlayerIdentity] = {player.native_id: player for player in players}
    for index, item in enumerate(ranked, start=1):
        player = by_id.get(item.native_id)
        rows.append(
            [
                str(index),
                item.native_id,
                player.full_name if player else "",
                player.position if player else "",
                (player.team or "") if player else "",
                f"{item.points:.2f}",
            ]
        )
    return rows


def available_to_csv(
    players: Sequence[PlayerIdentity],
    ranked: Optional[Sequence[RankedPlayer]] = None,
) -> str:
    """Render available players (or their projection ranking) as CSV text."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(AVAILABLE_HEADERS)
    writer.writerows(_rows(players, ranked))
    return buffer.getvalue()


def export_available_to_csv(
    path: Path,
    players: Sequence[PlayerIdentity],
    ranked: Optional[Sequence[RankedPlayer]] = None,
) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(available_to_csv(players, ranked))
