"""Download formats for the full ranked board. All are read-only projections."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_board.board.models import EntityRecord

CSV_HEADER: tuple[str, ...] = ("rank", "tier", "pos", "team", "name", "drafted")


def to_lines(records: Sequence[EntityRecord]) -> str:
    """One ``Tier, POS, Team, Name`` line per player, re-importable as pasted text.

    The line grammar has no quoting, so the round trip is lossy in two cases:
    a player missing a position or team is written as the bare name and comes
    back with neither, and comma, pipe or tab characters inside a name are read
    back as separators (``Smith, Jr.`` returns as ``Smith Jr.``). Use
    :func:`to_csv` to keep names, positions and teams intact.
    """
    lines: list[str] = []
    for record in records:
        if record.category and record.group:
            lines.append(f"{record.priority}, {record.category}, {record.group}, {record.name}")
        else:
            lines.append(record.name)
    return "\n".join(lines) + ("\n" if lines else "")


def to_csv(records: Sequence[EntityRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for i, record in enumerate(records, start=1):
        writer.writerow(
            (i, record.priority, record.category, record.group, record.name, "yes" if record.drafted else "no")
        )
    return buffer.getvalue()


def to_json(records: Sequence[EntityRecord]) -> str:
    return json.dumps([asdict(record) for record in records], indent=2)
