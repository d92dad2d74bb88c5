"""CSV ranking import with headers in any order."""

from __future__ import annotations

import csv
import logging
from typing import TYPE_CHECKING

from fantasy_draft_board.board.models import ParsedEntry
from fantasy_draft_board.ingest.line_parser import extract_category, parse_priority

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

RANKING_COLUMNS: dict[str, tuple[str, ...]] = {
    "priority": ("tier", "priority"),
    "category": ("pos", "position"),
    "group": ("team",),
    "name": ("name", "player", "player name"),
}


def split_row(line: str) -> list[str]:
    """Split one delimited line into trimmed cells, honoring quotes."""
    return [cell.strip() for cell in next(csv.reader([line]), [])]


def resolve_columns(
    header: Sequence[str],
    synonyms: Mapping[str, Sequence[str]],
    fold: bool = False,
) -> dict[str, int]:
    """Map each field to the index of the first matching header, case-insensitively.

    With ``fold`` set, whitespace inside headers is ignored as well.
    """

    def _key(value: str) -> str:
        key = value.strip().lower()
        return "".join(key.split()) if fold else key

    positions = {_key(h): i for i, h in reversed(list(enumerate(header)))}
    resolved: dict[str, int] = {}
    for field, names in synonyms.items():
        for name in names:
            index = positions.get(_key(name))
            if index is not None:
                resolved[field] = index
                break
    return resolved


def cell_at(row: Sequence[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return row[index]


def parse_table(text: str) -> list[ParsedEntry]:
    """Parse a ranking CSV whose first row is a header.

    One entry per data row, in file order. Rows are never dropped; when the
    header has no name column the raw row text is used as the name.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []
    rows = [split_row(line) for line in lines]
    columns = resolve_columns(rows[0], RANKING_COLUMNS)
    if "name" not in columns:
        logger.warning("No name column in header %s; using raw rows as names", rows[0])

    entries: list[ParsedEntry] = []
    for raw, row in zip(lines[1:], rows[1:], strict=True):
        name = cell_at(row, columns.get("name")) if "name" in columns else raw.strip()
        priority_raw = cell_at(row, columns.get("priority"))
        entries.append(
            ParsedEntry(
                name=name,
                category=extract_category(cell_at(row, columns.get("category"))),
                group=cell_at(row, columns.get("group")).upper(),
                priority=parse_priority(priority_raw) if priority_raw else 1,
            )
        )
    return entries
