"""Side tables keyed by normalized player name: ADP by source and past-season stats.

These are shown alongside players but never influence ranking.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from fantasy_draft_board.ingest.name_utils import normalize_name
from fantasy_draft_board.ingest.tabular import cell_at, resolve_columns, split_row

logger = logging.getLogger(__name__)

AdpTable = dict[str, dict[str, float]]
StatsTable = dict[str, dict[str, dict[str, float]]]


class AuxiliaryKind(Enum):
    ADP = "adp"
    STATS = "stats"


ADP_COLUMNS: dict[str, tuple[str, ...]] = {
    "name": ("name", "player", "player name"),
    "adp": ("adp",),
    "source": ("source",),
}

STAT_COLUMNS: dict[str, tuple[str, ...]] = {
    "name": ("name", "player", "playername"),
    "year": ("year", "season"),
    "targets": ("targets", "tgt"),
    "receptions": ("receptions", "rec"),
    "rec_yds": ("recyds", "receivingyards", "rec_yards"),
    "rec_td": ("rectd", "receivingtd", "receivingtds", "rec_tds"),
    "rush_att": ("rushatt", "rushingattempts", "rush_attempts"),
    "rush_yds": ("rushyds", "rushingyards", "rush_yards"),
    "rush_td": ("rushtd", "rushingtd", "rushingtds", "rush_tds"),
    "pass_att": ("passatt", "attempts", "passingattempts"),
    "pass_yds": ("passyds", "passingyards", "pass_yards"),
    "pass_td": ("passtd", "passingtd", "passingtds", "pass_tds"),
}

STAT_FIELDS: tuple[str, ...] = tuple(k for k in STAT_COLUMNS if k not in ("name", "year"))


def _rows(text: str) -> list[list[str]]:
    return [split_row(line) for line in text.splitlines() if line.strip()]


def _to_float(value: str) -> float | None:
    try:
        result = float(value)
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def _adp_source(raw: str) -> str:
    source = raw.lower()
    if "yahoo" in source:
        return "yahoo"
    if "fantasypros" in source or "fp" in source:
        return "fantasypros"
    return "consensus"


def parse_adp_table(text: str) -> AdpTable:
    """Parse ``name,adp[,source]`` rows into ``{normalized name: {source: adp}}``.

    Rows without a name or a finite ADP are skipped.
    """
    rows = _rows(text)
    if not rows:
        return {}
    columns = resolve_columns(rows[0], ADP_COLUMNS)
    if "name" not in columns or "adp" not in columns:
        logger.warning("ADP table is missing a name or adp column: %s", rows[0])
        return {}

    table: AdpTable = {}
    for row in rows[1:]:
        name = cell_at(row, columns["name"])
        value = _to_float(cell_at(row, columns["adp"]))
        if not name or value is None:
            continue
        source = _adp_source(cell_at(row, columns.get("source")))
        table.setdefault(normalize_name(name), {})[source] = value
    return table


def _parse_year(raw: str) -> str | None:
    try:
        return str(int(float(raw)))
    except (ValueError, OverflowError):
        return None


def parse_stats_table(text: str) -> StatsTable:
    """Parse season stat rows into ``{normalized name: {year: {stat: value}}}``.

    Header matching ignores case and whitespace. Stat columns missing from the
    header are omitted; unreadable cells count as zero.
    """
    rows = _rows(text)
    if not rows:
        return {}
    columns = resolve_columns(rows[0], STAT_COLUMNS, fold=True)
    if "name" not in columns or "year" not in columns:
        logger.warning("Stats table is missing a name or year column: %s", rows[0])
        return {}

    table: StatsTable = {}
    for row in rows[1:]:
        name = cell_at(row, columns["name"])
        year = _parse_year(cell_at(row, columns["year"]))
        if not name or year is None:
            continue
        season = {
            stat: _to_float(cell_at(row, columns[stat])) or 0.0
            for stat in STAT_FIELDS
            if stat in columns
        }
        table.setdefault(normalize_name(name), {})[year] = season
    return table


@dataclass
class AuxiliaryStore:
    adp: AdpTable = field(default_factory=dict)
    stats: StatsTable = field(default_factory=dict)

    def merge(self, kind: AuxiliaryKind, text: str) -> int:
        """Merge a parsed side table into the store; returns the number of names touched.

        ADP entries replace whole per-name records; stats merge per name per year.
        """
        if kind is AuxiliaryKind.ADP:
            adp = parse_adp_table(text)
            self.adp.update(adp)
            return len(adp)
        stats = parse_stats_table(text)
        for key, seasons in stats.items():
            self.stats.setdefault(key, {}).update(seasons)
        return len(stats)

    def lookup(self, name: str) -> tuple[dict[str, float], dict[str, dict[str, float]]]:
        key = normalize_name(name)
        return dict(self.adp.get(key, {})), dict(self.stats.get(key, {}))
