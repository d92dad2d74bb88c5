"""Starter rankings shown on first run or when the saved board cannot be read."""

from __future__ import annotations

STARTER_LINES: tuple[str, ...] = (
    "1, WR, CIN, Ja'Marr Chase",
    "1, WR, MIN, Justin Jefferson",
    "1, RB, SF, Christian McCaffrey",
    "1, WR, DAL, CeeDee Lamb",
    "1, RB, ATL, Bijan Robinson",
    "1, RB, NYJ, Breece Hall",
    "1, WR, DET, Amon-Ra St. Brown",
    "1, WR, MIA, Tyreek Hill",
    "1, WR, NYJ, Garrett Wilson",
    "2, RB, IND, Jonathan Taylor",
)


def starter_text() -> str:
    return "\n".join(STARTER_LINES)
