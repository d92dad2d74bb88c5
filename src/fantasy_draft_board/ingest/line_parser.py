"""Line-oriented import grammar.

Two forms are accepted, tried in order:

* structured: ``Tier, POS, Team, Name`` separated by commas, pipes or tabs
* freeform: ``Name POS TEAM`` where POS is a recognized position

Anything else becomes a name-only entry. Parsing never fails.
"""

from __future__ import annotations

import re

from fantasy_draft_board.board.models import ParsedEntry
from fantasy_draft_board.board.sequencer import RECOGNIZED_CATEGORIES

_SPLIT_RE = re.compile(r"[,|\t]")
_CATEGORY_RE = re.compile(r"[A-Z]+")
_FREEFORM_RE = re.compile(
    r"(.+?)\s+(" + "|".join(RECOGNIZED_CATEGORIES) + r")\s+([A-Z]{2,3})",
    re.IGNORECASE,
)


def extract_category(token: str) -> str:
    """Leading run of letters, uppercased (``"WR12"`` -> ``"WR"``)."""
    match = _CATEGORY_RE.search(token.upper())
    return match.group(0) if match else ""


def parse_priority(token: str) -> int:
    try:
        return max(1, int(token))
    except ValueError:
        return 1


def _parse_structured(line: str) -> ParsedEntry | None:
    tokens = [t.strip() for t in _SPLIT_RE.split(line)]
    tokens = [t for t in tokens if t]
    if len(tokens) < 4 or not tokens[0].isdigit():
        return None
    return ParsedEntry(
        priority=parse_priority(tokens[0]),
        category=extract_category(tokens[1]),
        group=tokens[2].upper(),
        name=" ".join(tokens[3:]),
    )


def _parse_freeform(line: str) -> ParsedEntry:
    match = _FREEFORM_RE.match(line.strip())
    if match is None:
        return ParsedEntry(name=line.strip())
    return ParsedEntry(
        name=match.group(1).strip(),
        category=match.group(2).upper(),
        group=match.group(3).upper(),
    )


def parse_line(line: str) -> ParsedEntry:
    structured = _parse_structured(line)
    if structured is not None:
        return structured
    return _parse_freeform(line)


def parse_lines(text: str) -> list[ParsedEntry]:
    """Parse pasted text, one player per non-blank line, preserving order."""
    return [parse_line(line) for line in text.splitlines() if line.strip()]
