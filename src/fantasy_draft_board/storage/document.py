"""JSON encoding of a persisted board.

The current format is an object with ``records``, ``history``, ``settings``,
``adp`` and ``stats`` keys. A bare JSON list is the legacy format: it holds
only the player records and loads with an empty pick log and default settings.
Record keys from the older browser format (``pos``, ``team``, ``tier``) are
accepted too.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict
from typing import Any

from fantasy_draft_board.board.models import BoardDocument, BoardSettings, EntityRecord
from fantasy_draft_board.storage.protocol import StorageError


def encode_document(document: BoardDocument) -> str:
    payload = {
        "records": [asdict(r) for r in document.records],
        "history": list(document.history),
        "settings": {
            "num_slots": document.settings.num_slots,
            "num_rounds": document.settings.num_rounds,
            "slot_labels": list(document.settings.slot_labels),
            "highlighted_slot": document.settings.highlighted_slot,
        },
        "adp": document.adp,
        "stats": document.stats,
    }
    return json.dumps(payload)


def _first(raw: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return default


def _decode_record(raw: Any, index: int) -> EntityRecord:
    if not isinstance(raw, dict):
        raise StorageError(f"Record {index} is not an object")
    try:
        return EntityRecord(
            id=str(_first(raw, "id", default="") or uuid.uuid4().hex[:12]),
            name=str(_first(raw, "name", default="")),
            category=str(_first(raw, "category", "pos", default="")).upper(),
            group=str(_first(raw, "group", "team", default="")).upper(),
            rank=int(_first(raw, "rank", default=index)),
            drafted=bool(_first(raw, "drafted", default=False)),
            priority=int(_first(raw, "priority", "tier", default=1)),
        )
    except (TypeError, ValueError) as e:
        raise StorageError(f"Record {index} is malformed", cause=e) from e


def _decode_settings(raw: Any) -> BoardSettings:
    if not isinstance(raw, dict):
        return BoardSettings()
    defaults = BoardSettings()
    try:
        return BoardSettings(
            num_slots=int(_first(raw, "num_slots", "numTeams", default=defaults.num_slots)),
            num_rounds=int(_first(raw, "num_rounds", "numRounds", default=defaults.num_rounds)),
            slot_labels=tuple(str(label) for label in _first(raw, "slot_labels", "teamNames", default=())),
            highlighted_slot=_optional_int(_first(raw, "highlighted_slot", "myTeam")),
        )
    except (TypeError, ValueError):
        return defaults


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def decode_document(data: str) -> BoardDocument:
    """Decode a stored document, raising :class:`StorageError` when unreadable."""
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise StorageError("Stored board is not valid JSON", cause=e) from e

    if isinstance(raw, list):
        return BoardDocument(records=tuple(_decode_record(r, i) for i, r in enumerate(raw)))
    if not isinstance(raw, dict):
        raise StorageError(f"Unexpected stored board type: {type(raw).__name__}")

    raw_records = _first(raw, "records", "players", default=[])
    raw_history = raw.get("history") or []
    if not isinstance(raw_records, list) or not isinstance(raw_history, list):
        raise StorageError("Stored board has malformed records or history")

    records = tuple(_decode_record(r, i) for i, r in enumerate(raw_records))
    history = tuple(str(entity_id) for entity_id in raw_history)
    adp = raw.get("adp") if isinstance(raw.get("adp"), dict) else {}
    stats = raw.get("stats") if isinstance(raw.get("stats"), dict) else {}
    return BoardDocument(
        records=records,
        history=history,
        settings=_decode_settings(raw.get("settings")),
        adp=adp,
        stats=stats,
    )
