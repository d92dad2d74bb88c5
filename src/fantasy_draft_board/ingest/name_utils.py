"""Player name normalization utilities for cross-source matching."""

from __future__ import annotations

import re
import unicodedata


def normalize_name(name: str) -> str:
    """Normalize a player name for cross-source matching.

    - Removes accents/diacritics via NFD decomposition
    - Converts to lowercase
    - Removes punctuation (apostrophes, periods, hyphens)
    - Collapses runs of whitespace

    Args:
        name: Raw player name from any data source.

    Returns:
        Normalized lowercase name suitable for dictionary-key matching.
    """
    normalized = unicodedata.normalize("NFD", name)
    normalized = "".join(c for c in normalized if unicodedata.category(c) != "Mn")
    normalized = normalized.lower()
    normalized = re.sub(r"[^\w\s]", "", normalized)
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized.strip()
