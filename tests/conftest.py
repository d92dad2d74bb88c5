"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from fantasy_draft_board.config import clear_cli_overrides

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep tests away from the user's environment and board database.

    Removes all DRAFT_BOARD__ env vars, points storage at a temporary
    database and runs from an empty directory so no draft_board.yaml is found.
    """
    for key in list(os.environ):
        if key.startswith("DRAFT_BOARD__"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("DRAFT_BOARD__STORAGE__DB_PATH", str(tmp_path / "board.db"))
    monkeypatch.chdir(tmp_path)
    yield
    clear_cli_overrides()
