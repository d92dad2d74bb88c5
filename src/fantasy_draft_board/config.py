from __future__ import annotations

from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from fantasy_draft_board.board.models import BoardSettings


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_cli_overrides: dict[str, object] = {}


def apply_cli_overrides(board_key: str | None) -> None:
    global _cli_overrides
    _cli_overrides = {"storage": {"key": board_key}} if board_key is not None else {}


def clear_cli_overrides() -> None:
    global _cli_overrides
    _cli_overrides = {}


_DEFAULTS: dict[str, object] = {
    "storage": {
        "db_path": "~/.config/fdb/board.db",
        "namespace": "board",
        "key": "default",
    },
    "board": {
        "num_slots": 12,
        "num_rounds": 14,
        "highlighted_slot": "",
    },
}


def create_config(
    yaml_path: str = "draft_board.yaml",
    env_prefix: str = "DRAFT_BOARD",
    defaults: dict[str, object] | None = None,
    *,
    board_key: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables.
        defaults: Default configuration values.
        board_key: Override the stored board key.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if board_key is not None:
        layers.insert(0, config_from_dict({"storage": {"key": board_key}}))
    elif _cli_overrides:
        layers.insert(0, config_from_dict(_cli_overrides))

    return ConfigurationSet(*layers)


def _optional_int(raw: object) -> int | None:
    text = "" if raw is None else str(raw).strip()
    if not text or text.lower() in ("none", "null"):
        return None
    return int(text)


def load_board_settings(cfg: AppConfig | None = None) -> BoardSettings:
    """Default board shape for new boards, from the ``board`` config section."""
    if cfg is None:
        cfg = create_config()
    return BoardSettings(
        num_slots=int(str(cfg["board.num_slots"])),
        num_rounds=int(str(cfg["board.num_rounds"])),
        highlighted_slot=_optional_int(cfg["board.highlighted_slot"]),
    )
