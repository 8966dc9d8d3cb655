"""Global app configuration (store keys, placeholder, match thresholds)."""

import json
from pathlib import Path
from typing import Any

from .core import data_dir

_CONFIG_DEFAULTS: dict[str, Any] = {
    "save_key": "gameData",
    "last_message_key": "lastMessage_jxz",
    "player_placeholder": "{{user}}",
    "match_thresholds": {
        "scene": 0.4,
        "emotion": 0.5,
        "npc": 0.6,
    },
}

_SCALAR_KEYS = ("save_key", "last_message_key", "player_placeholder")


def _config_path() -> Path:
    return data_dir() / "config.json"


def default_config() -> dict[str, Any]:
    return json.loads(json.dumps(_CONFIG_DEFAULTS))


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config = default_config()
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        for key in _SCALAR_KEYS:
            if key in stored:
                config[key] = stored[key]
        if isinstance(stored.get("match_thresholds"), dict):
            for axis, value in stored["match_thresholds"].items():
                if axis in config["match_thresholds"] and isinstance(value, (int, float)):
                    config["match_thresholds"][axis] = float(value)
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    Unknown keys are ignored; thresholds merge axis by axis.
    """
    config = get_config()
    for key in _SCALAR_KEYS:
        if key in fields:
            config[key] = fields[key]
    if isinstance(fields.get("match_thresholds"), dict):
        for axis, value in fields["match_thresholds"].items():
            if axis in config["match_thresholds"] and isinstance(value, (int, float)):
                config["match_thresholds"][axis] = float(value)
    _config_path().write_text(json.dumps(config, indent=2))
    return config
