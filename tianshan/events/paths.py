"""Dot-path addressing into the game state document.

`"npcFavorability.C"` reads game["npcFavorability"]["C"]. The first segment
must be a registered root; the registry maps each root to the type its value
has in the default document, and validate_path() checks a path against it
so rule data with a typo fails when it is loaded, not silently at runtime.

Reads never raise: a missing segment yields MISSING.
"""

import logging
from typing import Any

from tianshan.storage.save import DEFAULT_GAME_DATA

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class InvalidPathError(ValueError):
    """Raised when a state path does not address the state schema."""


_ROOT_NAMES = (
    "currentWeek", "playerMood", "actionPoints", "GameMode", "difficulty",
    "enamor", "newWeek", "randomEvent", "battleEvent", "mapLocation",
    "userLocation", "seasonStatus", "dayNightStatus", "companionNPC",
    "npcFavorability", "weekStartFavorability", "npcLocations",
    "playerTalents", "playerStats", "combatStats", "martialArts",
    "inventory", "equipment", "npcVisibility", "npcGiftGiven", "npcSparred",
    "triggeredEvents", "currentSpecialEvent", "inputEnable",
)

# root name -> type of its value in the default document
STATE_ROOTS: dict[str, type] = {
    name: type(DEFAULT_GAME_DATA[name]) for name in _ROOT_NAMES
}

# Roots whose nested keys are free-form (any item name may appear).
OPEN_ROOTS = frozenset({"inventory"})


def split_path(path: str) -> list[str]:
    return path.split(".")


def validate_path(path: str) -> None:
    """Raise InvalidPathError unless path addresses a known state field."""
    if not isinstance(path, str) or not path:
        raise InvalidPathError(f"State path must be a non-empty string: {path!r}")
    parts = split_path(path)
    root = parts[0]
    if root not in STATE_ROOTS:
        raise InvalidPathError(f"Unknown state root {root!r} in {path!r}")
    if len(parts) == 1:
        return
    if STATE_ROOTS[root] is not dict:
        raise InvalidPathError(f"{root!r} is not an object, cannot address {path!r}")
    if len(parts) > 2:
        raise InvalidPathError(f"{path!r} is nested deeper than the state schema")
    if root not in OPEN_ROOTS and parts[1] not in DEFAULT_GAME_DATA[root]:
        raise InvalidPathError(f"Unknown key {parts[1]!r} under {root!r}")


def get_value_by_path(game: dict[str, Any], path: str) -> Any:
    """Resolve path against game, or MISSING if any segment is absent."""
    parts = split_path(path)
    if parts[0] not in STATE_ROOTS or parts[0] not in game:
        return MISSING
    value = game[parts[0]]
    for part in parts[1:]:
        if not isinstance(value, dict) or part not in value:
            return MISSING
        value = value[part]
    return value


def set_value_by_path(game: dict[str, Any], path: str, value: Any) -> str | None:
    """Assign value at path. Returns an issue string instead of raising.

    Nested paths walk to the parent object and assign the last segment; a
    missing parent is reported, not created.
    """
    parts = split_path(path)
    if parts[0] not in STATE_ROOTS:
        issue = f"cannot set {path}: unknown state root"
        logger.warning(issue)
        return issue

    if len(parts) == 1:
        game[parts[0]] = value
        return None

    parent = game.get(parts[0])
    for part in parts[1:-1]:
        parent = parent.get(part) if isinstance(parent, dict) else None
    if not isinstance(parent, dict):
        issue = f"cannot set {path}: parent object does not exist"
        logger.warning(issue)
        return issue
    parent[parts[-1]] = value
    return None
