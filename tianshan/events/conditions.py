"""Predicate evaluation over game-state paths.

A condition spec ANDs any of: min, max, equals, notEquals, in.
A MISSING value fails every predicate. Comparisons between incompatible
types fail the predicate instead of raising.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .paths import MISSING, get_value_by_path

logger = logging.getLogger(__name__)

PREDICATE_KEYS = frozenset({"min", "max", "equals", "notEquals", "in"})


def _strict_equal(a: Any, b: Any) -> bool:
    # True == 1 in Python; strict equality keeps bools apart from numbers
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ordered(value: Any, bound: Any) -> bool:
    return (_number(value) and _number(bound)) or (
        isinstance(value, str) and isinstance(bound, str)
    )


def check_condition(value: Any, spec: Mapping[str, Any], path: str = "") -> bool:
    if value is MISSING:
        logger.debug("condition %s: value missing", path)
        return False

    if "min" in spec:
        if not _ordered(value, spec["min"]) or not value >= spec["min"]:
            logger.debug("condition %s: %r >= %r failed", path, value, spec["min"])
            return False
    if "max" in spec:
        if not _ordered(value, spec["max"]) or not value <= spec["max"]:
            logger.debug("condition %s: %r <= %r failed", path, value, spec["max"])
            return False
    if "equals" in spec and not _strict_equal(value, spec["equals"]):
        logger.debug("condition %s: %r == %r failed", path, value, spec["equals"])
        return False
    if "in" in spec:
        choices = spec["in"]
        if not isinstance(choices, (list, tuple)) or not any(
            _strict_equal(value, c) for c in choices
        ):
            logger.debug("condition %s: %r in %r failed", path, value, choices)
            return False
    if "notEquals" in spec and _strict_equal(value, spec["notEquals"]):
        logger.debug("condition %s: %r != %r failed", path, value, spec["notEquals"])
        return False
    return True


def check_event_conditions(
    game: dict[str, Any],
    event_id: str,
    conditions: Mapping[str, Mapping[str, Any]],
) -> bool:
    """True if event_id has not fired yet and every condition holds."""
    triggered = game.get("triggeredEvents") or []
    if event_id in triggered:
        return False
    for path, spec in conditions.items():
        if not check_condition(get_value_by_path(game, path), spec, path):
            return False
    return True
