"""Typed state mutations for special events.

An effect map is {path: spec}. A spec that is a dict names one operation;
the first present key wins in this order:

    add       numeric add, a missing current value counts as 0
    set       unconditional assignment of any value
    multiply  numeric multiply, a missing current value counts as 0
    push      append to the list at path, in place
    remove    drop the first equal element from the list, in place
    concat    new list = current + value, assigned back

Any other spec (scalar, list, None) is assigned directly.

Nothing here raises. Problems in rule data are logged and returned as issue
strings so callers and tests can see them.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from tianshan.stats import check_all_value_ranges

from .paths import get_value_by_path, set_value_by_path

logger = logging.getLogger(__name__)

EFFECT_OPS = ("add", "set", "multiply", "push", "remove", "concat")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _numeric_base(current: Any) -> Any:
    # Missing, None, 0 and other falsy values all start from 0
    return current if current else 0


def apply_effect(game: dict[str, Any], path: str, spec: Any) -> str | None:
    """Apply one effect. Returns an issue string, or None on success."""
    if not isinstance(spec, Mapping):
        return set_value_by_path(game, path, copy.deepcopy(spec))

    op = next((name for name in EFFECT_OPS if name in spec), None)
    if op is None:
        issue = f"unknown effect on {path}: {dict(spec)!r}"
        logger.warning(issue)
        return issue

    # Rule data is shared between sessions; never hand out references into it
    operand = copy.deepcopy(spec[op])
    current = get_value_by_path(game, path)

    if op in ("add", "multiply"):
        base = _numeric_base(current)
        if not _is_number(base) or not _is_number(operand):
            issue = f"{op} on {path}: {current!r} and {operand!r} are not both numbers"
            logger.warning(issue)
            return issue
        return set_value_by_path(game, path, base + operand if op == "add" else base * operand)

    if op == "set":
        return set_value_by_path(game, path, operand)

    if op in ("push", "remove"):
        if not isinstance(current, list):
            issue = f"{op} on {path}: target is not a list ({current!r})"
            logger.warning(issue)
            return issue
        if op == "push":
            current.append(operand)
        elif operand in current:
            current.remove(operand)
        return None

    # concat
    if not isinstance(current, list) or not isinstance(operand, list):
        issue = f"concat on {path}: both sides must be lists"
        logger.warning(issue)
        return issue
    return set_value_by_path(game, path, current + operand)


def apply_event_effects(game: dict[str, Any], effects: Mapping[str, Any]) -> list[str]:
    """Apply every effect in order, then clamp all ranged stats.

    Returns the issues collected along the way (empty when all applied).
    """
    issues: list[str] = []
    for path, spec in effects.items():
        issue = apply_effect(game, path, spec)
        if issue:
            issues.append(issue)
        else:
            logger.debug("effect %s -> %r", path, get_value_by_path(game, path))
    check_all_value_ranges(game)
    return issues
