"""Numeric ranges and derived stats.

check_all_value_ranges() is the safety net run after every batch of state
mutations (event effects, side notes, minigame results). It clamps in place
and leaves non-numeric values alone.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

TALENT_RANGE = (0, 100)

# root -> (min, max) for scalars, or root -> {key: (min, max)} for objects
VALUE_RANGES: dict[str, Any] = {
    "playerTalents": {
        "根骨": TALENT_RANGE, "悟性": TALENT_RANGE,
        "心性": TALENT_RANGE, "魅力": TALENT_RANGE,
    },
    "playerStats": {
        "武学": (0, 300), "学识": (0, 300), "声望": (0, 300), "金钱": (0, 999999),
    },
    "combatStats": {"攻击力": (10, 300), "生命值": (25, 600)},
    "playerMood": (0, 120),
    "actionPoints": (0, 3),
    "currentWeek": (1, 9999),
}

FAVORABILITY_RANGE = (0, 100)
MAX_MOOD = VALUE_RANGES["playerMood"][1]

BASE_ATTACK = 20
ATTACK_PER_POINT = 10
BASE_HEALTH = 50
HEALTH_PER_POINT = 25
MAX_MARTIAL_LEVEL = 20


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def clamp_value(value: Any, low: float, high: float) -> Any:
    if not _is_number(value):
        return value
    return max(low, min(high, value))


def _clamp_key(container: dict, key: str, bounds: tuple[float, float], label: str) -> None:
    value = container.get(key)
    clamped = clamp_value(value, *bounds)
    if clamped != value:
        logger.debug("clamped %s from %r to %r", label, value, clamped)
        container[key] = clamped


def check_all_value_ranges(game: dict[str, Any]) -> None:
    """Clamp every ranged field of game in place."""
    for root, bounds in VALUE_RANGES.items():
        if isinstance(bounds, dict):
            section = game.get(root)
            if not isinstance(section, dict):
                continue
            for key, key_bounds in bounds.items():
                if key in section:
                    _clamp_key(section, key, key_bounds, f"{root}.{key}")
        elif root in game:
            _clamp_key(game, root, bounds, root)

    favorability = game.get("npcFavorability")
    if isinstance(favorability, dict):
        for npc_id in favorability:
            _clamp_key(favorability, npc_id, FAVORABILITY_RANGE, f"npcFavorability.{npc_id}")


# ── Favorability ─────────────────────────────────────────

def weekly_favorability_limit(game: dict[str, Any]) -> int:
    """Per-NPC favorability gain allowed in one week: 5 + charm // 20."""
    charm = game.get("playerTalents", {}).get("魅力", 0)
    return 5 + int(charm) // 20


def clamp_favorability_gain(game: dict[str, Any], npc_id: str, change: int) -> int:
    """Limit a positive change so the week's total gain stays under the cap.

    Losses pass through untouched.
    """
    if change <= 0:
        return change
    current = game.get("npcFavorability", {}).get(npc_id, 0)
    week_start = game.get("weekStartFavorability", {}).get(npc_id, current)
    remaining = weekly_favorability_limit(game) - (current - week_start)
    if remaining <= 0:
        return 0
    return min(change, remaining)


# ── Martial level ────────────────────────────────────────

def wuxue_for_level(level: int) -> int:
    """Total 武学 needed to reach level (level i costs 4 + i)."""
    level = max(0, min(level, MAX_MARTIAL_LEVEL))
    return sum(4 + i for i in range(1, level + 1))


def level_from_wuxue(wuxue: int) -> int:
    level = 0
    spent = 0
    while level < MAX_MARTIAL_LEVEL:
        cost = 4 + level + 1
        if spent + cost > wuxue:
            break
        spent += cost
        level += 1
    return level


def _equipment_bonus(game: dict[str, Any], attr: str) -> int:
    from tianshan.items import equipped_bonus
    return equipped_bonus(game, attr)


def remaining_points(game: dict[str, Any]) -> int:
    """Martial levels earned but not yet spent on base attack or health."""
    stats = game.get("playerStats", {})
    combat = game.get("combatStats", {})
    levels = level_from_wuxue(stats.get("武学", 0))
    attack = combat.get("攻击力", BASE_ATTACK) - _equipment_bonus(game, "攻击力")
    health = combat.get("生命值", BASE_HEALTH) - _equipment_bonus(game, "生命值")
    spent = (attack - BASE_ATTACK) // ATTACK_PER_POINT + (health - BASE_HEALTH) // HEALTH_PER_POINT
    return max(0, levels - spent)


def allocate_point(game: dict[str, Any], attr: str) -> bool:
    """Spend one martial level on 攻击力 (+10) or 生命值 (+25)."""
    steps = {"攻击力": ATTACK_PER_POINT, "生命值": HEALTH_PER_POINT}
    if attr not in steps or remaining_points(game) <= 0:
        return False
    combat = game.setdefault("combatStats", {})
    combat[attr] = combat.get(attr, 0) + steps[attr]
    check_all_value_ranges(game)
    return True
