"""Item catalogue and inventory operations.

Inventory is {item name: count}; a count reaching zero deletes the key.
Equipment has four slots (武器, 防具, 饰品1, 饰品2). An equipped item's bonus
is added straight onto combatStats (攻击力/生命值) or playerTalents, and
taken off again when it leaves the slot.

Every operation returns False and changes nothing when it does not apply
(unknown item, none in the inventory, not usable/equippable, no money).
"""

import logging
from typing import Any

from pydantic import BaseModel

from tianshan.stats import MAX_MOOD, check_all_value_ranges

logger = logging.getLogger(__name__)

EQUIPMENT_SLOTS = ("武器", "防具", "饰品1", "饰品2")
ACCESSORY = "饰品"


class Item(BaseModel):
    tradable: bool = True
    buy_price: int
    sell_price: int
    usable: bool = False
    effect_attr: str | None = None
    effect_value: int | None = None
    equip_slot: str | None = None  # 武器, 防具 or 饰品
    equip_attr: str | None = None
    equip_value: int | None = None

    @property
    def equippable(self) -> bool:
        return self.equip_slot is not None


def _goods(buy: int, sell: int) -> Item:
    return Item(buy_price=buy, sell_price=sell)


def _food(buy: int, sell: int, mood: int) -> Item:
    return Item(buy_price=buy, sell_price=sell, usable=True,
                effect_attr="playerMood", effect_value=mood)


def _gear(slot: str, attr: str, value: int, buy: int, tradable: bool = True) -> Item:
    return Item(tradable=tradable, buy_price=buy, sell_price=buy // 2,
                equip_slot=slot, equip_attr=attr, equip_value=value)


def _accessories(attr: str, names: tuple[str, str, str, str]) -> dict[str, Item]:
    tiers = ((2, 8000), (3, 12000), (4, 18000), (5, 25000))
    return {
        name: _gear(ACCESSORY, attr, value, price)
        for name, (value, price) in zip(names, tiers)
    }


ITEMS: dict[str, Item] = {
    # seeds
    "小麦种子": _goods(75, 37),
    "茄子种子": _goods(115, 57),
    "甜瓜种子": _goods(165, 82),
    "甘蔗种子": _goods(240, 120),
    # food
    "胡饼": _food(500, 250, 20),
    "桂花糕": _food(800, 400, 40),
    "烤羊腿": _food(1500, 750, 100),
    # weapons and armour
    "制式铁剑": _gear("武器", "攻击力", 10, 1500),
    "精钢长剑": _gear("武器", "攻击力", 20, 5000),
    "归义军长剑": _gear("武器", "攻击力", 30, 9000, tradable=False),
    "普通弟子服": _gear("防具", "生命值", 25, 1500),
    "铁环软锁甲": _gear("防具", "生命值", 50, 5000),
    # accessories
    **_accessories("根骨", ("血玉护符", "青铜力士环", "千年龟甲坠", "凤血石戒指")),
    **_accessories("悟性", ("静心玉扇坠", "菩提子手串", "灵犀玉佩", "星罗盘坠")),
    **_accessories("心性", ("凝神香囊", "定心铜钟", "净心琉璃珠", "归义军虎符")),
    **_accessories("魅力", ("碧玉发钗", "流光腰坠", "凤翎耳坠", "明月珠冠")),
    # alchemy herbs and pills
    "丹参": _goods(500, 250),
    "当归": _goods(500, 250),
    "没药": _goods(500, 250),
    "沉香": _goods(500, 250),
    "大力丸": _goods(1000, 500),
    "筋骨贴": _goods(1000, 500),
    "金疮药": _goods(1000, 500),
    "霹雳丸": _goods(1000, 500),
}


# ── Inventory helpers ────────────────────────────────────

def add_item(game: dict[str, Any], name: str, count: int = 1) -> None:
    inventory = game.setdefault("inventory", {})
    inventory[name] = inventory.get(name, 0) + count
    if inventory[name] <= 0:
        del inventory[name]


def drop_empty(inventory: dict[str, int]) -> None:
    for name in [n for n, count in inventory.items() if count == 0]:
        del inventory[name]


def _bonus_target(game: dict[str, Any], attr: str) -> dict[str, Any] | None:
    for root in ("combatStats", "playerTalents"):
        section = game.get(root)
        if isinstance(section, dict) and attr in section:
            return section
    return None


def _apply_bonus(game: dict[str, Any], item: Item, sign: int) -> None:
    if not item.equip_attr or not item.equip_value:
        return
    section = _bonus_target(game, item.equip_attr)
    if section is None:
        logger.warning(f"Equipment bonus targets unknown attribute {item.equip_attr!r}")
        return
    section[item.equip_attr] += sign * item.equip_value


def equipped_bonus(game: dict[str, Any], attr: str) -> int:
    """Sum of equip_value over equipped items that boost attr."""
    total = 0
    for name in (game.get("equipment") or {}).values():
        item = ITEMS.get(name) if name else None
        if item and item.equip_attr == attr and item.equip_value:
            total += item.equip_value
    return total


# ── Operations ───────────────────────────────────────────

def use_item(game: dict[str, Any], name: str) -> bool:
    item = ITEMS.get(name)
    inventory = game.setdefault("inventory", {})
    if item is None or not item.usable or inventory.get(name, 0) <= 0:
        return False
    if item.effect_attr == "playerMood":
        game["playerMood"] = min(MAX_MOOD, game.get("playerMood", 0) + (item.effect_value or 0))
    add_item(game, name, -1)
    check_all_value_ranges(game)
    return True


def _target_slot(equipment: dict[str, Any], item: Item) -> str | None:
    if item.equip_slot in ("武器", "防具"):
        return item.equip_slot
    if item.equip_slot == ACCESSORY:
        if not equipment.get("饰品1"):
            return "饰品1"
        if not equipment.get("饰品2"):
            return "饰品2"
        return "饰品1"
    return None


def equip_item(game: dict[str, Any], name: str) -> bool:
    """Equip name from the inventory; whatever held the slot goes back to it."""
    item = ITEMS.get(name)
    inventory = game.setdefault("inventory", {})
    if item is None or not item.equippable or inventory.get(name, 0) <= 0:
        return False
    equipment = game.setdefault("equipment", {slot: None for slot in EQUIPMENT_SLOTS})
    slot = _target_slot(equipment, item)
    if slot is None:
        return False

    old = equipment.get(slot)
    if old:
        if old in ITEMS:
            _apply_bonus(game, ITEMS[old], -1)
        add_item(game, old, 1)

    equipment[slot] = name
    _apply_bonus(game, item, 1)
    add_item(game, name, -1)
    check_all_value_ranges(game)
    return True


def unequip_item(game: dict[str, Any], name: str) -> bool:
    equipment = game.get("equipment") or {}
    slot = next((s for s, equipped in equipment.items() if equipped == name), None)
    if slot is None:
        return False
    if name in ITEMS:
        _apply_bonus(game, ITEMS[name], -1)
    equipment[slot] = None
    add_item(game, name, 1)
    check_all_value_ranges(game)
    return True


def buy_item(game: dict[str, Any], name: str, count: int = 1) -> bool:
    item = ITEMS.get(name)
    stats = game.setdefault("playerStats", {})
    if item is None or not item.tradable or count <= 0:
        return False
    cost = item.buy_price * count
    if stats.get("金钱", 0) < cost:
        return False
    stats["金钱"] -= cost
    add_item(game, name, count)
    return True


def sell_item(game: dict[str, Any], name: str, count: int = 1) -> bool:
    item = ITEMS.get(name)
    inventory = game.setdefault("inventory", {})
    if item is None or not item.tradable or count <= 0 or inventory.get(name, 0) < count:
        return False
    add_item(game, name, -count)
    stats = game.setdefault("playerStats", {})
    stats["金钱"] = stats.get("金钱", 0) + item.sell_price * count
    check_all_value_ranges(game)
    return True
