"""Tests for the item catalogue and inventory operations."""

from tianshan import items
from tianshan.storage import new_game_data


def test_catalogue_shapes():
    assert items.ITEMS["胡饼"].usable
    assert items.ITEMS["制式铁剑"].equippable
    assert not items.ITEMS["小麦种子"].equippable
    assert not items.ITEMS["归义军长剑"].tradable


# ── Inventory ────────────────────────────────────────────


def test_add_item_and_zero_removes():
    game = new_game_data()
    items.add_item(game, "丹参", 2)
    assert game["inventory"]["丹参"] == 2
    items.add_item(game, "丹参", -2)
    assert "丹参" not in game["inventory"]


def test_drop_empty():
    inventory = {"a": 0, "b": 1}
    items.drop_empty(inventory)
    assert inventory == {"b": 1}


# ── Use ──────────────────────────────────────────────────


def test_use_food_restores_mood():
    game = new_game_data()
    game["playerMood"] = 50
    assert items.use_item(game, "胡饼")
    assert game["playerMood"] == 70
    assert game["inventory"]["胡饼"] == 4


def test_use_caps_mood():
    game = new_game_data()
    game["playerMood"] = 110
    items.use_item(game, "胡饼")
    assert game["playerMood"] == items.MAX_MOOD


def test_use_rejects_unusable_or_missing():
    game = new_game_data()
    assert not items.use_item(game, "小麦种子")
    assert not items.use_item(game, "烤羊腿")
    assert not items.use_item(game, "không tồn tại")


# ── Equip ────────────────────────────────────────────────


def test_equip_weapon_adds_bonus():
    game = new_game_data()
    items.add_item(game, "制式铁剑")
    assert items.equip_item(game, "制式铁剑")
    assert game["equipment"]["武器"] == "制式铁剑"
    assert game["combatStats"]["攻击力"] == 30
    assert "制式铁剑" not in game["inventory"]


def test_equip_replaces_and_returns_old_item():
    game = new_game_data()
    items.add_item(game, "制式铁剑")
    items.add_item(game, "精钢长剑")
    items.equip_item(game, "制式铁剑")
    items.equip_item(game, "精钢长剑")
    assert game["equipment"]["武器"] == "精钢长剑"
    assert game["combatStats"]["攻击力"] == 40
    assert game["inventory"]["制式铁剑"] == 1


def test_accessories_fill_both_slots():
    game = new_game_data()
    items.add_item(game, "碧玉发钗")
    items.add_item(game, "流光腰坠")
    items.equip_item(game, "碧玉发钗")
    items.equip_item(game, "流光腰坠")
    assert game["equipment"]["饰品1"] == "碧玉发钗"
    assert game["equipment"]["饰品2"] == "流光腰坠"
    assert game["playerTalents"]["魅力"] == 25 + 2 + 3
    assert items.equipped_bonus(game, "魅力") == 5


def test_unequip_removes_bonus():
    game = new_game_data()
    items.add_item(game, "普通弟子服")
    items.equip_item(game, "普通弟子服")
    assert game["combatStats"]["生命值"] == 75
    assert items.unequip_item(game, "普通弟子服")
    assert game["combatStats"]["生命值"] == 50
    assert game["equipment"]["防具"] is None
    assert game["inventory"]["普通弟子服"] == 1
    assert not items.unequip_item(game, "普通弟子服")


def test_equip_requires_inventory():
    game = new_game_data()
    assert not items.equip_item(game, "制式铁剑")
    assert not items.equip_item(game, "胡饼")


# ── Trade ────────────────────────────────────────────────


def test_buy_and_sell():
    game = new_game_data()
    assert items.buy_item(game, "小麦种子", 2)
    assert game["playerStats"]["金钱"] == 500 - 150
    assert game["inventory"]["小麦种子"] == 7
    assert items.sell_item(game, "小麦种子", 7)
    assert game["playerStats"]["金钱"] == 350 + 7 * 37
    assert "小麦种子" not in game["inventory"]


def test_buy_rejections():
    game = new_game_data()
    assert not items.buy_item(game, "烤羊腿")  # too expensive
    assert not items.buy_item(game, "归义军长剑")
    assert not items.buy_item(game, "胡饼", 0)
    assert game["playerStats"]["金钱"] == 500


def test_sell_rejections():
    game = new_game_data()
    assert not items.sell_item(game, "胡饼", 6)
    assert not items.sell_item(game, "不存在")
