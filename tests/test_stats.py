"""Tests for value ranges, favorability cap and martial levels."""

from tianshan import stats
from tianshan.storage import new_game_data


# ── Clamping ─────────────────────────────────────────────


def test_clamp_value():
    assert stats.clamp_value(150, 0, 100) == 100
    assert stats.clamp_value(-3, 0, 100) == 0
    assert stats.clamp_value("abc", 0, 100) == "abc"
    assert stats.clamp_value(True, 0, 0) is True


def test_check_all_value_ranges():
    game = new_game_data()
    game["playerTalents"]["魅力"] = 140
    game["playerStats"]["金钱"] = -5
    game["combatStats"]["攻击力"] = 1
    game["playerMood"] = 500
    game["actionPoints"] = 7
    game["currentWeek"] = 0
    game["npcFavorability"]["C"] = -10
    stats.check_all_value_ranges(game)
    assert game["playerTalents"]["魅力"] == 100
    assert game["playerStats"]["金钱"] == 0
    assert game["combatStats"]["攻击力"] == 10
    assert game["playerMood"] == 120
    assert game["actionPoints"] == 3
    assert game["currentWeek"] == 1
    assert game["npcFavorability"]["C"] == 0


def test_check_ranges_tolerates_partial_documents():
    game = {"playerStats": "broken", "playerMood": "full"}
    stats.check_all_value_ranges(game)
    assert game == {"playerStats": "broken", "playerMood": "full"}


# ── Favorability cap ────────────────────────────────────


def test_weekly_limit_from_charm():
    game = new_game_data()
    assert stats.weekly_favorability_limit(game) == 6
    game["playerTalents"]["魅力"] = 100
    assert stats.weekly_favorability_limit(game) == 10


def test_gain_clamped_to_remaining_allowance():
    game = new_game_data()
    game["weekStartFavorability"]["C"] = 10
    game["npcFavorability"]["C"] = 14
    assert stats.clamp_favorability_gain(game, "C", 5) == 2
    game["npcFavorability"]["C"] = 16
    assert stats.clamp_favorability_gain(game, "C", 5) == 0


def test_losses_pass_through():
    game = new_game_data()
    assert stats.clamp_favorability_gain(game, "C", -4) == -4


# ── Martial levels ───────────────────────────────────────


def test_wuxue_for_level():
    assert stats.wuxue_for_level(0) == 0
    assert stats.wuxue_for_level(1) == 5
    assert stats.wuxue_for_level(3) == 5 + 6 + 7


def test_level_from_wuxue_inverse():
    for level in range(stats.MAX_MARTIAL_LEVEL + 1):
        assert stats.level_from_wuxue(stats.wuxue_for_level(level)) == level
    assert stats.level_from_wuxue(4) == 0
    assert stats.level_from_wuxue(10**6) == stats.MAX_MARTIAL_LEVEL


def test_remaining_points_and_allocate():
    game = new_game_data()
    # 武学 20 covers levels 1-3 (5 + 6 + 7 = 18)
    assert stats.remaining_points(game) == 3
    assert stats.allocate_point(game, "攻击力")
    assert game["combatStats"]["攻击力"] == 30
    assert stats.allocate_point(game, "生命值")
    assert game["combatStats"]["生命值"] == 75
    assert stats.remaining_points(game) == 1
    assert not stats.allocate_point(game, "魅力")


def test_allocate_without_points():
    game = new_game_data()
    game["playerStats"]["武学"] = 0
    assert not stats.allocate_point(game, "攻击力")
    assert game["combatStats"]["攻击力"] == 20


def test_equipment_bonus_not_counted_as_spent():
    game = new_game_data()
    game["equipment"]["武器"] = "制式铁剑"
    game["combatStats"]["攻击力"] += 10
    assert stats.remaining_points(game) == 3
