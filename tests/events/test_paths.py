"""Tests for state-path validation and access."""

import pytest

from tianshan.events import MISSING, STATE_ROOTS, InvalidPathError, get_value_by_path, set_value_by_path, validate_path
from tianshan.storage import new_game_data


def test_registry_types_follow_defaults():
    assert STATE_ROOTS["currentWeek"] is int
    assert STATE_ROOTS["npcFavorability"] is dict
    assert STATE_ROOTS["companionNPC"] is list
    assert STATE_ROOTS["mapLocation"] is str


@pytest.mark.parametrize("path", [
    "currentWeek",
    "npcFavorability.C",
    "playerTalents.魅力",
    "inventory.任意物品",
    "npcVisibility.O",
])
def test_valid_paths(path):
    validate_path(path)


@pytest.mark.parametrize("path", [
    "",
    "gold",
    "currentWeek.x",
    "npcFavorability.Z",
    "npcFavorability.C.extra",
    "playerTalents.luck",
])
def test_invalid_paths(path):
    with pytest.raises(InvalidPathError):
        validate_path(path)


def test_get_value():
    game = new_game_data()
    assert get_value_by_path(game, "currentWeek") == 1
    assert get_value_by_path(game, "playerStats.金钱") == 500
    assert get_value_by_path(game, "inventory.胡饼") == 5


def test_get_missing_is_sentinel():
    game = new_game_data()
    assert get_value_by_path(game, "inventory.不存在") is MISSING
    assert get_value_by_path(game, "gold") is MISSING
    assert get_value_by_path({}, "currentWeek") is MISSING
    assert not MISSING


def test_set_value():
    game = new_game_data()
    assert set_value_by_path(game, "npcFavorability.C", 40) is None
    assert game["npcFavorability"]["C"] == 40
    assert set_value_by_path(game, "mapLocation", "Thôn Bostan") is None
    assert game["mapLocation"] == "Thôn Bostan"


def test_set_new_key_under_existing_object():
    game = new_game_data()
    assert set_value_by_path(game, "inventory.丹参", 2) is None
    assert game["inventory"]["丹参"] == 2


def test_set_reports_instead_of_raising():
    game = new_game_data()
    assert "unknown state root" in set_value_by_path(game, "gold", 1)
    del game["inventory"]
    assert "parent object does not exist" in set_value_by_path(game, "inventory.胡饼", 1)
    assert "gold" not in game
