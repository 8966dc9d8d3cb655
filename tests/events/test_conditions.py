"""Tests for condition predicates."""

from tianshan.events import MISSING, check_condition, check_event_conditions
from tianshan.storage import new_game_data


# ── check_condition ──────────────────────────────────────


def test_min_max_inclusive():
    assert check_condition(4, {"min": 4})
    assert not check_condition(3, {"min": 4})
    assert check_condition(10, {"max": 10})
    assert not check_condition(11, {"max": 10})
    assert check_condition(5, {"min": 1, "max": 9})


def test_equals_and_not_equals():
    assert check_condition("Jisi_Letter_1", {"equals": "Jisi_Letter_1"})
    assert not check_condition("", {"equals": "Jisi_Letter_1"})
    assert check_condition(1, {"notEquals": 0})
    assert not check_condition(0, {"notEquals": 0})


def test_in():
    assert check_condition("spring", {"in": ["spring", "summer"]})
    assert not check_condition("winter", {"in": ["spring", "summer"]})


def test_bools_are_not_numbers():
    assert not check_condition(True, {"equals": 1})
    assert not check_condition(1, {"equals": True})
    assert check_condition(True, {"equals": True})
    assert not check_condition(True, {"min": 0})
    assert not check_condition(0, {"in": [False]})


def test_incompatible_types_fail_without_raising():
    assert not check_condition("abc", {"min": 1})
    assert not check_condition(None, {"max": 5})
    assert not check_condition([1], {"min": 0})


def test_missing_fails_every_predicate():
    assert not check_condition(MISSING, {"notEquals": 1})
    assert not check_condition(MISSING, {"min": 0})


def test_empty_spec_passes():
    assert check_condition(0, {})


# ── check_event_conditions ───────────────────────────────


def test_all_conditions_must_hold():
    game = new_game_data()
    game["currentWeek"] = 5
    game["npcFavorability"]["E"] = 60
    conditions = {"currentWeek": {"min": 1}, "npcFavorability.E": {"min": 50}}
    assert check_event_conditions(game, "Jisi_Letter_1", conditions)
    game["npcFavorability"]["E"] = 49
    assert not check_event_conditions(game, "Jisi_Letter_1", conditions)


def test_triggered_event_is_never_eligible():
    game = new_game_data()
    game["triggeredEvents"] = ["x"]
    assert not check_event_conditions(game, "x", {})
    assert check_event_conditions(game, "y", {})


def test_missing_path_fails():
    game = new_game_data()
    assert not check_event_conditions(game, "x", {"inventory.不存在": {"min": 0}})
