"""Tests for the calendar and the weekly state transition."""

import random

import pytest

from tianshan import week
from tianshan.storage import new_game_data
from tianshan.vocab import LOCATION_NAMES, NONE, NPC_LOCATION_PROBABILITY


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__()
        self.value = value

    def random(self):
        return self.value


# ── Calendar ─────────────────────────────────────────────


@pytest.mark.parametrize("absolute,expected", [
    (1, (1, 1, 1)),
    (4, (1, 1, 4)),
    (5, (1, 2, 1)),
    (48, (1, 12, 4)),
    (49, (2, 1, 1)),
    (0, (1, 1, 1)),
])
def test_week_to_date(absolute, expected):
    assert week.week_to_date(absolute) == expected


@pytest.mark.parametrize("absolute,season", [
    (1, "winter"),   # month 1
    (9, "spring"),   # month 3
    (21, "summer"),  # month 6
    (33, "autumn"),  # month 9
    (45, "winter"),  # month 12
])
def test_calculate_season(absolute, season):
    assert week.calculate_season(absolute) == season


def test_format_date_and_season_name():
    assert week.format_date(6) == "Năm 1 Tháng 2 Tuần 2"
    assert week.season_name("spring") == "Mùa Xuân"
    assert week.season_name("???") == "Mùa Đông"


# ── NPC whereabouts ──────────────────────────────────────


def test_probability_rows_sum_to_one():
    for npc_id, row in NPC_LOCATION_PROBABILITY.items():
        assert sum(row.values()) == pytest.approx(1.0), npc_id


def test_random_location_cumulative_draw():
    assert week.random_location("L", FixedRandom(0.01)) == "yanwuchang"
    assert week.random_location("L", FixedRandom(0.5)) == NONE
    assert week.random_location("I", FixedRandom(0.3)) == "huofang"


def test_random_location_unknown_npc():
    assert week.random_location("Z", FixedRandom(0.5)) == NONE


def test_relocate_npcs_covers_everyone():
    game = new_game_data()
    locations = week.relocate_npcs(game, random.Random(7))
    assert set(locations) == set(NPC_LOCATION_PROBABILITY)
    assert all(loc in LOCATION_NAMES for loc in locations.values())
    assert game["npcLocations"] == locations


# ── advance_week ─────────────────────────────────────────


def test_advance_week_resets_weekly_budgets():
    game = new_game_data()
    game["currentWeek"] = 8
    game["actionPoints"] = 0
    game["npcFavorability"]["C"] = 33
    game["npcGiftGiven"]["C"] = True
    game["npcSparred"]["G"] = True
    game["alchemyDone"] = True

    week.advance_week(game, random.Random(1))

    assert game["currentWeek"] == 9
    assert game["actionPoints"] == 3
    assert game["newWeek"] == 1
    assert game["weekStartFavorability"]["C"] == 33
    assert not any(game["npcGiftGiven"].values())
    assert not any(game["npcSparred"].values())
    assert game["alchemyDone"] is False
    assert game["seasonStatus"] == "spring"


def test_advance_week_leaves_triggered_events():
    game = new_game_data()
    game["triggeredEvents"] = ["Jisi_Letter_1"]
    week.advance_week(game, random.Random(1))
    assert game["triggeredEvents"] == ["Jisi_Letter_1"]
