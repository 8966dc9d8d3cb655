"""In-game calendar.

One year is 48 weeks: 12 months of 4 weeks. Week 1 is Year 1, Month 1,
Week 1. Seasons follow the month (12/1/2 winter, 3-5 spring, 6-8 summer,
9-11 autumn).

advance_week() is the "skip week" state transition: it resets the weekly
budgets (action points, gifts, spars, alchemy, favorability cap baseline)
and re-rolls where every NPC spends the new week.
"""

import logging
import random
from typing import Any

from tianshan.stats import check_all_value_ranges
from tianshan.vocab import NONE, NPC_LOCATION_PROBABILITY, SEASON_NAMES

logger = logging.getLogger(__name__)

WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = WEEKS_PER_MONTH * MONTHS_PER_YEAR
ACTION_POINTS_PER_WEEK = 3


def week_to_date(week: int) -> tuple[int, int, int]:
    """Absolute week number -> (year, month, week of month), all 1-based."""
    offset = max(week, 1) - 1
    year = offset // WEEKS_PER_YEAR + 1
    in_year = offset % WEEKS_PER_YEAR
    return year, in_year // WEEKS_PER_MONTH + 1, in_year % WEEKS_PER_MONTH + 1


def calculate_season(week: int) -> str:
    _, month, _ = week_to_date(week)
    if month in (12, 1, 2):
        return "winter"
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    return "autumn"


def season_name(season: str) -> str:
    return SEASON_NAMES.get(season, SEASON_NAMES["winter"])


def format_date(week: int) -> str:
    year, month, week_of_month = week_to_date(week)
    return f"Năm {year} Tháng {month} Tuần {week_of_month}"


def random_location(npc_id: str, rng: random.Random | None = None) -> str:
    """Draw an NPC's location for the week from its probability row."""
    rng = rng or random.Random()
    roll = rng.random()
    cumulative = 0.0
    for location, weight in NPC_LOCATION_PROBABILITY.get(npc_id, {}).items():
        cumulative += weight
        if roll <= cumulative:
            return location
    return NONE


def relocate_npcs(game: dict[str, Any], rng: random.Random | None = None) -> dict[str, str]:
    rng = rng or random.Random()
    locations = {npc_id: random_location(npc_id, rng) for npc_id in NPC_LOCATION_PROBABILITY}
    game["npcLocations"] = locations
    return locations


def advance_week(game: dict[str, Any], rng: random.Random | None = None) -> None:
    """Move the game to the next week, in place."""
    game["currentWeek"] = int(game.get("currentWeek", 1)) + 1
    game["actionPoints"] = ACTION_POINTS_PER_WEEK
    game["newWeek"] = 1
    game["weekStartFavorability"] = dict(game.get("npcFavorability", {}))
    game["npcGiftGiven"] = {npc_id: False for npc_id in game.get("npcGiftGiven", {})}
    game["npcSparred"] = {npc_id: False for npc_id in game.get("npcSparred", {})}
    game["alchemyDone"] = False
    game["seasonStatus"] = calculate_season(game["currentWeek"])
    relocate_npcs(game, rng)
    check_all_value_ranges(game)
    logger.info(f"Advanced to week {game['currentWeek']} ({format_date(game['currentWeek'])})")
