"""Results reported by the embedded minigames.

Each minigame runs on its own and posts one exit message carrying its final
numbers. The payloads keep the minigames' own field names:

  blackjack-exit   {money}
  battle-exit      {result: victory|defeat|quit, remainingItems?}
  farm-exit        {money, seeds?, farmGrid?}
  alchemy-exit     {money, herbs?, pills?, playerStats?}
  worldmap-exit    {mapLocation?, companionNPC?, randomEvent?, battleEvent?}
  worldmap-close   {}

Counts and money are absolute values, not deltas: the minigame got the
current numbers when it opened and reports what is left. Some results
produce a player-action line for the story generator (spar result, event
battle, world-map departure); blackjack only produces a notice.
"""

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from tianshan.items import drop_empty
from tianshan.prompts import DEFAULT_PLACEHOLDER, render_action
from tianshan.side_note import apply_battle_reward
from tianshan.stats import check_all_value_ranges
from tianshan.vocab import LOCATION_NAMES, NPC_SPAR_REWARDS, NPCS, npc_id_for
from tianshan.week import calculate_season, season_name, week_to_date

logger = logging.getLogger(__name__)

PILL_KEYS = {"daliwan": "大力丸", "jingutie": "筋骨贴", "jinchuangyao": "金疮药", "piliwan": "霹雳丸"}
SEED_KEYS = {"wheat": "小麦种子", "eggplant": "茄子种子", "melon": "甜瓜种子", "sugarcane": "甘蔗种子"}
HERB_KEYS = {"danshen": "丹参", "danggui": "当归", "moyao": "没药", "chenxiang": "沉香"}
TALENT_KEYS = {"rootBone": "根骨", "comprehension": "悟性", "nature": "心性", "charm": "魅力"}


# ── Messages ─────────────────────────────────────────────

class BlackjackExit(BaseModel):
    type: Literal["blackjack-exit"]
    money: int


class BattleExit(BaseModel):
    type: Literal["battle-exit"]
    result: Literal["victory", "defeat", "quit"]
    remainingItems: dict[str, int] | None = None


class FarmExit(BaseModel):
    type: Literal["farm-exit"]
    money: int
    seeds: dict[str, int] | None = None
    farmGrid: list[Any] = Field(default_factory=list)


class AlchemyExit(BaseModel):
    type: Literal["alchemy-exit"]
    money: int
    herbs: dict[str, int] | None = None
    pills: dict[str, int] | None = None
    playerStats: dict[str, int | None] | None = None


class WorldmapExit(BaseModel):
    type: Literal["worldmap-exit"]
    mapLocation: str | None = None
    companionNPC: list[str] | None = None
    randomEvent: int | None = None
    battleEvent: int | None = None


class WorldmapClose(BaseModel):
    type: Literal["worldmap-close"]


MinigameMessage = Annotated[
    Union[BlackjackExit, BattleExit, FarmExit, AlchemyExit, WorldmapExit, WorldmapClose],
    Field(discriminator="type"),
]

_message_adapter: TypeAdapter = TypeAdapter(MinigameMessage)


def parse_minigame_message(data: dict[str, Any]) -> Any:
    """Validate a raw exit payload into its message model."""
    return _message_adapter.validate_python(data)


class BattleContext(BaseModel):
    """Why the battle minigame was opened."""

    kind: Literal["npc", "event"] | None = None
    npc_id: str | None = None
    previous_location: str | None = None  # where the player was before walking over


class MinigameOutcome(BaseModel):
    action: str | None = None  # line to send to the story generator
    notice: str | None = None  # line to show the player only


# ── Helpers ──────────────────────────────────────────────

def _sync_counts(game: dict[str, Any], counts: dict[str, int] | None, keys: dict[str, str]) -> None:
    # Absent keys mean the minigame used them all up
    if counts is None:
        return
    inventory = game.setdefault("inventory", {})
    for key, item_name in keys.items():
        inventory[item_name] = counts.get(key) or 0
    drop_empty(inventory)


def _date_context(game: dict[str, Any]) -> dict[str, Any]:
    week_number = int(game.get("currentWeek", 1))
    year, month, week = week_to_date(week_number)
    return {
        "year": year,
        "month": month,
        "week": week,
        "season": season_name(game.get("seasonStatus") or calculate_season(week_number)),
    }


def _set_money(game: dict[str, Any], money: int) -> None:
    game.setdefault("playerStats", {})["金钱"] = money


# ── Handlers ─────────────────────────────────────────────

def _blackjack(game: dict[str, Any], message: BlackjackExit) -> MinigameOutcome:
    _set_money(game, message.money)
    check_all_value_ranges(game)
    notice = render_action("blackjack", {"money": game["playerStats"]["金钱"]})
    return MinigameOutcome(notice=notice)


def _spar(
    game: dict[str, Any], message: BattleExit, context: BattleContext, placeholder: str
) -> MinigameOutcome:
    npc_id = context.npc_id or ""
    npc = NPCS.get(npc_id)
    if npc is None:
        logger.warning(f"Spar result for unknown NPC {npc_id!r}")
        return MinigameOutcome()
    game.setdefault("npcSparred", {})[npc_id] = True

    victory = message.result == "victory"
    reward = NPC_SPAR_REWARDS.get(npc_id) if victory else None
    if reward:
        talents = game.get("playerTalents", {})
        stats = game.get("playerStats", {})
        if reward["type"] in talents:
            talents[reward["type"]] = min(100, talents[reward["type"]] + reward["value"])
        elif reward["type"] in stats:
            stats[reward["type"]] += reward["value"]
        check_all_value_ranges(game)

    location_id = game.get("userLocation", "")
    previous = context.previous_location
    action = render_action("spar", {
        **_date_context(game),
        "location": LOCATION_NAMES.get(location_id, location_id),
        "previous_location": LOCATION_NAMES.get(previous, previous) if previous and previous != location_id else None,
        "opponent": npc["name"],
        "victory": victory,
        "reward": reward,
    }, placeholder)
    return MinigameOutcome(action=action)


def _event_battle(game: dict[str, Any], message: BattleExit, placeholder: str) -> MinigameOutcome:
    event = game.get("pendingEvent") or {}
    reward = game.get("pendingBattleReward")
    victory = message.result == "victory"
    reward_text = None
    if victory and apply_battle_reward(game, reward):
        reward_text = f"{reward['Loại']}+{reward['Giá trị']}"
    elif victory and reward:
        logger.warning(f"Unusable battle reward {reward!r}")
    enemy_info = event.get("Thông tin kẻ địch")
    enemy = enemy_info.get("Tên") if isinstance(enemy_info, dict) else None
    if not isinstance(enemy, str) or not enemy.strip():
        enemy = "Kẻ địch ẩn danh"
    action = render_action("event_battle", {
        "description": event.get("Mô tả sự kiện", ""),
        "enemy": enemy,
        "victory": victory,
        "reward": reward_text,
    }, placeholder)
    game["pendingEvent"] = None
    game["pendingBattleReward"] = None
    return MinigameOutcome(action=action)


def _battle(
    game: dict[str, Any], message: BattleExit, context: BattleContext, placeholder: str
) -> MinigameOutcome:
    # Pills are synced first so the outgoing save already has the new counts
    _sync_counts(game, message.remainingItems, PILL_KEYS)
    if context.kind == "npc":
        return _spar(game, message, context, placeholder)
    if context.kind == "event":
        return _event_battle(game, message, placeholder)
    return MinigameOutcome()


def _farm(game: dict[str, Any], message: FarmExit) -> MinigameOutcome:
    _set_money(game, message.money)
    _sync_counts(game, message.seeds, SEED_KEYS)
    game["lastFarmWeek"] = game.get("currentWeek", 1)
    game["farmGrid"] = message.farmGrid
    check_all_value_ranges(game)
    return MinigameOutcome()


def _alchemy(game: dict[str, Any], message: AlchemyExit) -> MinigameOutcome:
    _set_money(game, message.money)
    _sync_counts(game, message.herbs, HERB_KEYS)
    _sync_counts(game, message.pills, PILL_KEYS)
    if message.playerStats:
        # Alchemy reports full talent values, not deltas
        talents = game.setdefault("playerTalents", {})
        for key, talent in TALENT_KEYS.items():
            value = message.playerStats.get(key)
            if value is not None:
                talents[talent] = value
    game["alchemyDone"] = True
    check_all_value_ranges(game)
    return MinigameOutcome()


def _worldmap(game: dict[str, Any], message: WorldmapExit, placeholder: str) -> MinigameOutcome:
    if message.mapLocation:
        game["mapLocation"] = message.mapLocation
    if message.companionNPC:
        game["companionNPC"] = list(message.companionNPC)
    if message.randomEvent is not None:
        game["randomEvent"] = message.randomEvent
    if message.battleEvent is not None:
        game["battleEvent"] = message.battleEvent

    companions = []
    for name in game.get("companionNPC") or []:
        npc_id = npc_id_for(name)
        companions.append(NPCS[npc_id]["name"] if npc_id else name)

    check_all_value_ranges(game)
    game["GameMode"] = 1
    action = render_action("worldmap_departure", {
        **_date_context(game),
        "destination": game.get("mapLocation", ""),
        "companions": companions,
        "random_event": game.get("randomEvent") == 1,
        "battle_event": game.get("battleEvent") == 1,
    }, placeholder)
    return MinigameOutcome(action=action)


def apply_minigame_message(
    game: dict[str, Any],
    message: Any,
    context: BattleContext | None = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> MinigameOutcome:
    """Apply one exit message to game in place."""
    context = context or BattleContext()
    if isinstance(message, BlackjackExit):
        return _blackjack(game, message)
    if isinstance(message, BattleExit):
        return _battle(game, message, context, placeholder)
    if isinstance(message, FarmExit):
        return _farm(game, message)
    if isinstance(message, AlchemyExit):
        return _alchemy(game, message)
    if isinstance(message, WorldmapExit):
        return _worldmap(game, message, placeholder)
    # worldmap-close only closes the map
    return MinigameOutcome()
