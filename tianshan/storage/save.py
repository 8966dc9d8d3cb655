"""Save document: defaults, schema merge, load and save.

The whole game state is one JSON-serializable dict. On load, the stored
document is deep-merged against DEFAULT_GAME_DATA so fields added by a newer
version are backfilled without touching existing progress. Nested dicts merge
recursively; lists and scalars already present are kept as stored.
"""

import json
import logging
from typing import Any

from tianshan.vocab import NPCS

from .variables import StoreUnavailable, VariableStore

logger = logging.getLogger(__name__)

SAVE_KEY = "gameData"
LAST_MESSAGE_KEY = "lastMessage_jxz"


def _per_npc(value: Any) -> dict[str, Any]:
    return {npc_id: value for npc_id in NPCS}


DEFAULT_GAME_DATA: dict[str, Any] = {
    "userLocation": "tianshanpai",
    "userBackground": "A",
    "textFontLevel": 2,
    "uiStyle": 0,
    "playerTalents": {"根骨": 25, "悟性": 25, "心性": 25, "魅力": 25},
    "playerStats": {"武学": 20, "学识": 20, "声望": 20, "金钱": 500},
    "combatStats": {"攻击力": 20, "生命值": 50},
    "playerMood": 100,
    "martialArts": {
        "太白仙迹": 0, "岱宗如何": 0, "掠风窃尘": 0, "流云飞袖": 0,
        "惊鸿照影": 0, "踏雪无痕": 0, "醉卧沙场": 0, "万剑归宗": 0,
    },
    "npcFavorability": _per_npc(0),
    "weekStartFavorability": _per_npc(0),
    "actionPoints": 3,
    "currentWeek": 1,
    "dayNightStatus": "daytime",
    "seasonStatus": "winter",
    "npcLocations": {
        "A": "none", "B": "yishiting", "C": "yishiting", "D": "shanmen",
        "E": "nvdizi", "F": "cangjingge", "G": "yanwuchang", "H": "houshan",
        "I": "huofang", "J": "tiejiangpu", "K": "nvdizi", "L": "none",
        "M": "danfang", "N": "danfang", "O": "none",
    },
    "GameMode": 0,  # 0 = free roam, 1 = story (SLG) mode
    "difficulty": "normal",
    "npcVisibility": {**_per_npc(True), "O": False},
    "npcGiftGiven": _per_npc(False),
    "npcSparred": _per_npc(False),
    "lastFarmWeek": 1,
    "farmGrid": [],
    "inventory": {"胡饼": 5, "小麦种子": 5},
    "equipment": {"武器": None, "防具": None, "饰品1": None, "饰品2": None},
    "lastUserMessage": "",
    "summary_Small": "",
    "summary_Week": "",
    "summary_Backup": "",
    "newWeek": 0,
    "randomEvent": 0,
    "battleEvent": 0,
    "companionNPC": [],
    "mapLocation": "天山派",
    "cgContentEnabled": False,
    "compressSummary": False,
    "enamor": 0,
    "alchemyDone": False,
    "triggeredEvents": [],
    "currentSpecialEvent": "",
    "inputEnable": 1,
    "pendingEvent": None,
    "pendingBattleReward": None,
}


def new_game_data() -> dict[str, Any]:
    """Fresh deep copy of the default document."""
    return json.loads(json.dumps(DEFAULT_GAME_DATA))


def _clone(value: Any) -> Any:
    return json.loads(json.dumps(value))


def merge_with_defaults(loaded: Any, defaults: Any) -> Any:
    """Backfill keys missing from loaded with copies of the defaults.

    Returns a new value; neither argument is mutated. A loaded value of the
    wrong shape (not a dict where a dict is expected) is replaced wholesale.
    """
    if loaded is None:
        return _clone(defaults)
    if not isinstance(defaults, dict):
        return loaded
    if not isinstance(loaded, dict):
        return _clone(defaults)

    result = dict(loaded)
    for key, default in defaults.items():
        if key not in result:
            logger.info(f"Save schema update: adding missing field {key!r}")
            result[key] = _clone(default)
        elif isinstance(default, dict):
            result[key] = merge_with_defaults(result[key], default)
    return result


async def load_or_init_game_data(
    store: VariableStore, key: str = SAVE_KEY
) -> dict[str, Any]:
    """Load the save document, falling back to defaults.

    An empty store is initialised with the defaults. Unparseable JSON is
    treated as no save. When the merge adds fields, the merged document is
    written back. Store failures propagate as StoreUnavailable.
    """
    raw = await store.get(key)
    if not raw:
        game = new_game_data()
        await store.set(key, json.dumps(game, ensure_ascii=False))
        logger.info("Initialised new save document")
        return game

    try:
        loaded = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored save is not valid JSON, using defaults: {e}")
        loaded = None

    game = merge_with_defaults(loaded, DEFAULT_GAME_DATA)
    if game != loaded:
        logger.info("Save document upgraded, writing merged version")
        await store.set(key, json.dumps(game, ensure_ascii=False))
    game["enamor"] = 0
    return game


async def save_game_data(
    store: VariableStore, game: dict[str, Any], key: str = SAVE_KEY
) -> bool:
    """Persist the document. Returns False instead of raising when the store is down."""
    try:
        await store.set(key, json.dumps(game, ensure_ascii=False))
    except StoreUnavailable as e:
        logger.warning(f"Save failed, continuing with local state only: {e}")
        return False
    return True


async def save_last_message(
    store: VariableStore, message: str, key: str = LAST_MESSAGE_KEY
) -> bool:
    try:
        await store.set(key, message)
    except StoreUnavailable as e:
        logger.warning(f"Could not store last message: {e}")
        return False
    return True
