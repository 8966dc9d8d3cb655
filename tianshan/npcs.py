"""NPC presence and gifting.

Who stands at a location comes from the weekly npcLocations roll, minus
NPCs the player has hidden (npcVisibility). A gift costs 500 money, at most
one per NPC per week, and only while favorability is 40 or lower; the
story generator decides how the NPC reacts.
"""

import logging
from typing import Any

from tianshan.prompts import DEFAULT_PLACEHOLDER, render_action
from tianshan.vocab import LOCATION_NAMES, NPCS
from tianshan.week import format_date

logger = logging.getLogger(__name__)

GIFT_COST = 500
GIFT_FAVORABILITY_CAP = 40

# Refusal reasons, as the game shows them on the gift button
ALREADY_GIFTED = "Đã Tặng"
FAVORABILITY_TOO_HIGH = "Hảo cảm>40"
NOT_ENOUGH_MONEY = "Tiền không đủ"
UNKNOWN_NPC = "Không rõ NPC"


def npcs_at_location(game: dict[str, Any], location: str) -> list[dict[str, Any]]:
    """Visible NPCs whose location this week is `location`, in roster order."""
    locations = game.get("npcLocations") or {}
    visibility = game.get("npcVisibility") or {}
    return [
        {"id": npc_id, **npc}
        for npc_id, npc in NPCS.items()
        if locations.get(npc_id) == location and visibility.get(npc_id, True)
    ]


def gift_refusal(game: dict[str, Any], npc_id: str) -> str | None:
    """Why a gift to npc_id is not possible right now, or None if it is."""
    if npc_id not in NPCS:
        return UNKNOWN_NPC
    if (game.get("npcGiftGiven") or {}).get(npc_id):
        return ALREADY_GIFTED
    if (game.get("npcFavorability") or {}).get(npc_id, 0) > GIFT_FAVORABILITY_CAP:
        return FAVORABILITY_TOO_HIGH
    if (game.get("playerStats") or {}).get("金钱", 0) < GIFT_COST:
        return NOT_ENOUGH_MONEY
    return None


def can_give_gift(game: dict[str, Any], npc_id: str) -> bool:
    return gift_refusal(game, npc_id) is None


def give_gift(game: dict[str, Any], npc_id: str) -> bool:
    """Pay for a gift and mark npc_id as gifted this week. False if refused."""
    reason = gift_refusal(game, npc_id)
    if reason is not None:
        logger.info(f"Gift to {npc_id} refused: {reason}")
        return False
    game.setdefault("playerStats", {})["金钱"] -= GIFT_COST
    game.setdefault("npcGiftGiven", {})[npc_id] = True
    return True


def gift_message(game: dict[str, Any], npc_id: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    location_id = game.get("userLocation", "")
    return render_action("gift", {
        "date": format_date(int(game.get("currentWeek", 1))),
        "location": LOCATION_NAMES.get(location_id, location_id),
        "npc": NPCS[npc_id]["name"],
        "cost": GIFT_COST,
    }, placeholder)
