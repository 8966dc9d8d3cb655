"""Game state, narrative, action, week, item, minigame and NPC endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from tianshan import npcs, stats
from tianshan.display import QueueDisplay
from tianshan.items import ITEMS
from tianshan.narrative import parse_slg_main_text
from tianshan.session import GameSession
from tianshan.vocab import NPCS

from .models import (
    ActionBody,
    AllocateBody,
    MinigameBody,
    ParseBody,
    ReceiveBody,
    TradeBody,
)

router = APIRouter()


def get_session(request: Request) -> GameSession:
    return request.app.state.session


def with_display(session: GameSession, body: dict[str, Any]) -> dict[str, Any]:
    """Attach the display lines produced by this request, if the sink queues them."""
    if isinstance(session.display, QueueDisplay):
        body["display"] = [item.model_dump() for item in session.display.drain()]
    return body


# ── State ────────────────────────────────────────────────


@router.get("/state")
async def get_state(session: GameSession = Depends(get_session)):
    """Full game state document plus derived values."""
    return {
        "game": session.game,
        "remaining_points": stats.remaining_points(session.game),
        "favorability_limit": stats.weekly_favorability_limit(session.game),
    }


@router.post("/state/reset")
async def reset_state(session: GameSession = Depends(get_session)):
    """Discard progress and start from the default document."""
    persisted = await session.reset_state()
    return {"game": session.game, "persisted": persisted}


# ── Narrative & actions ──────────────────────────────────


@router.post("/narrative/parse")
async def parse_narrative(body: ParseBody, session: GameSession = Depends(get_session)):
    """Parse MAIN_TEXT into pages without touching game state."""
    thresholds = session.config["match_thresholds"]
    pages = parse_slg_main_text(
        body.text,
        allowed_speakers=body.allowed_speakers,
        scene_threshold=thresholds["scene"],
        emotion_threshold=thresholds["emotion"],
        npc_threshold=thresholds["npc"],
    )
    return {"pages": [page.model_dump() for page in pages]}


@router.post("/narrative/receive")
async def receive_narrative(body: ReceiveBody, session: GameSession = Depends(get_session)):
    """Apply a full <SLG_MODE> response: pages, side note, save."""
    result = await session.receive_response(body.text)
    return result.model_dump()


@router.post("/actions")
async def send_action(body: ActionBody, session: GameSession = Depends(get_session)):
    """Send a free-form player action."""
    if not body.message.strip():
        raise HTTPException(400, "Empty action")
    if not session.game.get("inputEnable", 1):
        raise HTTPException(400, "Free input is disabled while an event is pending")
    result = await session.send_action(body.message)
    return with_display(session, result.model_dump())


@router.post("/week/skip")
async def skip_week(session: GameSession = Depends(get_session)):
    """Advance one week; may fire a special event instead of the new-week line."""
    result = await session.skip_week()
    return with_display(session, {"result": result.model_dump(), "game": session.game})


# ── Minigames ────────────────────────────────────────────


@router.post("/minigames")
async def minigame_result(body: MinigameBody, session: GameSession = Depends(get_session)):
    """Apply a minigame exit message."""
    try:
        outcome, action = await session.apply_minigame(body.payload, body.context)
    except ValidationError as e:
        raise HTTPException(400, f"Invalid minigame message: {e.errors()[0]['msg']}")
    return with_display(session, {
        "outcome": outcome.model_dump(),
        "action": action.model_dump() if action else None,
    })


# ── Items ────────────────────────────────────────────────


def _require_item(name: str) -> None:
    if name not in ITEMS:
        raise HTTPException(404, "Item not found")


@router.post("/items/{name}/use")
async def use_item(name: str, session: GameSession = Depends(get_session)):
    _require_item(name)
    if not await session.use_item(name):
        raise HTTPException(400, "Item cannot be used")
    return {"inventory": session.game["inventory"], "playerMood": session.game["playerMood"]}


@router.post("/items/{name}/equip")
async def equip_item(name: str, session: GameSession = Depends(get_session)):
    _require_item(name)
    if not await session.equip_item(name):
        raise HTTPException(400, "Item cannot be equipped")
    return {"equipment": session.game["equipment"], "inventory": session.game["inventory"]}


@router.post("/items/{name}/unequip")
async def unequip_item(name: str, session: GameSession = Depends(get_session)):
    _require_item(name)
    if not await session.unequip_item(name):
        raise HTTPException(400, "Item is not equipped")
    return {"equipment": session.game["equipment"], "inventory": session.game["inventory"]}


@router.post("/items/{name}/buy")
async def buy_item(name: str, body: TradeBody, session: GameSession = Depends(get_session)):
    _require_item(name)
    if not await session.buy_item(name, body.count):
        raise HTTPException(400, "Cannot buy item")
    return {"inventory": session.game["inventory"], "money": session.game["playerStats"]["金钱"]}


@router.post("/items/{name}/sell")
async def sell_item(name: str, body: TradeBody, session: GameSession = Depends(get_session)):
    _require_item(name)
    if not await session.sell_item(name, body.count):
        raise HTTPException(400, "Cannot sell item")
    return {"inventory": session.game["inventory"], "money": session.game["playerStats"]["金钱"]}


@router.post("/stats/allocate")
async def allocate_point(body: AllocateBody, session: GameSession = Depends(get_session)):
    """Spend one martial level on attack or health."""
    if not await session.allocate_point(body.attr):
        raise HTTPException(400, "No point available for that attribute")
    return {
        "combatStats": session.game["combatStats"],
        "remaining_points": stats.remaining_points(session.game),
    }


# ── NPCs ─────────────────────────────────────────────────


@router.get("/locations/{location}/npcs")
async def location_npcs(location: str, session: GameSession = Depends(get_session)):
    """Visible NPCs at a location this week."""
    return [
        {**npc, "can_gift": npcs.can_give_gift(session.game, npc["id"])}
        for npc in npcs.npcs_at_location(session.game, location)
    ]


@router.post("/npcs/{npc_id}/gift")
async def give_gift(npc_id: str, session: GameSession = Depends(get_session)):
    """Spend 500 money on a gift for an NPC, once per week."""
    if npc_id not in NPCS:
        raise HTTPException(404, "NPC not found")
    reason = npcs.gift_refusal(session.game, npc_id)
    if reason is not None:
        raise HTTPException(400, reason)
    result = await session.give_gift(npc_id)
    if result is None:
        raise HTTPException(400, npcs.gift_refusal(session.game, npc_id) or "Gift refused")
    return with_display(session, {**result.model_dump(), "money": session.game["playerStats"]["金钱"]})
