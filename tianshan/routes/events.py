"""Special-event endpoints: list, next eligible, trigger, reset, options."""

from fastapi import APIRouter, Depends, HTTPException

from tianshan.events import get_triggered_events
from tianshan.session import GameSession

from .game import get_session, with_display
from .models import OptionBody

router = APIRouter()


@router.get("/events")
async def list_events(session: GameSession = Depends(get_session)):
    """All special events with their triggered flag, highest priority first."""
    triggered = set(get_triggered_events(session.game))
    rules = sorted(session.registry.rules, key=lambda r: r.priority, reverse=True)
    return [
        {
            "id": rule.id,
            "name": rule.name,
            "priority": rule.priority,
            "triggered": rule.id in triggered,
            "eligible": session.registry.is_eligible(session.game, rule),
        }
        for rule in rules
    ]


@router.get("/events/next")
async def next_event(session: GameSession = Depends(get_session)):
    """The special event that would fire now, or null."""
    rule = session.registry.check_special_events(session.game)
    return {"event": {"id": rule.id, "name": rule.name, "priority": rule.priority} if rule else None}


@router.post("/events/next/trigger")
async def trigger_next(session: GameSession = Depends(get_session)):
    """Fire the highest-priority eligible event, if any."""
    result = await session.check_and_trigger()
    return with_display(session, {"result": result.model_dump() if result else None})


@router.post("/events/option")
async def choose_option(body: OptionBody, session: GameSession = Depends(get_session)):
    """Resolve one option of the pending random event."""
    if not session.game.get("pendingEvent"):
        raise HTTPException(400, "No pending event")
    outcome, result = await session.choose_option(body.option)
    return with_display(session, {"outcome": outcome.model_dump(), "result": result.model_dump()})


@router.post("/events/{event_id}/trigger")
async def trigger_event(event_id: str, session: GameSession = Depends(get_session)):
    """Fire one event by id, ignoring its conditions (at most once)."""
    try:
        result = await session.trigger_event(event_id)
    except KeyError:
        raise HTTPException(404, "Event not found")
    return with_display(session, {"result": result.model_dump()})


@router.delete("/events/{event_id}/trigger")
async def reset_event(event_id: str, session: GameSession = Depends(get_session)):
    """Make a fired event eligible again."""
    try:
        reset = await session.reset_event(event_id)
    except KeyError:
        raise HTTPException(404, "Event not found")
    return {"ok": True, "reset": reset}
