"""Special-event registry and trigger flow.

Each rule is either eligible or triggered. check_special_events() picks the
highest-priority eligible rule (ties keep registration order).
trigger_special_event() runs one rule:

    1. compose the player-action line from date, map location and rule name
    2. apply the rule's effects
    3. record the rule as currentSpecialEvent (drives arc chaining)
    4. append the id to triggeredEvents
    5. persist the document and the action line
    6. inject the action line, then send the rule's narration

State mutation (2-4) happens before any collaborator is awaited, so a
store or display failure can never cause the effects to be applied twice:
the id is already in the triggered-set when the failure surfaces.
"""

import logging
from collections.abc import Iterable
from typing import Any

from tianshan.display import DisplayError, DisplaySink
from tianshan.models import TriggerResult
from tianshan.prompts import DEFAULT_PLACEHOLDER, PromptError, render_action
from tianshan.storage.save import LAST_MESSAGE_KEY, SAVE_KEY, save_game_data, save_last_message
from tianshan.storage.variables import VariableStore
from tianshan.week import week_to_date

from .conditions import check_event_conditions
from .effects import apply_event_effects
from .rules import EventRule

logger = logging.getLogger(__name__)


def get_triggered_events(game: dict[str, Any]) -> list[str]:
    return list(game.get("triggeredEvents") or [])


def mark_event_triggered(game: dict[str, Any], event_id: str) -> bool:
    """Append event_id to the triggered-set. False if it was already there."""
    triggered = game.setdefault("triggeredEvents", [])
    if event_id in triggered:
        return False
    triggered.append(event_id)
    return True


def reset_event_trigger(game: dict[str, Any], event_id: str) -> bool:
    """Make a triggered rule eligible again. False if it had not fired."""
    triggered = game.get("triggeredEvents") or []
    if event_id not in triggered:
        return False
    triggered.remove(event_id)
    logger.info(f"Special event reset: {event_id}")
    return True


def compose_trigger_message(
    game: dict[str, Any],
    rule: EventRule,
    from_skip_week: bool = False,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    year, month, week = week_to_date(int(game.get("currentWeek", 1)))
    template = "special_event_after_skip" if from_skip_week else "special_event"
    return render_action(template, {
        "year": year,
        "month": month,
        "week": week,
        "location": game.get("mapLocation") or "Địa điểm không rõ",
        "name": rule.name,
    }, placeholder)


class EventRegistry:
    """Ordered collection of special-event rules."""

    def __init__(self, rules: Iterable[EventRule]) -> None:
        self._rules: list[EventRule] = []
        self._by_id: dict[str, EventRule] = {}
        for rule in rules:
            if rule.id in self._by_id:
                raise ValueError(f"Duplicate special event id {rule.id!r}")
            self._rules.append(rule)
            self._by_id[rule.id] = rule

    @property
    def rules(self) -> list[EventRule]:
        return list(self._rules)

    def get(self, event_id: str) -> EventRule | None:
        return self._by_id.get(event_id)

    def is_eligible(self, game: dict[str, Any], rule: EventRule) -> bool:
        return check_event_conditions(game, rule.id, rule.conditions)

    def check_special_events(self, game: dict[str, Any]) -> EventRule | None:
        """Highest-priority rule whose conditions hold, or None."""
        # sorted() is stable: equal priorities keep registration order
        for rule in sorted(self._rules, key=lambda r: r.priority, reverse=True):
            if self.is_eligible(game, rule):
                logger.debug("special event eligible: %s", rule.id)
                return rule
        return None

    async def trigger_special_event(
        self,
        game: dict[str, Any],
        rule: EventRule,
        store: VariableStore,
        display: DisplaySink | None = None,
        from_skip_week: bool = False,
        placeholder: str = DEFAULT_PLACEHOLDER,
        save_key: str = SAVE_KEY,
        last_message_key: str = LAST_MESSAGE_KEY,
    ) -> TriggerResult:
        if rule.id in get_triggered_events(game):
            return TriggerResult(event_id=rule.id, triggered=False, issues=["already triggered"])

        issues: list[str] = []
        try:
            message = compose_trigger_message(game, rule, from_skip_week, placeholder)
        except PromptError as e:
            logger.warning(f"Could not compose trigger line for {rule.id}: {e}")
            message = rule.name
            issues.append(str(e))

        game["lastUserMessage"] = message
        issues.extend(apply_event_effects(game, rule.effects))
        game["currentSpecialEvent"] = rule.id
        mark_event_triggered(game, rule.id)
        logger.info(f"Special event triggered: {rule.id} ({rule.name})")

        persisted = await save_last_message(store, message, last_message_key)
        persisted = await save_game_data(store, game, save_key) and persisted
        if not persisted:
            issues.append("store unavailable, state kept locally")

        displayed = False
        if display is not None:
            try:
                await display.inject_user(message)
                await display.send_narration(rule.text)
                displayed = True
            except DisplayError as e:
                logger.warning(f"Display failed for special event {rule.id}: {e}")
                issues.append(f"display failed: {e}")

        return TriggerResult(
            event_id=rule.id,
            triggered=True,
            persisted=persisted,
            displayed=displayed,
            message=message,
            issues=issues,
        )
