"""One player's running game.

GameSession owns the state document and wires the pure modules to the two
collaborators: the variable store (persistence) and the display sink.
Every public operation takes the session lock, so actions run one at a
time, start to finish, including their awaits on the collaborators.

Persistence failures never abort an action: the state change stands, the
result reports persisted=False and the game continues on local state until
the next successful save.
"""

import asyncio
import logging
import random
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from tianshan import items, npcs, stats
from tianshan.actions import new_week_message, prepare_action, special_option_message
from tianshan.display import DisplayError, DisplaySink, QueueDisplay
from tianshan.events import SPECIAL_EVENTS, EventRegistry, EventRule, reset_event_trigger
from tianshan.minigames import BattleContext, MinigameOutcome, apply_minigame_message, parse_minigame_message
from tianshan.models import ActionResult, OptionOutcome, ReceiveResult, TriggerResult
from tianshan.narrative import parse_slg_envelope, parse_slg_main_text
from tianshan.side_note import apply_side_note, resolve_event_option, strip_special_prefix
from tianshan.storage import (
    StoreUnavailable,
    VariableStore,
    default_config,
    load_or_init_game_data,
    new_game_data,
    save_game_data,
    save_last_message,
)
from tianshan.week import advance_week

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        store: VariableStore,
        display: DisplaySink | None = None,
        registry: EventRegistry | None = None,
        config: Callable[[], dict[str, Any]] = default_config,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.display = display if display is not None else QueueDisplay()
        self.registry = registry or EventRegistry(SPECIAL_EVENTS)
        self._config = config
        self.rng = rng or random.Random()
        self.game: dict[str, Any] = new_game_data()
        self._lock = asyncio.Lock()

    # ── Config shortcuts ────────────────────────────────

    @property
    def config(self) -> dict[str, Any]:
        return self._config()

    def _placeholder(self, config: dict[str, Any]) -> str:
        return config["player_placeholder"]

    # ── Persistence ─────────────────────────────────────

    async def load(self) -> bool:
        """Load the save. False means the store was unreachable and defaults are in use."""
        async with self._lock:
            try:
                self.game = await load_or_init_game_data(self.store, self.config["save_key"])
            except StoreUnavailable as e:
                logger.warning(f"Store unavailable on load, starting from defaults: {e}")
                self.game = new_game_data()
                return False
            return True

    async def _save(self) -> bool:
        return await save_game_data(self.store, self.game, self.config["save_key"])

    async def save(self) -> bool:
        async with self._lock:
            return await self._save()

    async def reset_state(self) -> bool:
        async with self._lock:
            self.game = new_game_data()
            logger.info("Game state reset to defaults")
            return await self._save()

    # ── Narrative in / actions out ──────────────────────

    async def receive_response(self, text: str) -> ReceiveResult:
        """Parse one story-generator response and apply its side note."""
        async with self._lock:
            config = self.config
            thresholds = config["match_thresholds"]
            envelope = parse_slg_envelope(text)
            pages = parse_slg_main_text(
                envelope.main_text,
                allowed_speakers=self.game.get("companionNPC") or [],
                scene_threshold=thresholds["scene"],
                emotion_threshold=thresholds["emotion"],
                npc_threshold=thresholds["npc"],
            )
            report = None
            if envelope.side_note is not None:
                report = apply_side_note(self.game, envelope.side_note, self.rng)
            stats.check_all_value_ranges(self.game)
            persisted = await self._save()
            return ReceiveResult(
                pages=pages,
                summary=envelope.summary,
                complete=envelope.complete,
                report=report,
                persisted=persisted,
            )

    async def _send_action(self, message: str) -> ActionResult:
        config = self.config
        outgoing = prepare_action(self.game, message)
        persisted = await save_last_message(self.store, outgoing, config["last_message_key"])
        persisted = await self._save() and persisted
        displayed = False
        try:
            await self.display.inject_user(outgoing)
            displayed = True
        except DisplayError as e:
            logger.warning(f"Could not deliver action line: {e}")
        return ActionResult(message=outgoing, persisted=persisted, displayed=displayed)

    async def send_action(self, message: str) -> ActionResult:
        async with self._lock:
            return await self._send_action(message)

    # ── Special events ──────────────────────────────────

    async def _trigger(self, rule: EventRule, from_skip_week: bool = False) -> TriggerResult:
        config = self.config
        return await self.registry.trigger_special_event(
            self.game,
            rule,
            self.store,
            self.display,
            from_skip_week=from_skip_week,
            placeholder=self._placeholder(config),
            save_key=config["save_key"],
            last_message_key=config["last_message_key"],
        )

    async def check_and_trigger(self) -> TriggerResult | None:
        """Fire the highest-priority eligible special event, if any."""
        async with self._lock:
            rule = self.registry.check_special_events(self.game)
            if rule is None:
                return None
            return await self._trigger(rule)

    async def trigger_event(self, event_id: str) -> TriggerResult:
        """Fire one rule by id, skipping its conditions. KeyError if unknown."""
        async with self._lock:
            rule = self.registry.get(event_id)
            if rule is None:
                raise KeyError(event_id)
            return await self._trigger(rule)

    async def reset_event(self, event_id: str) -> bool:
        async with self._lock:
            if self.registry.get(event_id) is None:
                raise KeyError(event_id)
            changed = reset_event_trigger(self.game, event_id)
            if changed:
                await self._save()
            return changed

    async def skip_week(self) -> TriggerResult | ActionResult:
        """Advance one week; a due special event replaces the new-week line."""
        async with self._lock:
            advance_week(self.game, self.rng)
            rule = self.registry.check_special_events(self.game)
            if rule is not None:
                return await self._trigger(rule, from_skip_week=True)
            return await self._send_action(new_week_message(self.game, self._placeholder(self.config)))

    async def choose_option(self, option: dict[str, Any]) -> tuple[OptionOutcome, TriggerResult | ActionResult]:
        """Resolve an option of the pending random event.

        A "Cốt truyện đặc biệt:" option hands over to the next eligible
        special event; without one it is sent like any other choice.
        """
        async with self._lock:
            placeholder = self._placeholder(self.config)
            outcome = resolve_event_option(self.game, option, self.rng, placeholder)
            if outcome.special:
                rule = self.registry.check_special_events(self.game)
                if rule is not None:
                    choice = strip_special_prefix(str(option.get("Mô tả") or ""))
                    try:
                        await self.display.inject_user(special_option_message(choice, placeholder))
                    except DisplayError as e:
                        logger.warning(f"Could not deliver option line: {e}")
                    return outcome, await self._trigger(rule)
            return outcome, await self._send_action(outcome.message)

    # ── Minigames and items ─────────────────────────────

    async def apply_minigame(
        self, payload: dict[str, Any], context: BattleContext | None = None
    ) -> tuple[MinigameOutcome, ActionResult | None]:
        """Apply a minigame exit payload. Raises pydantic.ValidationError on a bad payload."""
        try:
            message = parse_minigame_message(payload)
        except ValidationError:
            logger.warning(f"Rejected minigame message of type {payload.get('type')!r}")
            raise
        async with self._lock:
            outcome = apply_minigame_message(
                self.game, message, context, self._placeholder(self.config)
            )
            if outcome.action:
                return outcome, await self._send_action(outcome.action)
            await self._save()
            return outcome, None

    async def _mutate(self, op: Callable[..., bool], *args: Any) -> bool:
        async with self._lock:
            changed = op(self.game, *args)
            if changed:
                await self._save()
            return changed

    async def use_item(self, name: str) -> bool:
        return await self._mutate(items.use_item, name)

    async def equip_item(self, name: str) -> bool:
        return await self._mutate(items.equip_item, name)

    async def unequip_item(self, name: str) -> bool:
        return await self._mutate(items.unequip_item, name)

    async def buy_item(self, name: str, count: int = 1) -> bool:
        return await self._mutate(items.buy_item, name, count)

    async def sell_item(self, name: str, count: int = 1) -> bool:
        return await self._mutate(items.sell_item, name, count)

    async def allocate_point(self, attr: str) -> bool:
        return await self._mutate(stats.allocate_point, attr)

    # ── NPCs ────────────────────────────────────────────

    async def give_gift(self, npc_id: str) -> ActionResult | None:
        """Give a gift and tell the story generator. None when the gift is refused."""
        async with self._lock:
            if not npcs.give_gift(self.game, npc_id):
                return None
            return await self._send_action(
                npcs.gift_message(self.game, npc_id, self._placeholder(self.config))
            )
