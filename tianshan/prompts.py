"""Handlebars templates for outgoing player-action lines.

Action lines use the chat host's `{{user}}` player placeholder. Templates
render it from the `user` context variable, so the placeholder itself is
configurable (storage config "player_placeholder"). All values are inserted
with triple-stash: the lines already contain `<br>` markup and must not be
HTML-escaped.
"""

from collections.abc import Callable
from typing import Any

import pybars

DEFAULT_PLACEHOLDER = "{{user}}"

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def _helper_join(this, items, separator):
    """{{join list "、"}}: join a list into one string."""
    return str(separator).join(str(item) for item in items)


_HELPERS: dict[str, Callable] = {
    "join": _helper_join,
}

ACTION_TEMPLATES: dict[str, str] = {
    "special_event": (
        "Tuần {{{week}}} tháng {{{month}}} năm {{{year}}}, {{{user}}} tại {{{location}}} "
        "kích hoạt cốt truyện đặc biệt —— {{{name}}}"
    ),
    "special_event_after_skip": (
        "Thời gian trôi qua một tuần, vào tuần {{{week}}} tháng {{{month}}} năm {{{year}}}, "
        "{{{user}}} tại {{{location}}} kích hoạt cốt truyện đặc biệt —— {{{name}}}"
    ),
    "new_week": (
        "Lựa chọn hành động: Tuần mới đã bắt đầu<br>"
        "Hiện tại là Năm {{{year}}} Tháng {{{month}}} Tuần {{{week}}}"
    ),
    "event_option": (
        "Mô tả sự kiện: {{{description}}}<br>"
        "{{{user}}} lựa chọn hành động: {{{choice}}}<br>"
        "Kết quả: {{#if success}}Thành công{{else}}Thất bại{{/if}}"
    ),
    "special_option": "{{{user}}}行动选择: {{{choice}}}",
    "spar": (
        "Thời gian: Năm {{{year}}} Tháng {{{month}}} Tuần {{{week}}}<br>"
        "Mùa: {{{season}}}<br>"
        "{{#if previous_location}}Địa điểm: Từ {{{previous_location}}} đi đến {{{location}}}<br>"
        "{{else}}Địa điểm: {{{location}}}<br>{{/if}}"
        "{{{user}}} lựa chọn hành động: Tỷ thí võ nghệ<br>"
        "Đối thủ tỷ thí: {{{opponent}}}<br>"
        "{{#if victory}}Kết quả: Thắng<br><br>Thay đổi thuộc tính: "
        "{{#if reward}}<br>{{{reward.type}}}: +{{{reward.value}}}{{/if}}"
        "{{else}}Kết quả: Thua<br><br>Thay đổi thuộc tính:<br>Không{{/if}}"
    ),
    "event_battle": (
        "{{{description}}}<br><br>"
        "{{#if victory}}Bạn đã chiến thắng khi đối đầu với {{{enemy}}}!"
        "{{#if reward}}<br>Nhận thưởng: {{{reward}}}{{/if}}"
        "{{else}}Bạn đã thất bại khi đối đầu với {{{enemy}}}.{{/if}}"
    ),
    "worldmap_departure": (
        "Thời gian: Năm {{{year}}} Tháng {{{month}}} Tuần {{{week}}}<br>"
        "Mùa: {{{season}}}<br>"
        "{{{user}}} lựa chọn hành động: Xuống núi du lịch<br>"
        "Đi đến đích: {{{destination}}}<br>"
        "NPC đi cùng: {{#if companions}}{{join companions \"、\"}}{{else}}Không{{/if}}"
        "{{#if random_event}}<br>Sự kiện đặc biệt: Phát hiện sự kiện ngẫu nhiên{{/if}}"
        "{{#if battle_event}}<br>Sự kiện đặc biệt: Gặp phải chiến đấu{{/if}}"
    ),
    "blackjack": "Kết thúc ván bài<br>Số tiền hiện có: {{{money}}}",
    "gift": (
        "Thời gian: {{{date}}}<br>"
        "Địa điểm: {{{location}}}<br>"
        "{{{user}}} lựa chọn hành động: Tặng quà cho {{{npc}}}<br>"
        "Chi phí: {{{cost}}} lượng bạc"
    ),
}


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context, helpers=_HELPERS))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


def render_action(name: str, context: dict[str, Any], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Render one of ACTION_TEMPLATES with the player placeholder filled in."""
    if name not in ACTION_TEMPLATES:
        raise PromptError(f"Unknown action template: {name}")
    return render_prompt(ACTION_TEMPLATES[name], {"user": placeholder, **context})
