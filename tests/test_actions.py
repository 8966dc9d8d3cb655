"""Tests for outgoing action lines and the display queue."""

import pytest

from tianshan.actions import new_week_message, prepare_action, special_option_message
from tianshan.display import QueueDisplay, escape_narration
from tianshan.storage import new_game_data


# ── Action lines ─────────────────────────────────────────


def test_prepare_action_strips_tail_and_records():
    game = new_game_data()
    game["newWeek"] = 1
    out = prepare_action(game, "Luyện kiếm<br>属性变化: 武学+1")
    assert out == "Luyện kiếm"
    assert game["lastUserMessage"] == "Luyện kiếm"
    assert game["newWeek"] == 0


def test_new_week_message_sets_flag():
    game = new_game_data()
    game["currentWeek"] = 6
    line = new_week_message(game)
    assert line == "Lựa chọn hành động: Tuần mới đã bắt đầu<br>Hiện tại là Năm 1 Tháng 2 Tuần 2"
    prepare_action(game, line)
    assert game["newWeek"] == 1


def test_special_option_message():
    assert special_option_message("Tiếp tục", "Lan") == "Lan行动选择: Tiếp tục"


# ── Display queue ────────────────────────────────────────


def test_escape_narration():
    assert escape_narration("a|b `c`") == "a\\|b \\`c\\`"


@pytest.mark.asyncio
async def test_queue_display_drain():
    display = QueueDisplay()
    await display.inject_user("hành động")
    await display.send_narration("x|y")
    items = display.drain()
    assert [(i.role, i.text) for i in items] == [("user", "hành động"), ("narration", "x\\|y")]
    assert display.drain() == []
