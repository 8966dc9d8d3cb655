"""Tests for side-note application, rewards and event options."""

import random

from tianshan import side_note
from tianshan.storage import new_game_data


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__()
        self.value = value

    def random(self):
        return self.value


NO_CHARM_BONUS = FixedRandom(0.99)


# ── apply_side_note ──────────────────────────────────────


def test_time_sets_day_night():
    game = new_game_data()
    side_note.apply_side_note(game, {"Thời gian": "21:15"}, NO_CHARM_BONUS)
    assert game["dayNightStatus"] == "night"
    side_note.apply_side_note(game, {"Thời gian": "6:00"}, NO_CHARM_BONUS)
    assert game["dayNightStatus"] == "daytime"


def test_player_move_in_free_roam():
    game = new_game_data()
    side_note.apply_side_note(game, {"Người chơi": {"Thay đổi vị trí": "Tàng Kinh Các"}})
    assert game["userLocation"] == "cangjingge"


def test_player_move_ignored_in_story_mode():
    game = new_game_data()
    game["GameMode"] = 1
    side_note.apply_side_note(game, {"Người chơi": {"Thay đổi vị trí": "Tàng Kinh Các"}})
    assert game["userLocation"] == "tianshanpai"


def test_unknown_location_reported():
    game = new_game_data()
    report = side_note.apply_side_note(game, {"Người chơi": {"Thay đổi vị trí": "Đông Hải"}})
    assert report.unknown_locations == ["Đông Hải"]
    assert game["userLocation"] == "tianshanpai"


def test_favorability_by_difficulty():
    game = new_game_data()
    note = {"NPC hiện tại": {"Tiền Đường Quân": {"Thay đổi hảo cảm": "Tăng mạnh"}}}
    report = side_note.apply_side_note(game, note, NO_CHARM_BONUS)
    assert game["npcFavorability"]["C"] == 2
    assert report.favorability == {"C": 2}

    game["difficulty"] = "hard"
    side_note.apply_side_note(game, {"NPC hiện tại": {"Tiền Đường Quân": {"Thay đổi hảo cảm": "Giảm mạnh"}}})
    assert game["npcFavorability"]["C"] == 0  # clamped at 0


def test_charm_roll_doubles_gain():
    game = new_game_data()
    note = {"NPC hiện tại": {"Cơ Tự": {"Thay đổi hảo cảm": "Tăng mạnh"}}}
    report = side_note.apply_side_note(game, note, FixedRandom(0.0))
    assert game["npcFavorability"]["E"] == 4
    assert report.charm_doubled == ["Cơ Tự"]


def test_weekly_cap_limits_gain():
    game = new_game_data()
    game["npcFavorability"]["E"] = 5
    note = {"NPC hiện tại": {"Cơ Tự": {"Thay đổi hảo cảm": "Tăng mạnh"}}}
    side_note.apply_side_note(game, note, NO_CHARM_BONUS)
    # limit 6 with charm 25, 5 already gained this week
    assert game["npcFavorability"]["E"] == 6


def test_npc_move_takes_last_location():
    game = new_game_data()
    note = {"NPC hiện tại": {"Vũ Chúc": {"Thay đổi vị trí": "Diễn Võ Trường|Hậu Sơn"}}}
    side_note.apply_side_note(game, note)
    assert game["npcLocations"]["H"] == "houshan"


def test_unknown_npc_reported():
    game = new_game_data()
    report = side_note.apply_side_note(game, {"NPC hiện tại": {"Người lạ": {"Thay đổi hảo cảm": "Tăng"}}})
    assert report.unknown_npcs == ["Người lạ"]


def test_random_event_blocks_input():
    game = new_game_data()
    event = {"Loại sự kiện": "Sự kiện lựa chọn", "Mô tả sự kiện": "Một lão nhân."}
    report = side_note.apply_side_note(game, {"Sự kiện ngẫu nhiên": event})
    assert game["inputEnable"] == 0
    assert game["pendingEvent"] == event
    assert report.pending_event == event

    side_note.apply_side_note(game, {"Thời gian": "10:00"})
    assert game["inputEnable"] == 1
    assert game["pendingEvent"] is None


def test_battle_event_stores_reward():
    game = new_game_data()
    event = {
        "Loại sự kiện": "Sự kiện chiến đấu",
        "Thông tin kẻ địch": {"Tên": "Sơn tặc", "Phần thưởng chiến đấu": {"Loại": "Tiền", "Giá trị": 200}},
    }
    side_note.apply_side_note(game, {"Sự kiện ngẫu nhiên": event})
    assert game["pendingBattleReward"] == {"Loại": "Tiền", "Giá trị": 200}


def test_flags_reset_and_garbage_tolerated():
    game = new_game_data()
    game["randomEvent"] = 1
    game["battleEvent"] = 1
    report = side_note.apply_side_note(game, None)
    assert game["randomEvent"] == 0 and game["battleEvent"] == 0
    assert report.favorability == {}
    side_note.apply_side_note(game, {"Thời gian": "sáng", "NPC hiện tại": "x", "Người chơi": 3})


def test_battle_event_with_non_object_enemy():
    game = new_game_data()
    game["pendingBattleReward"] = {"Loại": "Tiền", "Giá trị": 50}
    event = {"Loại sự kiện": "Sự kiện chiến đấu", "Thông tin kẻ địch": "Sói hoang"}
    report = side_note.apply_side_note(game, {"Sự kiện ngẫu nhiên": event})
    assert game["pendingEvent"] == event
    assert game["inputEnable"] == 0
    assert game["pendingBattleReward"] is None
    assert report.malformed == ["Thông tin kẻ địch"]


def test_non_string_favorability_label_is_skipped():
    game = new_game_data()
    note = {"NPC hiện tại": {"Cơ Tự": {"Thay đổi hảo cảm": ["Tăng"]}}}
    report = side_note.apply_side_note(game, note, NO_CHARM_BONUS)
    assert game["npcFavorability"]["E"] == 0
    assert report.favorability == {}
    assert report.malformed == ["Cơ Tự.Thay đổi hảo cảm"]
    assert side_note.favorability_change({"Tăng": 1}, "normal") == 0


def test_non_object_npc_entry_is_reported():
    game = new_game_data()
    note = {"NPC hiện tại": {"Cơ Tự": "Tăng", "Tiền Đường Quân": {"Thay đổi hảo cảm": "Tăng"}}}
    report = side_note.apply_side_note(game, note, NO_CHARM_BONUS)
    assert report.malformed == ["Cơ Tự"]
    assert report.favorability == {"C": 1}


# ── Rewards ──────────────────────────────────────────────


def test_event_reward_talent_and_stat():
    game = new_game_data()
    assert side_note.apply_event_reward(game, "Mị Lực+2")
    assert game["playerTalents"]["魅力"] == 27
    assert side_note.apply_event_reward(game, "Tiền-600")
    assert game["playerStats"]["金钱"] == 0


def test_event_reward_mood():
    game = new_game_data()
    assert side_note.apply_event_reward(game, "Thể Lực+50")
    assert game["playerMood"] == 120


def test_event_reward_unknown():
    game = new_game_data()
    assert not side_note.apply_event_reward(game, "May Mắn+1")
    assert not side_note.apply_event_reward(game, "không có gì")


def test_battle_reward_only_pays_allowed_stats():
    game = new_game_data()
    assert side_note.apply_battle_reward(game, {"Loại": "Danh Vọng", "Giá trị": 3})
    assert game["playerStats"]["声望"] == 23
    assert not side_note.apply_battle_reward(game, {"Loại": "Mị Lực", "Giá trị": 3})
    assert not side_note.apply_battle_reward(game, None)


# ── Options ──────────────────────────────────────────────


def test_parse_success_rate():
    assert side_note.parse_success_rate("75%") == 0.75
    assert side_note.parse_success_rate("100%") == 1.0
    assert side_note.parse_success_rate("?") == 0.0


def test_special_prefix_helpers():
    assert side_note.is_special_option("Cốt truyện đặc biệt: Tiếp tục")
    assert side_note.is_special_option("特殊剧情:继续")
    assert side_note.strip_special_prefix("Cốt truyện đặc biệt: Tiếp tục") == "Tiếp tục"
    assert side_note.strip_special_prefix("Đi tiếp") == "Đi tiếp"


def test_resolve_option_success_applies_reward():
    game = new_game_data()
    game["pendingEvent"] = {"Mô tả sự kiện": "Một lão nhân xin nước."}
    option = {"Mô tả": "Cho nước", "Phần thưởng": "Danh Vọng+2", "Tỷ lệ thành công": "80%"}
    outcome = side_note.resolve_event_option(game, option, FixedRandom(0.1))
    assert outcome.success
    assert not outcome.special
    assert game["playerStats"]["声望"] == 22
    assert game["pendingEvent"] is None
    assert outcome.message == (
        "Mô tả sự kiện: Một lão nhân xin nước.<br>"
        "{{user}} lựa chọn hành động: Cho nước<br>"
        "Kết quả: Thành công"
    )


def test_resolve_option_failure():
    game = new_game_data()
    game["pendingEvent"] = {"Mô tả sự kiện": "x"}
    option = {"Mô tả": "Cốt truyện đặc biệt: Tiếp tục", "Phần thưởng": "Tiền+100", "Tỷ lệ thành công": "0%"}
    outcome = side_note.resolve_event_option(game, option, FixedRandom(0.0))
    assert not outcome.success
    assert outcome.special
    assert game["playerStats"]["金钱"] == 500
    assert outcome.message.endswith("Kết quả: Thất bại")
