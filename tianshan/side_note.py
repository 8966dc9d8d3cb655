"""State updates carried by a narrative response's side note.

The side note is the JSON block the story generator attaches to each
response:

    {
      "Thời gian": "14:30",
      "Người chơi": {"Thay đổi vị trí": "Tàng Kinh Các"},
      "NPC hiện tại": {
        "Tiền Đường Quân": {"Thay đổi hảo cảm": "Tăng", "Thay đổi vị trí": "Hậu Sơn"}
      },
      "Sự kiện ngẫu nhiên": {"Loại sự kiện": "Sự kiện lựa chọn", ...}
    }

Every field is optional and may be malformed; unknown names are reported,
not raised. Random numbers come from an injectable random.Random so the
charm roll and option rolls are testable.
"""

import logging
import random
import re
from typing import Any

from tianshan.models import OptionOutcome, SideNoteReport
from tianshan.prompts import DEFAULT_PLACEHOLDER, render_action
from tianshan.stats import (
    TALENT_RANGE,
    check_all_value_ranges,
    clamp_favorability_gain,
)
from tianshan.vocab import NONE, location_id_for, npc_id_for

logger = logging.getLogger(__name__)

TIME_RE = re.compile(r"(\d{1,2}):(\d{2})")
REWARD_RE = re.compile(r"(.+?)([+-])(\d+)")
SPECIAL_OPTION_PREFIXES = ("特殊剧情:", "Cốt truyện đặc biệt:")
BATTLE_EVENT_TYPE = "Sự kiện chiến đấu"

# label -> {difficulty: change}
FAVORABILITY_CHANGES: dict[str, dict[str, int]] = {
    "Giảm mạnh": {"easy": -2, "normal": -2, "hard": -4},
    "Giảm": {"easy": -1, "normal": -1, "hard": -2},
    "Không đổi": {"easy": 0, "normal": 0, "hard": 0},
    "Tăng": {"easy": 2, "normal": 1, "hard": 1},
    "Tăng mạnh": {"easy": 4, "normal": 2, "hard": 2},
}

# Vietnamese reward labels -> internal stat keys
ATTRIBUTE_MAP: dict[str, str] = {
    "Căn Cốt": "根骨",
    "Võ Học": "武学",
    "Tấn Công": "攻击力",
    "Máu": "生命值",
    "Sinh Lực": "生命值",
    "Mị Lực": "魅力",
    "Ngộ Tính": "悟性",
    "Tâm Tính": "心性",
    "Học Thức": "学识",
    "Danh Vọng": "声望",
    "Tiền": "金钱",
    "Ngân Lượng": "金钱",
    "Thể Lực": "playerMood",
}

BATTLE_REWARD_STATS = ("金钱", "声望", "武学", "学识")


def favorability_change(label: Any, difficulty: str) -> int:
    if not isinstance(label, str):
        return 0
    return FAVORABILITY_CHANGES.get(label.strip(), {}).get(difficulty, 0)


def _apply_time(game: dict[str, Any], value: Any) -> None:
    match = TIME_RE.search(str(value))
    if not match:
        logger.warning(f"Cannot parse side-note time {value!r}")
        return
    hour = int(match.group(1))
    game["dayNightStatus"] = "daytime" if 6 <= hour < 18 else "night"


def _apply_player_move(game: dict[str, Any], player: Any, report: SideNoteReport) -> None:
    if game.get("GameMode") != 0 or not isinstance(player, dict):
        return
    target = player.get("Thay đổi vị trí")
    if not isinstance(target, str) or not target.strip() or target.strip() == NONE:
        return
    location = location_id_for(target)
    if location is None:
        logger.warning(f"No location id for player move {target!r}")
        report.unknown_locations.append(target)
        return
    game["userLocation"] = location


def _apply_favorability(
    game: dict[str, Any],
    npc_id: str,
    npc_name: str,
    label: Any,
    rng: random.Random,
    report: SideNoteReport,
) -> None:
    if not isinstance(label, str):
        logger.warning(f"Favorability change for {npc_name!r} is not a label: {label!r}")
        report.malformed.append(f"{npc_name}.Thay đổi hảo cảm")
        return
    favorability = game.setdefault("npcFavorability", {})
    if npc_id not in favorability:
        return
    change = favorability_change(label, game.get("difficulty") or "normal")
    doubled = False
    if change > 0:
        charm = game.get("playerTalents", {}).get("魅力", 0)
        if rng.random() * 100 < charm / 2:
            change *= 2
            doubled = True
        change = clamp_favorability_gain(game, npc_id, change)
    favorability[npc_id] += change
    check_all_value_ranges(game)
    report.favorability[npc_id] = report.favorability.get(npc_id, 0) + change
    if doubled and change > 0:
        report.charm_doubled.append(npc_name)


def _apply_npc_move(game: dict[str, Any], npc_id: str, value: Any, report: SideNoteReport) -> None:
    # "Diễn Võ Trường|Nghị Sự Sảnh|Hậu Sơn": the NPC ends up at the last one
    target = str(value).split("|")[-1].strip()
    location = location_id_for(target)
    if location is None:
        logger.warning(f"No location id for NPC move {target!r}")
        report.unknown_locations.append(target)
        return
    game.setdefault("npcLocations", {})[npc_id] = location


def apply_side_note(
    game: dict[str, Any],
    side_note: dict[str, Any] | None,
    rng: random.Random | None = None,
) -> SideNoteReport:
    """Apply one side note to game in place."""
    rng = rng or random.Random()
    report = SideNoteReport()
    game["randomEvent"] = 0
    game["battleEvent"] = 0
    if not isinstance(side_note, dict):
        return report

    if side_note.get("Thời gian"):
        _apply_time(game, side_note["Thời gian"])

    _apply_player_move(game, side_note.get("Người chơi"), report)

    npcs = side_note.get("NPC hiện tại")
    if isinstance(npcs, dict):
        for npc_name, npc_data in npcs.items():
            npc_id = npc_id_for(npc_name)
            if npc_id is None:
                logger.warning(f"No NPC id for side-note name {npc_name!r}")
                report.unknown_npcs.append(npc_name)
                continue
            if not isinstance(npc_data, dict):
                logger.warning(f"Side-note entry for {npc_name!r} is not an object: {npc_data!r}")
                report.malformed.append(npc_name)
                continue
            if npc_data.get("Thay đổi hảo cảm"):
                _apply_favorability(game, npc_id, npc_name, npc_data["Thay đổi hảo cảm"], rng, report)
            # story mode keeps NPCs where the arc put them
            if game.get("GameMode") == 0 and npc_data.get("Thay đổi vị trí"):
                _apply_npc_move(game, npc_id, npc_data["Thay đổi vị trí"], report)

    event = side_note.get("Sự kiện ngẫu nhiên")
    if isinstance(event, dict) and event:
        game["inputEnable"] = 0
        game["pendingEvent"] = event
        report.pending_event = event
        game["pendingBattleReward"] = None
        if event.get("Loại sự kiện") == BATTLE_EVENT_TYPE:
            enemy = event.get("Thông tin kẻ địch")
            if isinstance(enemy, dict):
                game["pendingBattleReward"] = enemy.get("Phần thưởng chiến đấu")
            else:
                logger.warning(f"Battle event enemy info is not an object: {enemy!r}")
                report.malformed.append("Thông tin kẻ địch")
    else:
        game["inputEnable"] = 1
        game["pendingEvent"] = None

    check_all_value_ranges(game)
    return report


# ── Rewards ──────────────────────────────────────────────

def apply_event_reward(game: dict[str, Any], reward: str) -> bool:
    """Apply a reward string like "Mị Lực+2" or "Tiền-100".

    Returns False when the string does not parse or names no known stat.
    """
    match = REWARD_RE.search(reward or "")
    if not match:
        return False
    attr = match.group(1).strip()
    attr = ATTRIBUTE_MAP.get(attr, attr)
    sign = 1 if match.group(2) == "+" else -1
    value = int(match.group(3))

    talents = game.get("playerTalents", {})
    stats = game.get("playerStats", {})
    if attr in talents:
        low, high = TALENT_RANGE
        talents[attr] = min(high, talents[attr] + value) if sign > 0 else max(low, talents[attr] - value)
    elif attr in stats:
        stats[attr] = stats[attr] + value if sign > 0 else max(0, stats[attr] - value)
    elif attr == "playerMood":
        game["playerMood"] = game.get("playerMood", 0) + sign * value
    else:
        logger.warning(f"Reward names unknown attribute {attr!r}")
        return False
    check_all_value_ranges(game)
    return True


def apply_battle_reward(game: dict[str, Any], reward: dict[str, Any] | None) -> bool:
    """Apply {"Loại": "Tiền", "Giá trị": 200}. Only money, fame, martial and knowledge pay out."""
    if not isinstance(reward, dict):
        return False
    kind = reward.get("Loại")
    kind = ATTRIBUTE_MAP.get(kind, kind)
    value = reward.get("Giá trị")
    if kind not in BATTLE_REWARD_STATS or not isinstance(value, (int, float)):
        return False
    stats = game.setdefault("playerStats", {})
    stats[kind] = stats.get(kind, 0) + value
    check_all_value_ranges(game)
    return True


# ── Event options ────────────────────────────────────────

def parse_success_rate(raw: Any) -> float:
    """"75%" -> 0.75. Unparseable rates count as 0."""
    match = re.match(r"\s*(\d+)", str(raw or ""))
    return int(match.group(1)) / 100 if match else 0.0


def is_special_option(description: str) -> bool:
    return description.startswith(SPECIAL_OPTION_PREFIXES)


def strip_special_prefix(description: str) -> str:
    for prefix in SPECIAL_OPTION_PREFIXES:
        if description.startswith(prefix):
            return description[len(prefix):].lstrip()
    return description


def resolve_event_option(
    game: dict[str, Any],
    option: dict[str, Any],
    rng: random.Random | None = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> OptionOutcome:
    """Roll one option of the pending random event and apply its reward."""
    rng = rng or random.Random()
    event = game.get("pendingEvent") or {}
    choice = str(option.get("Mô tả") or "")
    success = rng.random() < parse_success_rate(option.get("Tỷ lệ thành công"))
    if success and option.get("Phần thưởng"):
        apply_event_reward(game, str(option["Phần thưởng"]))

    message = render_action("event_option", {
        "description": event.get("Mô tả sự kiện", ""),
        "choice": choice,
        "success": success,
    }, placeholder)
    game["pendingEvent"] = None
    return OptionOutcome(success=success, message=message, special=is_special_option(choice))
