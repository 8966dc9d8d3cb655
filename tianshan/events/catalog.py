"""Built-in special events.

Story arcs are chains: step N+1 requires currentSpecialEvent == step N, so
once the first step's conditions hold the arc plays out in order, one step
per "Cốt truyện đặc biệt: Tiếp tục" choice. Every non-final step ends with
that option so the player can advance; the final step returns the player to
the sect and reopens free input.
"""

import json
from typing import Any

from .rules import EventRule, load_rules

CONTINUE_OPTION = "Cốt truyện đặc biệt: Tiếp tục"

RETURN_TO_SECT: dict[str, Any] = {
    "GameMode": {"set": 0},
    "inputEnable": {"set": 1},
    "mapLocation": {"set": "Thiên Sơn phái"},
    "companionNPC": {"set": []},
    "userLocation": {"set": "tianshanpai"},
}


def _slg_text(
    main: str,
    summary: str,
    description: str = "",
    time: str = "10:00",
    location: str = "none",
    npcs: dict[str, Any] | None = None,
) -> str:
    side_note: dict[str, Any] = {}
    if description:
        side_note["Sự kiện ngẫu nhiên"] = {
            "Loại sự kiện": "Sự kiện lựa chọn",
            "Mô tả sự kiện": description,
            "Tùy chọn 1": {
                "Mô tả": CONTINUE_OPTION,
                "Phần thưởng": "",
                "Tỷ lệ thành công": "100%",
            },
        }
    side_note["Thời gian"] = time
    side_note["Người chơi"] = {"Thay đổi vị trí": location}
    side_note["NPC hiện tại"] = npcs or {}
    return (
        "<SLG_MODE>\n\n"
        f"<MAIN_TEXT>\n{main}\n</MAIN_TEXT>\n\n"
        f"<SUMMARY>\n{summary}\n</SUMMARY>\n\n"
        f"<SIDE_NOTE>\n{json.dumps(side_note, ensure_ascii=False, indent=4)}\n</SIDE_NOTE>\n\n"
        "</SLG_MODE>"
    )


def _chain(
    prefix: str,
    steps: list[dict[str, Any]],
    first_priority: int,
    first_conditions: dict[str, Any],
    first_effects: dict[str, Any],
    last_effects: dict[str, Any],
) -> list[dict[str, Any]]:
    """Expand arc steps into rules with chained conditions and descending priority."""
    rules = []
    for index, step in enumerate(steps):
        event_id = f"{prefix}_{index + 1}"
        is_last = index == len(steps) - 1
        if index == 0:
            conditions = first_conditions
        else:
            conditions = {"currentSpecialEvent": {"equals": f"{prefix}_{index}"}}
        if index == 0:
            effects = first_effects
        elif is_last:
            effects = last_effects
        else:
            effects = {}
        rules.append({
            "id": event_id,
            "name": step["name"],
            "priority": first_priority - index,
            "conditions": conditions,
            "effects": effects,
            "text": _slg_text(
                step["main"],
                step["summary"],
                "" if is_last else step["choice"],
                step.get("time", "10:00"),
                step.get("location", "none"),
                step.get("npcs"),
            ),
        })
    return rules


# ── Bái sư Linh Tuyết Phi ────────────────────────────────

_APPRENTICESHIP = [
    {
        "name": "Bái Sư Lệnh Tuyết Phi 1",
        "main": (
            "Một tuần mới bắt đầu, ngươi cùng mấy vị sư huynh đệ ngoại môn nhận lệnh xuống núi "
            "đón đoàn xe lương thực. Dịch trạm hẹn gặp trống không, gió cát rít qua những bức "
            "tường đổ nát.\n\n"
            "Một mũi tên nặng bất ngờ cắm vào ngực A Phúc. Từ sau những đụn cát, Cầm Sinh Quân "
            "Tây Hạ ào ra, ngươi quay ngựa liều mạng chạy về phía hẻm núi."
        ),
        "summary": "{{user}} bị Cầm Sinh Quân phục kích ở dịch trạm, các sư huynh đệ lần lượt ngã xuống.",
        "choice": "Truy binh cố ý bám theo để tìm lối vào Thiên Sơn phái. Chạy tiếp sẽ làm lộ môn phái.",
        "time": "10:30",
        "location": "Sơn đạo",
    },
    {
        "name": "Bái Sư Lệnh Tuyết Phi 2",
        "main": (
            "Ngươi ghìm cương cho ngựa chậm lại, tiếng vó phía sau cũng chậm theo. Quả nhiên "
            "chúng đang dùng ngươi dẫn đường.\n\n"
            "Ngươi rẽ ngựa vào con đường mòn dẫn ra xa sơn môn, quyết không để lũ giặc theo tới."
        ),
        "summary": "{{user}} cố ý dẫn truy binh đi lạc hướng, tránh xa sơn môn.",
        "choice": "Ngựa đã kiệt sức, truy binh áp sát từng bước.",
        "time": "11:00",
        "location": "Sơn đạo",
    },
    {
        "name": "Bái Sư Lệnh Tuyết Phi 3",
        "main": (
            "Con ngựa khuỵu xuống giữa rừng tuyết. Ngươi rút kiếm, lưng tựa vào thân tùng, "
            "đếm từng bóng kỵ binh đang vây lại.\n\n"
            "Một luồng hàn quang lướt qua, ba tên kỵ binh đi đầu ngã ngựa cùng lúc."
        ),
        "summary": "{{user}} bị vây trong rừng tuyết thì có người ra tay tương cứu.",
        "choice": "Một bóng áo trắng đứng giữa tuyết, kiếm chưa tra vào vỏ.",
        "time": "12:00",
        "location": "Rừng cây",
    },
    {
        "name": "Bái Sư Lệnh Tuyết Phi 4",
        "main": (
            "Linh Tuyết Phi không nói một lời, kiếm quang như sương rơi. Chưa đến một tuần trà, "
            "đội Cầm Sinh Quân đã tan tác.\n\n"
            "Nàng quay lại nhìn ngươi, ánh mắt lạnh nhạt: \"Dẫn giặc ra xa sơn môn, cũng coi "
            "như có chút đảm lược.\""
        ),
        "summary": "Linh Tuyết Phi đánh tan truy binh và để ý đến {{user}}.",
        "choice": "Linh Tuyết Phi ra hiệu cho ngươi theo nàng trở về.",
        "time": "13:00",
        "location": "Rừng cây",
    },
    {
        "name": "Bái Sư Lệnh Tuyết Phi 5 - Quy tông",
        "main": (
            "Trên đường về, nàng hỏi ngươi vài câu về kiếm pháp. Ngươi đáp thật lòng, nàng chỉ "
            "khẽ gật đầu.\n\n"
            "Trước sơn môn, nàng dừng bước: \"Ngày mai đến Kiếm các gặp ta.\""
        ),
        "summary": "Linh Tuyết Phi đưa {{user}} về sơn môn và hẹn gặp ở Kiếm các.",
        "choice": "Sáng hôm sau, ngươi đứng trước cửa Kiếm các.",
        "time": "17:00",
        "location": "Sơn môn",
    },
    {
        "name": "拜师苓雪妃6",
        "main": (
            "Linh Tuyết Phi đặt một thanh kiếm gỗ trước mặt ngươi: \"Từ hôm nay, ngươi là đệ "
            "tử của ta.\"\n\n"
            "Ngươi quỳ xuống dập đầu ba lần. Ngoài cửa sổ, tuyết vừa ngừng rơi."
        ),
        "summary": "{{user}} chính thức bái Linh Tuyết Phi làm sư phụ.",
        "time": "08:00",
        "location": "Phòng Nữ Đệ Tử",
    },
]

# ── Di thư người cũ · Cơ Tự ──────────────────────────────

_JISI_LETTER = [
    {
        "name": "Di thư người cũ · Cơ Tự 1",
        "main": (
            "Cơ Tự đưa cho ngươi một phong thư đã ố vàng, nét chữ run rẩy. \"Người viết thư "
            "này từng cứu ta. Ta cần đến thôn Bostan một chuyến.\"\n\n"
            "Nàng nhìn ngươi: \"Đi cùng ta chứ?\""
        ),
        "summary": "Cơ Tự nhờ {{user}} cùng đến thôn Bostan theo một bức di thư.",
        "choice": "Hai người lên đường về phía thôn Bostan.",
        "location": "Sơn môn",
    },
    {
        "name": "Di thư người cũ · Cơ Tự 2",
        "main": (
            "Thôn Bostan tiêu điều, nửa số nhà đã bỏ hoang. Một lão nhân nhận ra chữ trong thư, "
            "dẫn các ngươi đến một căn nhà đất cuối thôn."
        ),
        "summary": "{{user}} và Cơ Tự tìm được dấu vết của người viết thư.",
        "choice": "Căn nhà khóa chặt, trên cửa có vết đao cũ.",
    },
    {
        "name": "Di thư người cũ · Cơ Tự 3",
        "main": (
            "Trong nhà chỉ còn một chiếc rương gỗ. Cơ Tự mở ra, bên trong là một bộ y phục trẻ "
            "con và một miếng ngọc bội khắc chữ Tự."
        ),
        "summary": "Cơ Tự tìm thấy kỷ vật liên quan đến thân thế của mình.",
        "choice": "Cơ Tự im lặng rất lâu.",
    },
    {
        "name": "Di thư người cũ · Cơ Tự 4",
        "main": (
            "\"Hóa ra người năm đó không bỏ rơi ta.\" Cơ Tự nắm chặt ngọc bội, giọng khẽ run. "
            "Ngươi đứng bên cạnh, không nói gì."
        ),
        "summary": "Cơ Tự biết được sự thật về người thân năm xưa.",
        "choice": "Trời đã về chiều, hai người chuẩn bị trở về.",
        "time": "16:00",
    },
    {
        "name": "Di thư người cũ · Cơ Tự 5",
        "main": (
            "Trên đường về núi, Cơ Tự đi chậm hơn thường lệ. Đến sơn môn, nàng khẽ nói: "
            "\"Cảm ơn ngươi đã đi cùng.\""
        ),
        "summary": "{{user}} và Cơ Tự trở về Thiên Sơn phái.",
        "time": "18:30",
        "location": "Thiên Sơn Phái",
    },
]

# ── Đản thần Cửu Thiên Huyền Nữ ──────────────────────────

_QTJ_FESTIVAL = [
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 1 - Ước hẹn cùng bạn thân",
        "main": (
            "Sáng sớm, Tiền Đường Quân chặn ngươi ngay cửa, tay xách tay nải: \"Ta xin phép chị "
            "rồi, hôm nay xuống núi dự hội đền!\"\n\n"
            "Không đợi ngươi trả lời, nàng đã kéo ngươi đi."
        ),
        "summary": "Tiền Đường Quân kéo {{user}} xuống núi dự hội đản thần.",
        "choice": "Phía xa đã nghe tiếng trống hội.",
        "time": "07:30",
        "location": "Sơn môn",
    },
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 2 - Thịnh cảnh hội chợ",
        "main": (
            "Hội chợ đông nghịt người, hàng quán bày kín hai bên đường. Tiền Đường Quân chạy "
            "từ quầy kẹo hồ lô sang quầy mặt nạ, không lúc nào ngơi."
        ),
        "summary": "{{user}} cùng Tiền Đường Quân dạo hội chợ náo nhiệt.",
        "choice": "Sân khấu giữa chợ sắp mở màn.",
    },
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 3 - Phấn mặc lên sàn",
        "main": (
            "Gánh hát thiếu người, ông bầu nhìn trúng Tiền Đường Quân. Nàng nháy mắt với ngươi "
            "rồi bước lên sàn, vai Cửu Thiên Huyền Nữ diễn đạt đến lạ."
        ),
        "summary": "Tiền Đường Quân lên sân khấu đóng vai Cửu Thiên Huyền Nữ.",
        "choice": "Tiếng vỗ tay vang dội khi màn diễn kết thúc.",
        "time": "14:00",
    },
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 4 - Phía sau hạ màn",
        "main": (
            "Sau cánh gà, nàng vừa tẩy phấn vừa cười: \"Lúc nhỏ ta từng mơ làm đào hát đấy.\" "
            "Ngươi chưa từng nghe nàng kể chuyện này."
        ),
        "summary": "Tiền Đường Quân kể cho {{user}} nghe ước mơ thuở nhỏ.",
        "choice": "Hội chợ vẫn còn nhiều nơi chưa đi.",
        "time": "15:30",
    },
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 5 - Cùng dạo hội chợ",
        "main": (
            "Hai người thả hoa đăng bên bờ suối. Tiền Đường Quân viết gì đó lên hoa đăng, nhất "
            "quyết không cho ngươi xem."
        ),
        "summary": "{{user}} và Tiền Đường Quân thả hoa đăng.",
        "choice": "Trời đã tối, hội chợ dần tan.",
        "time": "19:00",
    },
    {
        "name": "Đản thần Cửu Thiên Huyền Nữ 6 - Kết thúc hội chợ",
        "main": (
            "Trên đường về, nàng ngủ gật trên lưng ngựa. Ngươi dắt cương đi chậm, để ánh trăng "
            "soi đường về núi."
        ),
        "summary": "{{user}} đưa Tiền Đường Quân trở về Thiên Sơn phái.",
        "time": "21:00",
        "location": "Thiên Sơn Phái",
    },
]

# ── Vũ Chúc · Hạp Lục Châu ───────────────────────────────

_YUZHU_OASIS = [
    {
        "name": "Vũ Chúc · Hạp Lục Châu 1",
        "main": (
            "Vũ Chúc nhận lệnh sư phụ đi Háp Mật ốc đảo dò la tin tức nghĩa quân. Nàng ngập "
            "ngừng một lúc rồi nhờ ngươi đi cùng."
        ),
        "summary": "Vũ Chúc mời {{user}} cùng đến Háp Mật ốc đảo.",
        "choice": "Đoàn lạc đà rời Thiên Sơn, tiến vào sa mạc.",
        "location": "Sơn môn",
    },
    {
        "name": "Vũ Chúc · Hạp Lục Châu 2",
        "main": (
            "Ốc đảo xanh mướt giữa biển cát. Người trong thành nói nghĩa quân vừa bị quân Tây "
            "Hạ truy quét, thủ lĩnh đang ẩn náu đâu đó."
        ),
        "summary": "{{user}} và Vũ Chúc nghe tin nghĩa quân bị truy quét.",
        "choice": "Một đứa trẻ lén đưa cho Vũ Chúc mảnh giấy.",
        "time": "14:00",
    },
    {
        "name": "Vũ Chúc · Hạp Lục Châu 3",
        "main": (
            "Mảnh giấy hẹn gặp ở giếng cạn phía tây. Người chờ sẵn là một thương nhân, hắn muốn "
            "đổi tung tích nghĩa quân lấy vàng."
        ),
        "summary": "Một thương nhân ra giá bán tin về nghĩa quân.",
        "choice": "Vũ Chúc do dự giữa nhiệm vụ và lương tâm.",
        "time": "20:00",
    },
    {
        "name": "Vũ Chúc · Hạp Lục Châu 4",
        "main": (
            "\"Nếu hắn bán cho ta, hắn cũng sẽ bán cho Tây Hạ.\" Vũ Chúc quyết định tự mình đi "
            "báo tin cho nghĩa quân trước khi trời sáng."
        ),
        "summary": "Vũ Chúc chọn báo động cho nghĩa quân thay vì mua tin.",
        "choice": "Hai người lên đường trong đêm.",
        "time": "23:00",
    },
    {
        "name": "Vũ Chúc · Hạp Lục Châu 5",
        "main": (
            "Nghĩa quân kịp rút đi trước khi quân Tây Hạ ập tới. Trên đường về, Vũ Chúc khẽ "
            "nói: \"Lần này, may mà có ngươi.\""
        ),
        "summary": "{{user}} và Vũ Chúc giúp nghĩa quân thoát nạn rồi trở về.",
        "time": "09:00",
        "location": "Thiên Sơn Phái",
    },
]


_RAW_EVENTS: list[dict[str, Any]] = [
    *_chain(
        "Apprenticeship_Storyline",
        _APPRENTICESHIP,
        100,
        {"currentWeek": {"min": 4}},
        {
            "GameMode": {"set": 1},
            "inputEnable": {"set": 0},
            "mapLocation": {"set": "Thiên Sơn Phái Ngoại Bảo"},
            "companionNPC": {"push": "Linh Tuyết Phi"},
        },
        {
            "GameMode": {"set": 0},
            "inputEnable": {"set": 1},
            "mapLocation": {"set": "Thiên Sơn Phái"},
            "companionNPC": {"set": []},
            "userLocation": {"set": "nvdizi"},
            "npcFavorability.O": {"add": 20},
            "npcVisibility.O": {"set": True},
        },
    ),
    *_chain(
        "Jisi_Letter",
        _JISI_LETTER,
        80,
        {"currentWeek": {"min": 1}, "npcFavorability.E": {"min": 50}},
        {
            "GameMode": {"set": 1},
            "inputEnable": {"set": 0},
            "mapLocation": {"set": "Thôn Bostan"},
            "companionNPC": {"push": "Cơ Tự"},
        },
        RETURN_TO_SECT,
    ),
    *_chain(
        "QTJ_Festival",
        _QTJ_FESTIVAL,
        70,
        {"currentWeek": {"min": 1}, "npcFavorability.C": {"min": 30}},
        {
            "GameMode": {"set": 1},
            "inputEnable": {"set": 0},
            "mapLocation": {"set": "Thiên Sơn phái ngoại bảo"},
            "companionNPC": {"push": "Tiền Đường Quân"},
        },
        {**RETURN_TO_SECT, "playerTalents.魅力": {"add": 1}},
    ),
    *_chain(
        "Yuzhu_HamiOasis_Dilemma",
        _YUZHU_OASIS,
        60,
        {"currentWeek": {"min": 1}, "npcFavorability.H": {"min": 55}},
        {
            "GameMode": {"set": 1},
            "inputEnable": {"set": 0},
            "mapLocation": {"set": "Háp Mật Ốc Đảo"},
            "companionNPC": {"push": "Vũ Chúc"},
        },
        {**RETURN_TO_SECT, "playerTalents.心性": {"add": 1}},
    ),
    {
        "id": "event_qiantangjun_invitation",
        "name": "Tiền Đường Quân mời xuống núi",
        "priority": 20,
        "conditions": {
            "currentWeek": {"min": 999},
            "npcFavorability.C": {"min": 100},
        },
        "effects": {"playerStats.声望": {"add": 3}},
        "text": _slg_text(
            "Sáng sớm, Tiền Đường Quân chặn ngươi ngay cửa: \"Ta xin phép chị rồi, hôm nay "
            "chúng ta xuống núi chơi!\"",
            "Tiền Đường Quân mời {{user}} xuống núi.",
            location="Sơn môn",
            npcs={"Tiền Đường Quân": {"Thay đổi hảo cảm": "Tăng", "Thay đổi vị trí": "Sơn môn"}},
        ),
    },
]

SPECIAL_EVENTS: list[EventRule] = load_rules(_RAW_EVENTS)
