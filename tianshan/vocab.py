"""Static vocabulary tables for the Thiên Sơn Phái game shell.

Scene, emotion and CG identifiers are the closed sets the narrative tagger
may reference. Synonym tables map free text onto them; keyword tables are the
last-resort substring fallback and are ordered (multi-character keywords
first, dict insertion order is the scan order).

NPCs are keyed by single-letter id. `name` is the Vietnamese display name
used everywhere in game state (companion lists, side notes); `alias` is the
Chinese name the narrative model sometimes emits instead.
"""

from typing import Any

NONE = "none"

# ── Scenes ───────────────────────────────────────────────

SCENE_OPTIONS: list[str] = [
    "沙漠", "山道", "雪山", "山谷", "冰川", "水边", "树林", "绿洲", "村落", "山洞",
    "客房", "酒肆", "商铺", "街道", "浴室", "市集", "废墟", "寺庙", "石窟", "熔岩洞",
    "地牢", "邪教祭坛", "武侠门派", "山门", "演武场", "宫殿", "庭院", "府邸", "军营",
]

SCENE_SYNONYMS: dict[str, str] = {
    "戈壁": "沙漠", "沙地": "沙漠", "荒漠": "沙漠", "旷野": "沙漠", "黄沙": "沙漠",
    "山路": "山道", "小径": "山道", "小道": "山道", "崎岖": "山道", "栈道": "山道",
    "林间": "树林", "森林": "树林", "密林": "树林", "竹林": "树林", "丛林": "树林", "林中": "树林",
    "河边": "水边", "湖边": "水边", "溪边": "水边", "池塘": "水边", "河畔": "水边",
    "湖畔": "水边", "溪流": "水边",
    "小镇": "村落", "村庄": "村落", "聚落": "村落", "乡村": "村落", "镇子": "村落",
    "洞穴": "山洞", "岩洞": "山洞", "石洞": "山洞", "洞窟": "山洞", "暗洞": "山洞",
    "雪峰": "雪山", "雪岭": "雪山", "雪地": "雪山", "雪原": "雪山",
    "冰原": "冰川", "冰湖": "冰川", "冰窟": "冰川", "冰洞": "冰川",
    "绿地": "绿洲", "草地": "绿洲", "草原": "绿洲",
    "酒楼": "酒肆", "酒馆": "酒肆", "酒家": "酒肆", "茶馆": "酒肆", "饭馆": "酒肆",
    "旅店": "客房", "客栈": "客房", "旅馆": "客房", "房间": "客房", "卧室": "客房",
    "寝室": "客房", "厢房": "客房",
    "店铺": "商铺", "铺子": "商铺", "商店": "商铺", "杂货": "商铺",
    "集市": "市集", "闹市": "市集", "街市": "市集", "夜市": "市集", "早市": "市集",
    "遗迹": "废墟", "残垣": "废墟", "废址": "废墟", "荒废": "废墟", "断壁": "废墟",
    "佛寺": "寺庙", "道观": "寺庙", "庙宇": "寺庙", "古刹": "寺庙", "禅寺": "寺庙", "神庙": "寺庙",
    "祭坛": "邪教祭坛", "邪坛": "邪教祭坛", "血祭": "邪教祭坛",
    "门派": "武侠门派", "宗门": "武侠门派", "山庄": "武侠门派", "帮派": "武侠门派",
    "大殿": "宫殿", "殿堂": "宫殿", "皇宫": "宫殿", "王宫": "宫殿", "金殿": "宫殿",
    "庭园": "庭院", "花园": "庭院", "院子": "庭院", "天井": "庭院", "后院": "庭院", "前院": "庭院",
    "府宅": "府邸", "宅院": "府邸", "豪宅": "府邸", "大宅": "府邸", "宅子": "府邸",
    "兵营": "军营", "营帐": "军营", "营地": "军营", "军帐": "军营",
    "峡谷": "山谷", "幽谷": "山谷", "深谷": "山谷", "溪谷": "山谷",
    "大街": "街道", "小巷": "街道", "巷子": "街道", "长街": "街道", "胡同": "街道",
    # Vietnamese display names used in side notes and translated prompts
    "Sa mạc": "沙漠", "Sơn đạo": "山道", "Tuyết sơn": "雪山", "Sơn cốc": "山谷",
    "Băng xuyên": "冰川", "Bờ nước": "水边", "Rừng cây": "树林", "Ốc đảo": "绿洲",
    "Thôn làng": "村落", "Sơn động": "山洞", "Khách phòng": "客房", "Tửu quán": "酒肆",
    "Cửa hàng": "商铺", "Đường phố": "街道", "Phòng tắm": "浴室", "Phiên chợ": "市集",
    "Phế tích": "废墟", "Chùa miếu": "寺庙", "Thạch quật": "石窟", "Động dung nham": "熔岩洞",
    "Địa lao": "地牢", "Tế đàn tà giáo": "邪教祭坛", "Võ hiệp môn phái": "武侠门派",
    "Sơn môn": "山门", "Diễn võ trường": "演武场", "Cung điện": "宫殿", "Đình viện": "庭院",
    "Phủ đệ": "府邸", "Quân doanh": "军营",
}

SCENE_KEYWORDS: dict[str, str] = {
    # multi-character
    "悬崖": "山道", "峭壁": "山道", "山顶": "雪山", "山巅": "雪山", "峰顶": "雪山",
    "冰雪": "冰川", "监狱": "地牢", "牢房": "地牢", "火山": "熔岩洞", "岩浆": "熔岩洞",
    "佛洞": "石窟", "练武": "演武场", "比武": "演武场", "擂台": "演武场",
    "皇城": "宫殿", "王城": "宫殿",
    # single character
    "峰": "雪山", "巅": "雪山", "岭": "雪山", "崖": "山道", "坡": "山道", "径": "山道",
    "山": "山道",
    "河": "水边", "湖": "水边", "溪": "水边", "泉": "水边", "潭": "水边", "瀑": "水边",
    "江": "水边",
    "林": "树林", "森": "树林",
    "洞": "山洞", "穴": "山洞", "窟": "石窟", "窖": "地牢",
    "派": "武侠门派", "宗": "武侠门派", "帮": "武侠门派",
    "庄": "府邸", "府": "府邸", "宅": "府邸", "院": "庭院", "园": "庭院",
    "殿": "宫殿", "宫": "宫殿", "房": "客房", "室": "客房",
    "店": "商铺", "铺": "商铺", "市": "市集", "坊": "市集",
    "寺": "寺庙", "庙": "寺庙", "观": "寺庙", "祠": "寺庙", "坛": "邪教祭坛",
    "城": "街道", "镇": "村落", "村": "村落", "寨": "村落", "营": "军营", "帐": "军营",
    "门": "街道",
    "谷": "山谷", "峡": "山谷", "漠": "沙漠", "沙": "沙漠", "荒": "沙漠",
    "冰": "冰川", "雪": "雪山", "草": "绿洲", "牢": "地牢", "狱": "地牢",
}

# ── Emotions ─────────────────────────────────────────────

EMOTION_OPTIONS: list[str] = [
    "大笑", "平静", "生气", "兴奋", "微笑", "不满", "严肃", "害羞", "尴尬", "为难",
    "惊讶", "紧张", "害怕", "悲伤", "哭泣", "得意", "发情", NONE,
]

EMOTION_SYNONYMS: dict[str, str] = {
    "狂笑": "大笑", "开心": "大笑", "欢笑": "大笑", "高兴": "大笑", "喜悦": "大笑",
    "浅笑": "微笑", "含笑": "微笑", "笑容": "微笑", "轻笑": "微笑", "温柔": "微笑",
    "冷静": "平静", "淡然": "平静", "从容": "平静", "无表情": "平静", "面无表情": "平静",
    "普通": "平静", "正常": "平静", "默然": "平静",
    "愤怒": "生气", "恼怒": "生气", "发火": "生气", "怒气": "生气", "暴怒": "生气", "气愤": "生气",
    "激动": "兴奋", "亢奋": "兴奋", "期待": "兴奋", "热情": "兴奋",
    "嫌弃": "不满", "厌恶": "不满", "反感": "不满", "嫌恶": "不满", "不悦": "不满", "皱眉": "不满",
    "认真": "严肃", "肃穆": "严肃", "凝重": "严肃", "郑重": "严肃", "正经": "严肃",
    "羞涩": "害羞", "脸红": "害羞", "羞红": "害羞", "娇羞": "害羞", "含羞": "害羞", "羞怯": "害羞",
    "窘迫": "尴尬", "困窘": "尴尬", "难堪": "尴尬", "局促": "尴尬",
    "犹豫": "为难", "迟疑": "为难", "踌躇": "为难", "左右为难": "为难", "纠结": "为难",
    "震惊": "惊讶", "吃惊": "惊讶", "诧异": "惊讶", "惊愕": "惊讶", "惊奇": "惊讶", "错愕": "惊讶",
    "不安": "紧张", "焦虑": "紧张", "慌乱": "紧张", "局促不安": "紧张",
    "恐惧": "害怕", "惊恐": "害怕", "畏惧": "害怕", "惧怕": "害怕", "惊吓": "害怕", "胆怯": "害怕",
    "难过": "悲伤", "伤心": "悲伤", "哀伤": "悲伤", "忧伤": "悲伤", "痛苦": "悲伤", "悲痛": "悲伤",
    "流泪": "哭泣", "落泪": "哭泣", "泪目": "哭泣", "眼泪": "哭泣", "泣不成声": "哭泣",
    "自豪": "得意", "骄傲": "得意", "自得": "得意", "洋洋得意": "得意", "嘚瑟": "得意", "傲娇": "得意",
    "情动": "发情", "动情": "发情", "渴望": "发情", "欲望": "发情", "媚眼": "发情", "迷离": "发情",
    "春情": "发情",
}

EMOTION_KEYWORDS: dict[str, str] = {
    "笑": "微笑", "乐": "大笑", "喜": "大笑",
    "怒": "生气", "愤": "生气", "气": "生气",
    "哭": "哭泣", "泪": "哭泣", "泣": "哭泣",
    "悲": "悲伤", "伤": "悲伤", "哀": "悲伤", "忧": "悲伤",
    "怕": "害怕", "惧": "害怕", "恐": "害怕",
    "慌": "紧张", "急": "紧张", "焦": "紧张",
    "羞": "害羞", "臊": "害羞", "红": "害羞",
    "惊": "惊讶", "讶": "惊讶", "愕": "惊讶",
    "傲": "得意", "骄": "得意",
    "媚": "发情", "欲": "发情", "情": "发情",
    "静": "平静", "淡": "平静",
    "肃": "严肃", "正": "严肃",
}

# ── CG types ─────────────────────────────────────────────

CG_OPTIONS: list[str] = [
    "露阴", "露胸", "接吻", "舔奶", "揉胸", "口交", "自慰", "足交", "手交",
    "乳交", "指交", "舔阴", "后入式", "正常位", "女上位", "69式", "火车便当式", NONE,
]

# ── NPCs ─────────────────────────────────────────────────

NPCS: dict[str, dict[str, str]] = {
    "A": {"name": "Phá Trận Tử", "alias": "破阵子",
          "description": "Ngoại Vụ trưởng lão Thiên Sơn Phái, thủ lĩnh nghĩa quân Tây Vực."},
    "B": {"name": "Động Đình Quân", "alias": "洞庭君",
          "description": "Hình Phạt trưởng lão Thiên Sơn Phái, tỷ tỷ của Tiền Đường Quân."},
    "C": {"name": "Tiền Đường Quân", "alias": "钱塘君",
          "description": "Đệ tử nội môn Thiên Sơn Phái, muội muội của Động Đình Quân."},
    "D": {"name": "Tiêu Bạch Hô", "alias": "萧白瑚",
          "description": "Đệ tử ngoại môn nhỏ tuổi nhất đời thứ tám."},
    "E": {"name": "Cơ Tự", "alias": "姬姒",
          "description": "Đệ tử nội môn, bối phận bí ẩn, ai cũng gọi là sư tỷ."},
    "F": {"name": "Thi Diên Niên", "alias": "施延年",
          "description": "Đệ tử ngoại môn, quản lý Tàng Kinh Các."},
    "G": {"name": "Hô Diên Hiển", "alias": "呼延显",
          "description": "Đại sư huynh đời thứ tám, đệ tử của Phá Trận Tử."},
    "H": {"name": "Vũ Chúc", "alias": "雨烛",
          "description": "Đệ tử nội môn, đệ tử của Phá Trận Tử."},
    "I": {"name": "An Mộ", "alias": "安慕",
          "description": "Đệ tử ngoại môn, đầu bếp chính của nhà bếp."},
    "J": {"name": "Đường Mộc Lê", "alias": "唐沐梨",
          "description": "Đại tiểu thư Đường Môn đất Thục, đệ tử khách mời."},
    "K": {"name": "Lạc Tiềm U", "alias": "洛潜幽",
          "description": "Đệ tử ngoại môn, phụ trách nữ công và tiếp đãi khách quý."},
    "L": {"name": "Tạp Dịch Bí Ẩn", "alias": "神秘杂役",
          "description": "Tạp dịch bí ẩn, chưa bao giờ lộ mặt thật."},
    "M": {"name": "Huyền Thiên Thanh", "alias": "玄天青",
          "description": "Kỳ Hoàng trưởng lão, quản lý Đan Dược Phòng."},
    "N": {"name": "Lộc Xuân Nhược", "alias": "鹿椿若",
          "description": "Đệ tử Côn Luân Phái, đệ tử ký danh của Huyền Thiên Thanh."},
    "O": {"name": "Linh Tuyết Phi", "alias": "苓雪妃",
          "description": "Thị Kiếm trưởng lão, đệ nhất cao thủ trong phái."},
}

NPC_SPAR_REWARDS: dict[str, dict[str, Any]] = {
    "A": {"type": "武学", "value": 5}, "B": {"type": "声望", "value": 5},
    "C": {"type": "金钱", "value": 500}, "D": {"type": "武学", "value": 1},
    "E": {"type": "武学", "value": 3}, "F": {"type": "学识", "value": 3},
    "G": {"type": "学识", "value": 4}, "H": {"type": "声望", "value": 1},
    "I": {"type": "金钱", "value": 300}, "J": {"type": "金钱", "value": 1000},
    "K": {"type": "学识", "value": 2}, "L": {"type": "金钱", "value": 3000},
    "M": {"type": "学识", "value": 5}, "N": {"type": "学识", "value": 1},
    "O": {"type": "武学", "value": 6},
}

# ── Locations & seasons ──────────────────────────────────

LOCATION_NAMES: dict[str, str] = {
    "yanwuchang": "Diễn Võ Trường",
    "cangjingge": "Tàng Kinh Các",
    "huofang": "Nhà Bếp",
    "houshan": "Hậu Sơn",
    "yishiting": "Nghị Sự Sảnh",
    "tiejiangpu": "Tiệm Rèn",
    "nandizi": "Phòng Nam Đệ Tử",
    "nvdizi": "Phòng Nữ Đệ Tử",
    "shanmen": "Sơn Môn",
    "gongtian": "Ruộng Công",
    "danfang": "Đan Phòng",
    "tianshanpai": "Thiên Sơn Phái",
    NONE: NONE,
}

SEASON_NAMES: dict[str, str] = {
    "spring": "Mùa Xuân",
    "summer": "Mùa Hạ",
    "autumn": "Mùa Thu",
    "winter": "Mùa Đông",
}

_LOCATION_ORDER = [
    "yanwuchang", "cangjingge", "huofang", "houshan", "yishiting", "tiejiangpu",
    "nandizi", "nvdizi", "shanmen", "gongtian", "danfang", NONE,
]


def _weights(*values: float) -> dict[str, float]:
    return dict(zip(_LOCATION_ORDER, values))


# Weekly whereabouts; each row sums to 1.0 and is drawn cumulatively in order.
NPC_LOCATION_PROBABILITY: dict[str, dict[str, float]] = {
    "A": _weights(0.15, 0.05, 0.05, 0.15, 0.20, 0.05, 0.05, 0.00, 0.05, 0.10, 0.00, 0.15),
    "B": _weights(0.15, 0.10, 0.05, 0.05, 0.25, 0.05, 0.00, 0.15, 0.05, 0.05, 0.05, 0.05),
    "C": _weights(0.15, 0.05, 0.05, 0.20, 0.05, 0.10, 0.00, 0.15, 0.05, 0.10, 0.05, 0.05),
    "D": _weights(0.20, 0.05, 0.15, 0.10, 0.00, 0.05, 0.00, 0.20, 0.05, 0.10, 0.05, 0.05),
    "E": _weights(0.10, 0.10, 0.20, 0.15, 0.05, 0.05, 0.00, 0.15, 0.05, 0.05, 0.05, 0.05),
    "F": _weights(0.05, 0.40, 0.05, 0.05, 0.05, 0.05, 0.00, 0.10, 0.05, 0.05, 0.10, 0.05),
    "G": _weights(0.20, 0.10, 0.05, 0.15, 0.10, 0.05, 0.10, 0.00, 0.05, 0.05, 0.05, 0.10),
    "H": _weights(0.15, 0.10, 0.15, 0.15, 0.05, 0.05, 0.00, 0.15, 0.05, 0.10, 0.05, 0.00),
    "I": _weights(0.05, 0.00, 0.45, 0.15, 0.00, 0.05, 0.00, 0.10, 0.05, 0.10, 0.05, 0.00),
    "J": _weights(0.10, 0.05, 0.10, 0.05, 0.10, 0.10, 0.00, 0.20, 0.15, 0.05, 0.05, 0.05),
    "K": _weights(0.05, 0.10, 0.10, 0.10, 0.15, 0.00, 0.00, 0.25, 0.05, 0.05, 0.05, 0.10),
    "L": _weights(0.02, 0.01, 0.01, 0.01, 0.01, 0.01, 0.01, 0.00, 0.01, 0.01, 0.01, 0.89),
    "M": _weights(0.02, 0.20, 0.05, 0.15, 0.10, 0.00, 0.05, 0.00, 0.03, 0.05, 0.30, 0.05),
    "N": _weights(0.02, 0.05, 0.05, 0.25, 0.02, 0.02, 0.00, 0.08, 0.05, 0.15, 0.20, 0.11),
    "O": _weights(0.00, 0.02, 0.02, 0.15, 0.05, 0.00, 0.00, 0.10, 0.02, 0.35, 0.02, 0.27),
}


def location_id_for(name: str) -> str | None:
    """Reverse lookup: display name (or id) -> location id."""
    cleaned = name.strip()
    if cleaned in LOCATION_NAMES and cleaned != NONE:
        return cleaned
    for loc_id, loc_name in LOCATION_NAMES.items():
        if loc_id != NONE and loc_name.casefold() == cleaned.casefold():
            return loc_id
    return None


def npc_id_for(name: str) -> str | None:
    """Reverse lookup: display name, Chinese alias or id -> NPC id."""
    cleaned = name.strip()
    if cleaned in NPCS:
        return cleaned
    key = cleaned.replace(" ", "").casefold()
    for npc_id, npc in NPCS.items():
        if key in (npc["name"].replace(" ", "").casefold(), npc["alias"]):
            return npc_id
    return None
