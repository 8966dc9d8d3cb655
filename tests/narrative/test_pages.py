"""Tests for parse_slg_main_text and its token helpers."""

from tianshan.narrative import clean_token, is_speaker_allowed, normalize_none, parse_slg_main_text
from tianshan.vocab import NONE


# ── Token helpers ────────────────────────────────────────


def test_clean_token_strips_punctuation():
    assert clean_token("special-CG3!") == "special-CG3"
    assert clean_token(" 【雪山】 ") == "雪山"
    assert clean_token("Linh  Tuyết   Phi!") == "Linh Tuyết Phi"


def test_normalize_none_variants():
    assert normalize_none("无") == NONE
    assert normalize_none(" None ") == NONE
    assert normalize_none("không") == NONE
    assert normalize_none("()") == NONE
    assert normalize_none("平静") == "平静"


def test_speaker_allowed_by_name_alias_or_id():
    assert is_speaker_allowed(NONE, [])
    assert is_speaker_allowed("Cơ Tự", ["Cơ Tự"])
    assert is_speaker_allowed("Cơ Tự", ["E"])
    assert is_speaker_allowed("Cơ Tự", ["姬姒"])
    assert not is_speaker_allowed("Cơ Tự", ["Vũ Chúc"])


# ── Records ──────────────────────────────────────────────


def test_single_record():
    pages = parse_slg_main_text(
        "Hello there|Linh Tuyết Phi|雪山|平静|none",
        allowed_speakers=["Linh Tuyết Phi"],
    )
    assert len(pages) == 1
    assert pages[0].model_dump() == {
        "text": "Hello there",
        "speaker": "Linh Tuyết Phi",
        "scene": "雪山",
        "emotion": "平静",
        "cg": "none",
    }


def test_prose_only_is_one_untagged_page():
    pages = parse_slg_main_text("  prose with no pipes  ")
    assert len(pages) == 1
    assert pages[0].text == "prose with no pipes"
    assert pages[0].tags() == (NONE, NONE, NONE, NONE)


def test_empty_input():
    assert parse_slg_main_text("") == []
    assert parse_slg_main_text("   \n  ") == []


def test_prose_is_prepended_to_next_record():
    text = "Gió thổi qua sơn môn.\nTuyết rơi.\nNgươi đến rồi.|Cơ Tự|山门|微笑|none"
    pages = parse_slg_main_text(text, allowed_speakers=["E"])
    assert len(pages) == 1
    assert pages[0].text == "Gió thổi qua sơn môn.\n\nTuyết rơi.\n\nNgươi đến rồi."
    assert pages[0].speaker == "Cơ Tự"
    assert pages[0].scene == "山门"


def test_records_keep_source_order():
    text = "\n".join([
        "Một|none|山门|平静|none",
        "Hai|Cơ Tự|演武场|生气|none",
        "Ba|Vũ Chúc|树林|悲伤|none",
    ])
    pages = parse_slg_main_text(text, allowed_speakers=["Cơ Tự", "Vũ Chúc"])
    assert [p.text for p in pages] == ["Một", "Hai", "Ba"]
    assert [p.speaker for p in pages] == [NONE, "Cơ Tự", "Vũ Chúc"]
    assert [p.scene for p in pages] == ["山门", "演武场", "树林"]


def test_tags_are_fuzzy_resolved():
    pages = parse_slg_main_text("Ồ!|姬姒|客栈|愤怒|none", allowed_speakers=["E"])
    assert pages[0].tags() == ("Cơ Tự", "客房", "生气", NONE)


def test_disallowed_speaker_becomes_prose():
    text = "Lời thì thầm|Cơ Tự|山门|平静|none\nCâu sau|none|山门|平静|none"
    pages = parse_slg_main_text(text, allowed_speakers=[])
    assert len(pages) == 1
    assert pages[0].text == "Lời thì thầm\n\nCâu sau"
    assert pages[0].speaker == NONE


def test_record_without_scene_becomes_prose():
    text = "Mở đầu|none|山门|平静|none\nkhông cảnh|none|none|平静|none"
    pages = parse_slg_main_text(text)
    assert len(pages) == 2
    assert pages[1].text == "không cảnh"
    # dangling text inherits the last valid tags
    assert pages[1].scene == "山门"


def test_wrong_field_count_is_prose():
    pages = parse_slg_main_text("a|b|c\nKết|none|山门|平静|none")
    assert len(pages) == 1
    assert pages[0].text == "a\n\nKết"


def test_unknown_labels_degrade_to_none():
    pages = parse_slg_main_text("x|none|山门|qqqq|zzzz")
    assert pages[0].emotion == NONE
    assert pages[0].cg == NONE


def test_special_cg_emotion_keeps_canonical_form():
    pages = parse_slg_main_text("x|none|山门|special-CG-3|none\ny|none|山门|【特殊CG12】|none")
    assert pages[0].emotion == "special-CG3"
    assert pages[1].emotion == "特殊CG12"
