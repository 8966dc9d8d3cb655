"""Tests for the <SLG_MODE> envelope and action-line helpers."""

from tianshan.narrative import (
    is_new_week_message,
    parse_side_note,
    parse_slg_envelope,
    strip_attribute_changes,
)

FULL = """<SLG_MODE>
<MAIN_TEXT>
Tuyết rơi.|none|雪山|平静|none
</MAIN_TEXT>
<SUMMARY>
Người chơi lên núi.
</SUMMARY>
<SIDE_NOTE>
{"Thời gian": "14:30", "NPC hiện tại": {}}
</SIDE_NOTE>
</SLG_MODE>"""


def test_full_envelope():
    env = parse_slg_envelope(FULL)
    assert env.main_text == "Tuyết rơi.|none|雪山|平静|none"
    assert env.summary == "Người chơi lên núi."
    assert env.side_note == {"Thời gian": "14:30", "NPC hiện tại": {}}
    assert env.complete is True


def test_tags_with_spaces():
    env = parse_slg_envelope("< SLG_MODE ><MAIN_TEXT>abc</ MAIN_TEXT >< /SLG_MODE >")
    assert env.main_text == "abc"
    assert env.complete is True


def test_unterminated_main_text():
    env = parse_slg_envelope("<SLG_MODE>\n<MAIN_TEXT>\nđang viết dở")
    assert env.main_text == "đang viết dở"
    assert env.side_note is None
    assert env.complete is False


def test_unterminated_side_note_is_not_applied():
    env = parse_slg_envelope('<MAIN_TEXT>a</MAIN_TEXT><SIDE_NOTE>{"Thời gian": "1')
    assert env.main_text == "a"
    assert env.side_note is None
    assert env.complete is False


def test_bare_text_is_main_text():
    env = parse_slg_envelope("chỉ có văn xuôi")
    assert env.main_text == "chỉ có văn xuôi"
    assert env.summary == ""


def test_empty_response():
    env = parse_slg_envelope("   ")
    assert env.main_text == ""
    assert env.side_note is None


def test_side_note_fenced_json():
    assert parse_side_note('```json\n{"a": 1}\n```') == {"a": 1}


def test_side_note_invalid_json():
    assert parse_side_note("{not json") is None
    assert parse_side_note("[1, 2]") is None
    assert parse_side_note("") is None


def test_strip_attribute_changes():
    msg = "Đến Diễn Võ Trường luyện công<br><br>属性变化: 武学+1"
    assert strip_attribute_changes(msg) == "Đến Diễn Võ Trường luyện công"
    assert strip_attribute_changes("không đổi") == "không đổi"


def test_is_new_week_message():
    assert is_new_week_message(
        "Lựa chọn hành động: Tuần mới đã bắt đầu<br>Hiện tại là Năm 1 Tháng 2 Tuần 3"
    )
    assert not is_new_week_message("Lựa chọn hành động: Tỷ thí")
