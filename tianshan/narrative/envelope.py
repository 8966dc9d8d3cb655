"""Splitting a model response into its <SLG_MODE> sections.

A response looks like:

    <SLG_MODE>
    <MAIN_TEXT>...</MAIN_TEXT>
    <SUMMARY>...</SUMMARY>
    <SIDE_NOTE>{ JSON }</SIDE_NOTE>
    </SLG_MODE>

Tags may carry stray spaces (`< SLG_MODE >`) and the stream may stop before
a closing tag; an unterminated section runs to the end of the text.
"""

import json
import logging
import re
from typing import Any

from tianshan.models import SlgResponse

logger = logging.getLogger(__name__)

ATTRIBUTE_CHANGES_MARKER = "属性变化"

NEW_WEEK_RE = re.compile(
    r"^Lựa chọn hành động: Tuần mới đã bắt đầu<br>Hiện tại là Năm (\d+) Tháng (\d+) Tuần (\d+)$"
)


def _tag(name: str, closing: bool = False) -> str:
    slash = r"/\s*" if closing else ""
    return rf"<\s*{slash}{name}\s*>"


def _section(text: str, name: str) -> tuple[str | None, bool]:
    """Return (content, closed) for one section, or (None, False) if absent."""
    start = re.search(_tag(name), text)
    if not start:
        return None, False
    rest = text[start.end():]
    end = re.search(_tag(name, closing=True), rest)
    if end:
        return rest[:end.start()].strip(), True
    # unterminated: stop at the next opening tag of another section, if any
    nxt = re.search(r"<\s*(?:MAIN_TEXT|SUMMARY|SIDE_NOTE)\s*>", rest)
    return (rest[:nxt.start()] if nxt else rest).strip(), False


def parse_side_note(text: str) -> dict[str, Any] | None:
    """Parse side-note JSON, stripping markdown fences."""
    cleaned = text.strip()
    if not cleaned:
        return None
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    try:
        data = json.loads(cleaned)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError as e:
        logger.warning(f"Side note is not valid JSON: {e}")
        return None


def parse_slg_envelope(text: str) -> SlgResponse:
    """Split a response into MAIN_TEXT, SUMMARY and SIDE_NOTE.

    Text without any section tags is treated as bare MAIN_TEXT.
    """
    if not text or not text.strip():
        return SlgResponse()

    main, main_closed = _section(text, "MAIN_TEXT")
    summary, _ = _section(text, "SUMMARY")
    side, side_closed = _section(text, "SIDE_NOTE")

    if main is None and summary is None and side is None:
        body = re.sub(_tag("SLG_MODE"), "", text)
        body = re.sub(_tag("SLG_MODE", closing=True), "", body)
        return SlgResponse(main_text=body.strip(), complete=False)

    envelope_closed = re.search(_tag("SLG_MODE", closing=True), text) is not None
    side_note = parse_side_note(side) if side is not None and side_closed else None
    return SlgResponse(
        main_text=main or "",
        summary=summary or "",
        side_note=side_note,
        complete=envelope_closed or (main_closed and side_closed),
    )


def strip_attribute_changes(message: str) -> str:
    """Drop the attribute-change tail and trailing <br> from an action line."""
    index = message.find(ATTRIBUTE_CHANGES_MARKER)
    if index == -1:
        return message
    trimmed = message[:index].strip()
    return re.sub(r"(<br>\s*)+$", "", trimmed, flags=re.IGNORECASE)


def is_new_week_message(message: str) -> bool:
    return NEW_WEEK_RE.match(message) is not None
