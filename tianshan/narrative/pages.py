"""Tagged-line parsing of the MAIN_TEXT stream into display pages.

Each line is prose, or a record `text|speaker|scene|emotion|cg`. Prose and
rejected records accumulate until the next valid record, which absorbs them
(paragraph-joined, buffered text first). Whatever is still buffered at the
end becomes one last page carrying the last valid tags, so a stream cut off
mid-narration still renders.
"""

import logging
import re
from collections.abc import Iterable

from tianshan.matching import (
    EMOTION_THRESHOLD,
    NPC_THRESHOLD,
    SCENE_THRESHOLD,
    match_cg,
    match_emotion,
    match_npc,
    match_scene,
)
from tianshan.models import NarrativePage
from tianshan.vocab import NONE, NPCS

logger = logging.getLogger(__name__)

FIELD_COUNT = 5

# CJK unified + extension A, ASCII letters/digits, Latin-1 through Vietnamese.
# "-" stays so "special-CG3" reaches the emotion matcher intact.
_DISALLOWED = re.compile(r"[^一-鿿㐀-䶿a-zA-Z0-9À-ỹ \-]")
_NONE_WORDS = ("", "无", "không")


def clean_token(raw: str) -> str:
    """Strip a tag field to the allowed character class.

    Single spaces between words survive so multi-word Vietnamese names stay
    readable; everything else outside the class is dropped.
    """
    cleaned = _DISALLOWED.sub("", raw.replace("　", " "))
    return " ".join(cleaned.split())


def normalize_none(raw: str) -> str:
    cleaned = clean_token(raw)
    if cleaned.casefold() in _NONE_WORDS or cleaned.casefold() == NONE:
        return NONE
    return cleaned


def is_speaker_allowed(speaker: str, allowed: Iterable[str]) -> bool:
    """A speaker passes if it is NONE or the pool names it by name, alias or id."""
    if speaker == NONE:
        return True
    pool = set(allowed)
    if speaker in pool:
        return True
    for npc_id, npc in NPCS.items():
        if npc["name"] == speaker:
            return bool(pool & {npc_id, npc["alias"]})
    return False


def parse_slg_main_text(
    text: str,
    allowed_speakers: Iterable[str] = (),
    scene_threshold: float = SCENE_THRESHOLD,
    emotion_threshold: float = EMOTION_THRESHOLD,
    npc_threshold: float = NPC_THRESHOLD,
) -> list[NarrativePage]:
    """Parse a MAIN_TEXT block into ordered pages.

    Never raises on malformed input: bad records degrade to prose.
    """
    if not isinstance(text, str) or not text.strip():
        return []
    allowed = list(allowed_speakers)

    pages: list[NarrativePage] = []
    buffered: list[str] = []
    last_tags: tuple[str, str, str, str] | None = None

    for line in text.strip().split("\n"):
        if not line.strip():
            continue

        parts = line.split("|")
        if len(parts) != FIELD_COUNT:
            prose = (parts[0] or line).strip()
            if prose:
                buffered.append(prose)
            continue

        body = parts[0].strip()
        speaker = match_npc(normalize_none(parts[1]), threshold=npc_threshold)
        scene = match_scene(normalize_none(parts[2]), threshold=scene_threshold)
        emotion = match_emotion(normalize_none(parts[3]), threshold=emotion_threshold)
        cg = match_cg(normalize_none(parts[4]))

        if not is_speaker_allowed(speaker, allowed) or scene == NONE:
            logger.debug(
                "rejected record speaker=%s scene=%s, kept as prose", speaker, scene,
            )
            if body:
                buffered.append(body)
            continue

        merged = "\n\n".join(buffered + ([body] if body else []))
        buffered = []
        last_tags = (speaker, scene, emotion, cg)
        pages.append(NarrativePage(
            text=merged, speaker=speaker, scene=scene, emotion=emotion, cg=cg,
        ))

    if buffered:
        speaker, scene, emotion, cg = last_tags or (NONE, NONE, NONE, NONE)
        pages.append(NarrativePage(
            text="\n\n".join(buffered), speaker=speaker, scene=scene,
            emotion=emotion, cg=cg,
        ))

    return pages
