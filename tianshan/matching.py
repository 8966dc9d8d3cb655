"""Fuzzy resolution of model-emitted labels onto the closed vocabularies.

fuzzy_match() tiers, first hit wins:
  1. exact member
  2. exact synonym key (mapped value must be a member)
  3. containment either way against members, in member order
  4. containment either way against synonym keys
  5. best similarity over members, then synonym keys; ties keep the
     first found; accepted only at or above the threshold

The axis wrappers add their own policy on top. Every wrapper is total: it
returns a vocabulary member or NONE and never raises.
"""

import logging
import re
from collections.abc import Mapping, Sequence

from tianshan.similarity import string_similarity
from tianshan.vocab import (
    CG_OPTIONS,
    EMOTION_KEYWORDS,
    EMOTION_OPTIONS,
    EMOTION_SYNONYMS,
    NONE,
    NPCS,
    SCENE_KEYWORDS,
    SCENE_OPTIONS,
    SCENE_SYNONYMS,
)

logger = logging.getLogger(__name__)

SCENE_THRESHOLD = 0.4
EMOTION_THRESHOLD = 0.5
NPC_THRESHOLD = 0.6

# Reserved emotion escape: "特殊CG3" / "special-CG3" bypass the vocabulary.
# Spelling variants ("specialCG3", "special-CG-3") come back as "special-CG3".
SPECIAL_CG_RE = re.compile(r"^(特殊CG|special-?CG)-?(\d+)$", re.IGNORECASE)

_EMPTY_MARKERS = ("", NONE, "无")


def _is_empty(raw: object) -> bool:
    return not isinstance(raw, str) or raw.strip() in _EMPTY_MARKERS


def fuzzy_match(
    value: object,
    options: Sequence[str],
    synonyms: Mapping[str, str] | None = None,
    threshold: float = 0.5,
) -> str | None:
    """Resolve free text to a member of options, or None."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    synonyms = synonyms or {}

    if text in options:
        return text

    mapped = synonyms.get(text)
    if mapped is not None and mapped in options:
        return mapped

    for option in options:
        if option in text or text in option:
            logger.debug("containment match %r -> %r", text, option)
            return option

    for key, mapped in synonyms.items():
        if (key in text or text in key) and mapped in options:
            logger.debug("synonym containment match %r via %r -> %r", text, key, mapped)
            return mapped

    best: str | None = None
    best_score = 0.0
    for option in options:
        score = string_similarity(text, option)
        if score > best_score:
            best, best_score = option, score
    for key, mapped in synonyms.items():
        if mapped not in options:
            continue
        score = string_similarity(text, key)
        if score > best_score:
            best, best_score = mapped, score

    if best is not None and best_score >= threshold:
        logger.debug("similarity match %r -> %r (%.2f)", text, best, best_score)
        return best
    logger.debug("no match for %r (best %.2f)", text, best_score)
    return None


def _keyword_fallback(raw: str, keywords: Mapping[str, str]) -> str | None:
    for keyword, target in keywords.items():
        if keyword in raw:
            logger.debug("keyword fallback %r (contains %r) -> %r", raw, keyword, target)
            return target
    return None


def match_scene(raw: object, threshold: float = SCENE_THRESHOLD) -> str:
    if _is_empty(raw):
        return NONE
    result = fuzzy_match(raw, SCENE_OPTIONS, SCENE_SYNONYMS, threshold)
    if result is None:
        result = _keyword_fallback(raw, SCENE_KEYWORDS)
    return result or NONE


def match_emotion(raw: object, threshold: float = EMOTION_THRESHOLD) -> str:
    if _is_empty(raw):
        return NONE
    special = SPECIAL_CG_RE.match(raw.strip())
    if special:
        prefix = "特殊CG" if special.group(1).startswith("特殊") else "special-CG"
        return f"{prefix}{special.group(2)}"
    result = fuzzy_match(raw, EMOTION_OPTIONS, EMOTION_SYNONYMS, threshold)
    if result is None:
        result = _keyword_fallback(raw, EMOTION_KEYWORDS)
    return result or NONE


def _compact(text: str) -> str:
    return "".join(text.split()).casefold()


def match_npc(
    raw: object,
    roster: Mapping[str, Mapping[str, str]] | None = None,
    threshold: float = NPC_THRESHOLD,
) -> str:
    """Resolve a speaker label to an NPC display name.

    Accepts the display name, the Chinese alias or the id. Name comparison
    ignores whitespace and case, since the line parser strips spaces.
    """
    if _is_empty(raw):
        return NONE
    roster = NPCS if roster is None else roster
    text = raw.strip()

    # compacted label -> display name; display names first so they win ties
    names: dict[str, str] = {}
    for npc in roster.values():
        names.setdefault(_compact(npc["name"]), npc["name"])
    for npc in roster.values():
        if npc.get("alias"):
            names.setdefault(_compact(npc["alias"]), npc["name"])

    key = _compact(text)
    if key in names:
        return names[key]
    if text in roster:
        return roster[text]["name"]

    for label, display in names.items():
        if label in key or key in label:
            logger.debug("npc containment match %r -> %r", text, display)
            return display

    best: str | None = None
    best_score = 0.0
    for label, display in names.items():
        score = string_similarity(key, label)
        if score > best_score:
            best, best_score = display, score
    if best is not None and best_score >= threshold:
        logger.debug("npc similarity match %r -> %r (%.2f)", text, best, best_score)
        return best
    return NONE


def match_cg(raw: object) -> str:
    """Exact or containment match only; CG labels get no similarity tier."""
    if _is_empty(raw):
        return NONE
    text = raw.strip()
    if text in CG_OPTIONS:
        return text
    for option in CG_OPTIONS:
        if option == NONE:
            continue
        if option in text or text in option:
            logger.debug("cg containment match %r -> %r", text, option)
            return option
    return NONE
