"""Narrative response handling.

A model response arrives as an <SLG_MODE> envelope (envelope.py). Its
MAIN_TEXT is parsed line by line into display pages (pages.py):

  text|speaker|scene|emotion|cg    tagged record, tags resolved via matching
  anything else                    prose, merged into the next valid page

SIDE_NOTE carries JSON state updates, applied by tianshan.side_note.
"""

from .envelope import (  # noqa: F401
    is_new_week_message,
    parse_side_note,
    parse_slg_envelope,
    strip_attribute_changes,
)
from .pages import (  # noqa: F401
    clean_token,
    is_speaker_allowed,
    normalize_none,
    parse_slg_main_text,
)
