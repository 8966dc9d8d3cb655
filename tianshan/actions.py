"""Outgoing player-action lines.

Every action the player takes reaches the story generator as one line of
text. Before it is sent, prepare_action() strips the attribute-change tail
that is only meant for the player, records it as lastUserMessage and sets
newWeek according to whether it is the new-week announcement.
"""

from typing import Any

from tianshan.narrative.envelope import is_new_week_message, strip_attribute_changes
from tianshan.prompts import DEFAULT_PLACEHOLDER, render_action
from tianshan.week import week_to_date


def prepare_action(game: dict[str, Any], message: str) -> str:
    """Return the line to send and update game to match it."""
    outgoing = strip_attribute_changes(message)
    game["lastUserMessage"] = outgoing
    game["newWeek"] = 1 if is_new_week_message(outgoing) else 0
    return outgoing


def new_week_message(game: dict[str, Any], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    year, month, week = week_to_date(int(game.get("currentWeek", 1)))
    return render_action("new_week", {"year": year, "month": month, "week": week}, placeholder)


def special_option_message(choice: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Line injected before a special event chosen from an event option."""
    return render_action("special_option", {"choice": choice}, placeholder)
