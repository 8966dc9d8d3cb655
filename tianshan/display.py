"""Narrative display collaborator.

The game never renders anything itself. It hands two kinds of text to a
display sink:

    async def inject_user(self, text: str) -> None    player-action line
    async def send_narration(self, text: str) -> None  narration to render

QueueDisplay keeps both in memory; the HTTP layer drains it into the
response body so a client can render what the last action produced.
Failures surface as DisplayError.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class DisplayError(RuntimeError):
    """Raised when the display sink cannot accept text."""


def escape_narration(text: str) -> str:
    """Escape characters the chat host treats as command syntax."""
    return text.replace("|", "\\|").replace("`", "\\`")


class DisplayItem(BaseModel):
    role: str  # "user" or "narration"
    text: str


class DisplaySink(Protocol):
    async def inject_user(self, text: str) -> None: ...

    async def send_narration(self, text: str) -> None: ...


class QueueDisplay:
    def __init__(self) -> None:
        self.items: list[DisplayItem] = []

    async def inject_user(self, text: str) -> None:
        self.items.append(DisplayItem(role="user", text=text))

    async def send_narration(self, text: str) -> None:
        self.items.append(DisplayItem(role="narration", text=escape_narration(text)))

    def drain(self) -> list[DisplayItem]:
        items, self.items = self.items, []
        return items
