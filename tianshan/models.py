"""Core domain models.

The game state itself stays a plain JSON-shaped dict (see storage.save); the
models here describe values that cross module or HTTP boundaries.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tianshan.vocab import NONE


class NarrativePage(BaseModel):
    """One displayable unit of story text plus its display tags."""

    text: str
    speaker: str = NONE
    scene: str = NONE
    emotion: str = NONE  # may also carry a special-CG escape like "特殊CG2"
    cg: str = NONE

    def tags(self) -> tuple[str, str, str, str]:
        return (self.speaker, self.scene, self.emotion, self.cg)


class SlgResponse(BaseModel):
    """The sections of one <SLG_MODE> narrative response."""

    main_text: str = ""
    summary: str = ""
    side_note: dict[str, Any] | None = None
    complete: bool = True  # False while the closing tag has not arrived yet


class TriggerResult(BaseModel):
    """Outcome of firing one special event.

    `triggered` means effects were applied and the id was recorded.
    `persisted`/`displayed` report the two collaborators separately so a
    caller can tell "state saved" apart from "local state only".
    """

    event_id: str
    triggered: bool
    persisted: bool = False
    displayed: bool = False
    message: str = ""
    issues: list[str] = Field(default_factory=list)


class SideNoteReport(BaseModel):
    """What apply_side_note changed, for callers that surface it."""

    favorability: dict[str, int] = Field(default_factory=dict)
    charm_doubled: list[str] = Field(default_factory=list)
    unknown_npcs: list[str] = Field(default_factory=list)
    unknown_locations: list[str] = Field(default_factory=list)
    malformed: list[str] = Field(default_factory=list)  # fields skipped for having the wrong shape
    pending_event: dict[str, Any] | None = None


class OptionOutcome(BaseModel):
    """Result of resolving one random-event option."""

    success: bool
    message: str
    special: bool = False  # option asks for the next special event instead


class ActionResult(BaseModel):
    """A player-action line handed to the story generator."""

    message: str
    persisted: bool = False
    displayed: bool = False


class ReceiveResult(BaseModel):
    """One narrative response after parsing and applying it."""

    pages: list[NarrativePage] = Field(default_factory=list)
    summary: str = ""
    complete: bool = True
    report: SideNoteReport | None = None
    persisted: bool = False
