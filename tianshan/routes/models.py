"""Pydantic request/response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from tianshan.minigames import BattleContext


class ParseBody(BaseModel):
    text: str
    allowed_speakers: list[str] = Field(default_factory=list)


class ReceiveBody(BaseModel):
    text: str


class ActionBody(BaseModel):
    message: str


class OptionBody(BaseModel):
    option: dict[str, Any]


class MinigameBody(BaseModel):
    payload: dict[str, Any]
    context: BattleContext | None = None


class TradeBody(BaseModel):
    count: int = 1


class AllocateBody(BaseModel):
    attr: str

