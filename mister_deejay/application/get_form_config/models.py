from __future__ import annotations

from pydantic import BaseModel


class MessageLengthConfig(BaseModel):
    min: int
    max: int


class FormConfigResponse(BaseModel):
    message: MessageLengthConfig
