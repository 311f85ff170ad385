# david/models/chat.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class _FlexibleModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ChatRequest(_FlexibleModel):
    # falsy or non-string messages are rejected before classification
    message: StrictStr = Field(..., min_length=1)
    # prior conversation as sent by the client; accepted but not used
    history: Optional[Any] = None
    sid: Optional[str] = None


class ChatResponse(BaseModel):
    response: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str


class MessageOut(BaseModel):
    id: int
    role: str
    content: str
    timestamp: datetime


class SessionCreate(_FlexibleModel):
    title: Optional[str] = Field(None, max_length=64)


class SessionSummary(BaseModel):
    id: str
    title: str
    timestamp: datetime


class SessionDetail(SessionSummary):
    created_at: datetime
    messages: List[MessageOut] = []


class TemperatureRequest(_FlexibleModel):
    sid: Optional[str] = None
    # captured camera frame, raw base64 or a data: URL
    image: Optional[str] = None


class FrameInfo(BaseModel):
    width: int
    height: int
    format: Optional[str] = None
    size_bytes: int


class TemperatureResponse(BaseModel):
    value: float
    status: str
    guidance: str
    text: str
    timestamp: datetime
    frame: Optional[FrameInfo] = None
