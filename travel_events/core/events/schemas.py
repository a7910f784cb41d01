# travel_events/core/events/schemas.py
"""
Pydantic schemas for events.

Used in:
    * travel_events/api/v1/events.py     : request parsing and response models
    * core.events.service                : validated input handed to the repository
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCreateIn(BaseModel):
    """Raw creation request as received from the multipart form; nothing is validated yet."""

    title: Optional[str] = None
    place: Optional[str] = None
    gradient: Optional[str] = None
    icon: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None


class AttachmentIn(BaseModel):
    """Uploaded QR code image."""

    filename: str = Field("", description="Original file name as sent by the client")
    content: bytes = Field(..., description="Raw file bytes")

    @property
    def size(self) -> int:
        return len(self.content)


class EventFields(BaseModel):
    """Validated scalar fields of a new event."""

    title: str
    place: str
    gradient: str
    icon: str
    date: dt.date
    time: dt.time


class StatusUpdateIn(BaseModel):
    """Body of ``PUT /api/events/{id}/status``; the value is checked by the service."""

    model_config = ConfigDict(extra="ignore")

    status: Any = Field(None, description="Target status: 'accepted' or 'declined'")


class EventOut(BaseModel):
    """Event as returned to API clients."""

    id: int
    title: str
    place: str
    gradient: str
    icon: str
    date: dt.date
    time: dt.time
    status: str
    qr_code_path: Optional[str] = None
    photo_path: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EventCreatedOut(BaseModel):
    message: str = "Event created successfully"
    id: int


class MessageOut(BaseModel):
    message: str


__all__: list[str] = [
    "EventCreateIn",
    "AttachmentIn",
    "EventFields",
    "StatusUpdateIn",
    "EventOut",
    "EventCreatedOut",
    "MessageOut",
]
