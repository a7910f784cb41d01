# travel_events/core/events/models.py

from __future__ import annotations

import enum
import datetime as dt
from typing import Optional

from sqlalchemy import Date, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from travel_events.db.base import Base


# Range of the Integer (int4) primary key; ids outside it can never match a row.
EVENT_ID_MIN = -(2**31)
EVENT_ID_MAX = 2**31 - 1


class EventStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class EventFilter(str, enum.Enum):
    """Time-relative listing filter, evaluated against the current date at query time."""
    UPCOMING = "upcoming"
    PREVIOUS = "previous"


class Event(Base):
    """
    ORM model for a scheduled event.

    ``status`` starts as pending and only changes through the status update
    operation. ``qr_code_path`` is written once, at creation. ``photo_path`` is
    readable but no write path sets it.
    """
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    place: Mapped[str] = mapped_column(String(255), nullable=False)
    gradient: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=EventStatus.PENDING.value, server_default=EventStatus.PENDING.value
    )
    qr_code_path: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    photo_path: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Event id={self.id} title={self.title!r} date='{self.date}' status={self.status}>"
