# travel_events/core/events/service.py

"""Service-layer for Events."""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Any, Optional, Sequence

from travel_events.core.attachments.base import BaseAttachmentStore

from .errors import (
    AttachmentTooLarge,
    EventNotFound,
    InvalidFieldFormat,
    InvalidFilter,
    InvalidId,
    InvalidStatus,
    MissingFields,
)
from .models import EVENT_ID_MAX, EVENT_ID_MIN, Event, EventFilter, EventStatus
from .repository import EventRepository
from .schemas import AttachmentIn, EventCreateIn, EventFields

log = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"-?[0-9]+")

REQUIRED_FIELDS: tuple[str, ...] = ("title", "place", "gradient", "icon", "date", "time")

# Targets reachable through the status update operation. Pending is never a target.
ALLOWED_STATUS_TARGETS: frozenset[EventStatus] = frozenset({EventStatus.ACCEPTED, EventStatus.DECLINED})


def is_allowed_status_target(target: EventStatus) -> bool:
    """
    Status policy: only the requested value is checked, never the current one,
    so accepted -> declined and declined -> accepted are permitted as well.
    """
    return target in ALLOWED_STATUS_TARGETS


def parse_event_id(raw: Any) -> int:
    """Strict integer parsing of a path identifier."""
    if isinstance(raw, bool):
        raise InvalidId()
    if isinstance(raw, int):
        return raw
    text = str(raw).strip() if raw is not None else ""
    if not _ID_PATTERN.fullmatch(text):
        raise InvalidId()
    return int(text)


def storable_event_id(event_id: int) -> bool:
    return EVENT_ID_MIN <= event_id <= EVENT_ID_MAX


def parse_status(raw: Any) -> EventStatus:
    if not isinstance(raw, str):
        raise InvalidStatus()
    try:
        status = EventStatus(raw)
    except ValueError as exc:
        raise InvalidStatus() from exc
    if not is_allowed_status_target(status):
        raise InvalidStatus()
    return status


def parse_filter(raw: Any) -> EventFilter:
    try:
        return EventFilter(raw)
    except ValueError as exc:
        raise InvalidFilter() from exc


def _parse_fields(payload: EventCreateIn) -> EventFields:
    values = payload.model_dump()
    if any(not values.get(name) for name in REQUIRED_FIELDS):
        raise MissingFields()
    try:
        event_date = dt.date.fromisoformat(values["date"].strip())
        event_time = dt.time.fromisoformat(values["time"].strip())
    except ValueError as exc:
        raise InvalidFieldFormat() from exc
    return EventFields(
        title=values["title"],
        place=values["place"],
        gradient=values["gradient"],
        icon=values["icon"],
        date=event_date,
        time=event_time,
    )


class EventsService:
    """
    Async service for the event lifecycle.

    Validates requests before touching any collaborator and maps repository
    outcomes to domain results.
    """

    def __init__(
        self,
        repository: EventRepository,
        attachment_store: BaseAttachmentStore,
        max_attachment_bytes: Optional[int] = None,
    ) -> None:
        """
        Args:
            repository (EventRepository): Repository bound to the request's session.
            attachment_store (BaseAttachmentStore): Where QR code images are written.
            max_attachment_bytes (Optional[int]): Upload size limit; ``None`` disables it.
        """
        self.repository = repository
        self.attachments = attachment_store
        self.max_attachment_bytes = max_attachment_bytes

    async def list_events(self, raw_filter: Any) -> Sequence[Event]:
        event_filter = parse_filter(raw_filter)
        return await self.repository.list_by_filter(event_filter)

    async def create_event(self, payload: EventCreateIn, attachment: Optional[AttachmentIn] = None) -> int:
        """
        Create an event, storing the QR code first when one was uploaded.

        The attachment path is passed into the insert, so the row never exists
        without it. If the attachment write fails, no insert is issued. A crash
        between the two steps can leave an orphaned file; that is accepted.

        Returns:
            int: The generated event id.
        """
        fields = _parse_fields(payload)
        if attachment is not None and self.max_attachment_bytes is not None:
            if attachment.size > self.max_attachment_bytes:
                raise AttachmentTooLarge()

        qr_code_path: Optional[str] = None
        if attachment is not None:
            qr_code_path = await self.attachments.store(attachment.filename, attachment.content)

        event_id = await self.repository.insert(fields, qr_code_path)
        log.info("Created event id=%d title=%r date=%s qr_code=%s", event_id, fields.title, fields.date, qr_code_path)
        return event_id

    async def get_event(self, raw_id: Any) -> Event:
        event_id = parse_event_id(raw_id)
        event = await self.repository.get_by_id(event_id) if storable_event_id(event_id) else None
        if event is None:
            log.debug("Event id=%d not found", event_id)
            raise EventNotFound()
        return event

    async def update_status(self, raw_id: Any, raw_status: Any) -> EventStatus:
        """
        Apply accepted/declined to an event. Idempotent.

        A zero-row update (unknown id, or a row removed concurrently) is still
        reported as success.
        """
        event_id = parse_event_id(raw_id)
        status = parse_status(raw_status)
        affected = await self.repository.update_status(event_id, status) if storable_event_id(event_id) else 0
        if affected == 0:
            log.warning("Status update for event id=%d matched no rows", event_id)
        else:
            log.info("Event id=%d status set to %s", event_id, status.value)
        return status


__all__ = [
    "EventsService",
    "is_allowed_status_target",
    "parse_event_id",
    "parse_status",
    "parse_filter",
    "storable_event_id",
    "REQUIRED_FIELDS",
]
