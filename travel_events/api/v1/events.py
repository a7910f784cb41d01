# travel_events/api/v1/events.py

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from travel_events.api.errors import http_error_from
from travel_events.config import settings
from travel_events.core.attachments import BaseAttachmentStore, get_attachment_store
from travel_events.core.events.errors import EventsError
from travel_events.core.events.repository import EventRepository
from travel_events.core.events.schemas import (
    AttachmentIn,
    EventCreatedOut,
    EventCreateIn,
    EventOut,
    MessageOut,
    StatusUpdateIn,
)
from travel_events.core.events.service import EventsService
from travel_events.db.base import get_async_db_session

router = APIRouter(prefix="/api/events", tags=["Events"])
log = logging.getLogger(__name__)


def provide_attachment_store() -> BaseAttachmentStore:
    return get_attachment_store()


def get_events_service(
    db: AsyncSession = Depends(get_async_db_session),
    attachment_store: BaseAttachmentStore = Depends(provide_attachment_store),
) -> EventsService:
    return EventsService(
        EventRepository(db),
        attachment_store,
        max_attachment_bytes=settings.max_upload_bytes,
    )


@router.get(
    "",
    response_model=List[EventOut],
    summary="List upcoming or previous events",
)
async def list_events(
    event_filter: Optional[str] = Query(None, alias="filter", description="'upcoming' or 'previous'"),
    svc: EventsService = Depends(get_events_service),
) -> List[EventOut]:
    """
    Upcoming events (today and later) come back in ascending date order,
    previous ones in descending date order.
    """
    try:
        events = await svc.list_events(event_filter)
    except EventsError as exc:
        raise http_error_from(exc, "Failed to fetch events") from exc
    except Exception as exc:
        log.exception("API: Error fetching events (filter=%r)", event_filter)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch events") from exc
    return [EventOut.model_validate(e) for e in events]


@router.post(
    "",
    response_model=EventCreatedOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event with an optional QR code image",
)
async def create_event(
    title: Optional[str] = Form(None),
    place: Optional[str] = Form(None),
    gradient: Optional[str] = Form(None),
    icon: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    qr_code: Optional[UploadFile] = File(None, alias="qrCode"),
    svc: EventsService = Depends(get_events_service),
) -> EventCreatedOut:
    payload = EventCreateIn(title=title, place=place, gradient=gradient, icon=icon, date=date, time=time)
    try:
        attachment: Optional[AttachmentIn] = None
        if qr_code is not None:
            # one byte past the limit is enough for the service to reject it
            content = await qr_code.read(settings.max_upload_bytes + 1)
            # an empty file part is treated as "no file"
            if qr_code.filename or content:
                attachment = AttachmentIn(filename=qr_code.filename or "", content=content)
        event_id = await svc.create_event(payload, attachment)
    except EventsError as exc:
        raise http_error_from(exc, "Failed to create event") from exc
    except Exception as exc:
        log.exception("API: Error creating event %r", title)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create event") from exc
    finally:
        if qr_code is not None:
            await qr_code.close()
    return EventCreatedOut(id=event_id)


@router.get(
    "/{event_id}",
    response_model=EventOut,
    summary="Get a single event",
)
async def get_event(
    event_id: str,
    svc: EventsService = Depends(get_events_service),
) -> EventOut:
    try:
        event = await svc.get_event(event_id)
    except EventsError as exc:
        raise http_error_from(exc, "Failed to fetch event") from exc
    except Exception as exc:
        log.exception("API: Error fetching event %r", event_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch event") from exc
    return EventOut.model_validate(event)


@router.put(
    "/{event_id}/status",
    response_model=MessageOut,
    summary="Accept or decline an event",
)
async def update_event_status(
    event_id: str,
    payload: Optional[StatusUpdateIn] = Body(None),
    svc: EventsService = Depends(get_events_service),
) -> MessageOut:
    requested = payload.status if payload is not None else None
    try:
        await svc.update_status(event_id, requested)
    except EventsError as exc:
        raise http_error_from(exc, "Failed to update event status") from exc
    except Exception as exc:
        log.exception("API: Error updating status of event %r", event_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update event status"
        ) from exc
    return MessageOut(message="Event status updated successfully")
