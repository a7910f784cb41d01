# travel_events/core/events/repository.py

"""Query shapes and ordering rules for the ``events`` table."""

from __future__ import annotations

import contextlib
import datetime as dt
import logging
from typing import AsyncIterator, Callable, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import EventsError, PersistenceError, UnexpectedFailure
from .models import Event, EventFilter, EventStatus
from .schemas import EventFields

log = logging.getLogger(__name__)


class EventRepository:
    """
    Translates event operations into single-statement queries.

    Every write is committed on its own; there is no transaction spanning
    more than one statement.
    """

    def __init__(self, db_session: AsyncSession, clock: Callable[[], dt.date] = dt.date.today) -> None:
        """
        Args:
            db_session (AsyncSession): Active SQLAlchemy async session.
            clock (Callable[[], date]): Source of "today" for time-relative filters.
        """
        self.db: AsyncSession = db_session
        self._clock = clock

    @contextlib.asynccontextmanager
    async def _translate_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except EventsError:
            raise
        except SQLAlchemyError as exc:
            log.error("Database error during %s: %s", operation, exc)
            await self.db.rollback()
            raise PersistenceError(f"Database error during {operation}") from exc
        except Exception as exc:
            log.error("Unexpected error during %s: %r", operation, exc)
            raise UnexpectedFailure(f"Unexpected error during {operation}") from exc

    async def list_by_filter(self, event_filter: EventFilter) -> Sequence[Event]:
        """
        Upcoming: ``date >= today`` ascending. Previous: ``date < today`` descending.
        """
        today = self._clock()
        if event_filter is EventFilter.UPCOMING:
            stmt = select(Event).where(Event.date >= today).order_by(Event.date.asc(), Event.id.asc())
        else:
            stmt = select(Event).where(Event.date < today).order_by(Event.date.desc(), Event.id.asc())

        log.debug("Listing %s events relative to %s", event_filter.value, today.isoformat())
        async with self._translate_errors("list events"):
            result = await self.db.scalars(stmt)
            events = result.all()
        log.debug("Found %d %s events", len(events), event_filter.value)
        return events

    async def insert(self, fields: EventFields, qr_code_path: Optional[str]) -> int:
        """Insert one row with status pending and return its generated id."""
        async with self._translate_errors("insert event"):
            event = Event(
                title=fields.title,
                place=fields.place,
                gradient=fields.gradient,
                icon=fields.icon,
                date=fields.date,
                time=fields.time,
                status=EventStatus.PENDING.value,
                qr_code_path=qr_code_path,
            )
            self.db.add(event)
            await self.db.flush()
            event_id = event.id
            await self.db.commit()
        return event_id

    async def get_by_id(self, event_id: int) -> Event | None:
        async with self._translate_errors("get event"):
            result = await self.db.scalars(select(Event).where(Event.id == event_id))
            return result.first()

    async def update_status(self, event_id: int, status: EventStatus) -> int:
        """Unconditional update by id; returns the number of rows affected."""
        stmt = update(Event).where(Event.id == event_id).values(status=status.value)
        async with self._translate_errors("update event status"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        return result.rowcount


__all__ = ["EventRepository"]
