import datetime as dt

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from travel_events.core.events.errors import PersistenceError
from travel_events.core.events.models import EventFilter, EventStatus
from travel_events.core.events.repository import EventRepository
from travel_events.core.events.schemas import EventFields
from travel_events.db.base import drop_db_and_tables

TODAY = dt.date(2030, 6, 15)


def _fields(title: str, day: dt.date) -> EventFields:
    return EventFields(
        title=title, place="HQ", gradient="g1", icon="rocket", date=day, time=dt.time(10, 0)
    )


@pytest.fixture
def repo(db_session: AsyncSession) -> EventRepository:
    return EventRepository(db_session, clock=lambda: TODAY)


@pytest.mark.asyncio
async def test_insert_returns_id_and_defaults_to_pending(repo: EventRepository):
    event_id = await repo.insert(_fields("Launch", TODAY), None)

    event = await repo.get_by_id(event_id)
    assert event is not None
    assert event.id == event_id
    assert event.status == EventStatus.PENDING.value
    assert event.qr_code_path is None
    assert event.photo_path is None


@pytest.mark.asyncio
async def test_insert_keeps_qr_code_path(repo: EventRepository):
    event_id = await repo.insert(_fields("Launch", TODAY), "/qr-codes/1-abc-code.png")
    event = await repo.get_by_id(event_id)
    assert event.qr_code_path == "/qr-codes/1-abc-code.png"


@pytest.mark.asyncio
async def test_ids_are_unique(repo: EventRepository):
    ids = [await repo.insert(_fields(f"e{i}", TODAY), None) for i in range(3)]
    assert len(set(ids)) == 3


@pytest.mark.asyncio
async def test_filters_partition_events_around_today(repo: EventRepository):
    days = {
        "long-ago": dt.date(2029, 1, 1),
        "yesterday": TODAY - dt.timedelta(days=1),
        "today": TODAY,
        "tomorrow": TODAY + dt.timedelta(days=1),
        "next-year": dt.date(2031, 1, 1),
    }
    # insert out of order so ordering comes from the query
    for title in ("tomorrow", "long-ago", "next-year", "today", "yesterday"):
        await repo.insert(_fields(title, days[title]), None)

    upcoming = await repo.list_by_filter(EventFilter.UPCOMING)
    previous = await repo.list_by_filter(EventFilter.PREVIOUS)

    assert [e.title for e in upcoming] == ["today", "tomorrow", "next-year"]
    assert [e.title for e in previous] == ["yesterday", "long-ago"]
    assert {e.id for e in upcoming}.isdisjoint({e.id for e in previous})


@pytest.mark.asyncio
async def test_list_empty_is_not_an_error(repo: EventRepository):
    assert list(await repo.list_by_filter(EventFilter.UPCOMING)) == []
    assert list(await repo.list_by_filter(EventFilter.PREVIOUS)) == []


@pytest.mark.asyncio
async def test_get_by_id_miss_returns_none(repo: EventRepository):
    assert await repo.get_by_id(424242) is None


@pytest.mark.asyncio
async def test_update_status_reports_rows_affected(repo: EventRepository):
    event_id = await repo.insert(_fields("Launch", TODAY), None)

    assert await repo.update_status(event_id, EventStatus.ACCEPTED) == 1
    assert (await repo.get_by_id(event_id)).status == "accepted"

    assert await repo.update_status(999999, EventStatus.DECLINED) == 0


@pytest.mark.asyncio
async def test_datastore_failure_is_persistence_error(repo: EventRepository):
    await drop_db_and_tables()

    with pytest.raises(PersistenceError):
        await repo.list_by_filter(EventFilter.UPCOMING)
    with pytest.raises(PersistenceError):
        await repo.insert(_fields("Launch", TODAY), None)
