"""
services/events.py

Event registry business logic.

Authorization is not checked here: routers require the officer role
before calling create/update/delete. Inputs arrive already validated by
the request schemas (dates, times, enum values).

Main features:
- create / read / partial update / delete
- paginated listing with status / type / restriction / date filters
- upcoming events and events within a date range (calendar)

Related files:
- msc_api.models.event        : Event and its enums
- msc_api.routers.events      : HTTP endpoints

"""

import datetime
import logging

from sqlalchemy import select, func, desc, asc
from sqlalchemy.orm import Session

from msc_api.core.errors import NotFoundError
from msc_api.models.event import Event, EventStatus, EventType, EventRestriction

logger = logging.getLogger(__name__)


EVENT_FIELDS = (
    "event_name",
    "event_date",
    "event_time_start",
    "event_time_end",
    "location",
    "description",
    "event_type",
    "event_status",
    "event_restriction",
    "registration_required",
)

MAX_PAGE_SIZE = 100


def create_event(db: Session, *, created_by: int | None = None, **fields) -> Event:
    event = Event(created_by=created_by, **{k: v for k, v in fields.items() if k in EVENT_FIELDS})
    db.add(event)
    db.flush()
    logger.info("Created event id=%s name=%r", event.id, event.event_name)
    return event


def get_event(db: Session, event_id: int) -> Event | None:
    return db.get(Event, event_id)


def require_event(db: Session, event_id: int) -> Event:
    event = get_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def list_events(
    db: Session,
    page: int = 1,
    limit: int = 20,
    *,
    status: EventStatus | str | None = None,
    event_type: EventType | str | None = None,
    restriction: EventRestriction | str | None = None,
    date_from: datetime.date | None = None,
    date_to: datetime.date | None = None,
) -> list[Event]:
    page = max(1, page)
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    stmt = select(Event)
    if status:
        stmt = stmt.where(Event.event_status == EventStatus(status))
    if event_type:
        stmt = stmt.where(Event.event_type == EventType(event_type))
    if restriction:
        stmt = stmt.where(Event.event_restriction == EventRestriction(restriction))
    if date_from:
        stmt = stmt.where(Event.event_date >= date_from)
    if date_to:
        stmt = stmt.where(Event.event_date <= date_to)

    stmt = (
        stmt.order_by(desc(Event.event_date), desc(Event.event_time_start), desc(Event.id))
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(db.scalars(stmt).all())


def update_event(db: Session, event_id: int, fields: dict) -> bool:
    event = get_event(db, event_id)
    if not event:
        return False

    for key, value in fields.items():
        if key in EVENT_FIELDS:
            setattr(event, key, value)

    db.flush()
    logger.info("Updated event id=%s fields=%s", event_id, sorted(k for k in fields if k in EVENT_FIELDS))
    return True


"""
Delete an event

Registrations of the event are deleted with it (ORM cascade).

"""

def delete_event(db: Session, event_id: int) -> bool:
    event = get_event(db, event_id)
    if not event:
        return False

    db.delete(event)
    db.flush()
    logger.info("Deleted event id=%s", event_id)
    return True


def list_upcoming(db: Session, limit: int = 10, *, today: datetime.date | None = None) -> list[Event]:
    today = today or datetime.date.today()
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    stmt = (
        select(Event)
        .where(Event.event_status == EventStatus.UPCOMING, Event.event_date >= today)
        .order_by(asc(Event.event_date), asc(Event.event_time_start), asc(Event.id))
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def count_upcoming(db: Session, *, today: datetime.date | None = None) -> int:
    today = today or datetime.date.today()
    return db.scalar(
        select(func.count())
        .select_from(Event)
        .where(Event.event_status == EventStatus.UPCOMING, Event.event_date >= today)
    ) or 0


# Both bounds inclusive
def list_in_range(db: Session, start_date: datetime.date, end_date: datetime.date) -> list[Event]:
    stmt = (
        select(Event)
        .where(Event.event_date >= start_date, Event.event_date <= end_date)
        .order_by(asc(Event.event_date), asc(Event.event_time_start), asc(Event.id))
    )
    return list(db.scalars(stmt).all())
