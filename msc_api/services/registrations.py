"""
services/registrations.py

Event registration ledger.

Tracks which accounts registered for which events and their attendance.

Rules:
- at most one registration per (event, account); a second attempt raises
  AlreadyRegisteredError, never a silent success
- new registrations start as "registered"
- attendance can be set to registered / attended / absent, any order,
  but only on an existing registration

"""

import logging

from sqlalchemy import select, asc, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from msc_api.core.errors import AlreadyRegisteredError, NotFoundError, ValidationError
from msc_api.models.event import Event
from msc_api.models.registration import EventRegistration, AttendanceStatus
from msc_api.services.events import require_event

logger = logging.getLogger(__name__)


def get_registration(db: Session, event_id: int, account_id: int) -> EventRegistration | None:
    return db.scalar(
        select(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.account_id == account_id,
        )
    )


"""
Register an account for an event

- the event must exist (NotFoundError)
- an existing pair, or a concurrent insert that trips the unique
  constraint, raises AlreadyRegisteredError

"""

def register(db: Session, event_id: int, account_id: int) -> EventRegistration:
    require_event(db, event_id)

    if get_registration(db, event_id, account_id):
        raise AlreadyRegisteredError()

    registration = EventRegistration(
        event_id=event_id,
        account_id=account_id,
        attendance_status=AttendanceStatus.REGISTERED,
    )
    try:
        with db.begin_nested():
            db.add(registration)
            db.flush()
    except IntegrityError:
        raise AlreadyRegisteredError()

    logger.info("Account id=%s registered for event id=%s", account_id, event_id)
    return registration


def list_for_event(db: Session, event_id: int) -> list[EventRegistration]:
    stmt = (
        select(EventRegistration)
        .options(joinedload(EventRegistration.account))
        .where(EventRegistration.event_id == event_id)
        .order_by(asc(EventRegistration.registered_at), asc(EventRegistration.id))
    )
    return list(db.scalars(stmt).all())


def list_for_account(db: Session, account_id: int) -> list[EventRegistration]:
    stmt = (
        select(EventRegistration)
        .join(Event, Event.id == EventRegistration.event_id)
        .options(joinedload(EventRegistration.event))
        .where(EventRegistration.account_id == account_id)
        .order_by(desc(Event.event_date), desc(EventRegistration.id))
    )
    return list(db.scalars(stmt).all())


def parse_attendance_status(status: AttendanceStatus | str) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError:
        raise ValidationError({"attendance_status": "Invalid attendance status"})


def set_attendance(db: Session, event_id: int, account_id: int, status: AttendanceStatus | str) -> bool:
    status = parse_attendance_status(status)

    registration = get_registration(db, event_id, account_id)
    if not registration:
        raise NotFoundError("Registration not found")

    registration.attendance_status = status
    db.flush()
    logger.info("Attendance of account id=%s for event id=%s set to %s", account_id, event_id, status.value)
    return True
