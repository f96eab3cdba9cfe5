"""
events.py

Event and registration API.

Main features:
- event list (paged, filtered), upcoming list, calendar range, detail
- event create / update / delete (officer only)
- registration of the calling account for an event
- registration roster and attendance marking (officer only)
- roster export as CSV / Excel (xlsx) (officer only)

Design principles:
- authorization is decided here through dependencies; the event and
  registration services never look at the caller's role
- a second registration for the same event answers 409
- every officer mutation is written to the officer action log in the
  same transaction

Related files:
- msc_api.services.events         : event registry
- msc_api.services.registrations  : registration ledger
- msc_api.schemas.event           : request / response schemas

"""

import calendar
import csv
import datetime
import io
import logging

from fastapi import APIRouter, Depends, Query
from openpyxl import Workbook
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from msc_api.core import responses
from msc_api.core.deps import get_db, get_current_user, get_current_officer
from msc_api.core.errors import AppError, InternalError, ValidationError
from msc_api.core.validators import check_date
from msc_api.models.account import Account
from msc_api.models.event import EventStatus, EventType, EventRestriction
from msc_api.models.officer_log import OfficerAction
from msc_api.schemas.event import (
    EventCreateRequest,
    EventUpdateRequest,
    EventResponse,
    AttendanceUpdateRequest,
    RegistrationResponse,
)
from msc_api.services import events as event_service
from msc_api.services import registrations as registration_service
from msc_api.services.officer_log import write_officer_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def _parse_enum(enum_cls, value: str | None, field: str):
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError({field: f"Invalid {field} value"})


def _parse_date_param(value: str | None, field: str) -> datetime.date | None:
    if not value:
        return None
    try:
        return check_date(value)
    except ValueError as e:
        raise ValidationError({field: str(e)})


"""
Event list API

- filters: status, type, restriction, date_from, date_to (YYYY-MM-DD)
- newest event date first

"""
@router.get("")
def list_events(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    event_type: str | None = Query(None, alias="type"),
    restriction: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    db: Session = Depends(get_db),
):
    filters = {
        "status": _parse_enum(EventStatus, status, "status"),
        "event_type": _parse_enum(EventType, event_type, "type"),
        "restriction": _parse_enum(EventRestriction, restriction, "restriction"),
        "date_from": _parse_date_param(date_from, "date_from"),
        "date_to": _parse_date_param(date_to, "date_to"),
    }
    events = event_service.list_events(db, page, limit, **filters)

    return responses.success({
        "events": [EventResponse.model_validate(e) for e in events],
        "pagination": {"page": page, "limit": limit},
        "filters": {k: v for k, v in filters.items() if v is not None},
    })


@router.get("/upcoming")
def list_upcoming_events(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    events = event_service.list_upcoming(db, limit)
    return responses.success([EventResponse.model_validate(e) for e in events])


"""
Calendar API

- events whose date lies within [start, end], both inclusive
- defaults to the first and last day of the current month

"""
@router.get("/calendar")
def calendar_events(
    start: str | None = None,
    end: str | None = None,
    db: Session = Depends(get_db),
):
    today = datetime.date.today()
    try:
        start_date = check_date(start) if start else today.replace(day=1)
        end_date = check_date(end) if end else today.replace(
            day=calendar.monthrange(today.year, today.month)[1]
        )
    except ValueError:
        raise ValidationError({"date": "Invalid date format. Use YYYY-MM-DD"})

    events = event_service.list_in_range(db, start_date, end_date)
    return responses.success([EventResponse.model_validate(e) for e in events])


@router.post("", status_code=201)
def create_event(
    data: EventCreateRequest,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    try:
        event = event_service.create_event(db, created_by=officer.id, **data.model_dump())
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.CREATE_EVENT,
            target_event_id=event.id,
            detail=event.event_name,
        )
        db.commit()
        db.refresh(event)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Event creation failed")
        raise InternalError("Failed to create event")

    return responses.success(EventResponse.model_validate(event), "Event created successfully")


@router.get("/{event_id}")
def get_event(event_id: int, db: Session = Depends(get_db)):
    event = event_service.require_event(db, event_id)
    return responses.success(EventResponse.model_validate(event))


"""
Event update API (officer only)

- partial: only the fields present (and not null) change
- any status may be set; there are no transition rules

"""
@router.put("/{event_id}")
def update_event(
    event_id: int,
    data: EventUpdateRequest,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    event_service.require_event(db, event_id)

    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise ValidationError(message="No changes provided")

    try:
        event_service.update_event(db, event_id, fields)
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.UPDATE_EVENT,
            target_event_id=event_id,
            detail=", ".join(sorted(fields)),
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Event update failed for event id=%s", event_id)
        raise InternalError("Failed to update event")

    event = event_service.require_event(db, event_id)
    return responses.success(EventResponse.model_validate(event), "Event updated successfully")


# Registrations of the event are deleted along with it
@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    event = event_service.require_event(db, event_id)
    name = event.event_name

    try:
        event_service.delete_event(db, event_id)
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.DELETE_EVENT,
            target_event_id=event_id,
            detail=name,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Event deletion failed for event id=%s", event_id)
        raise InternalError("Failed to delete event")

    return responses.success(None, "Event deleted successfully")


"""
Event registration API

- the caller registers themselves
- unknown event -> 404, already registered -> 409

"""
@router.post("/{event_id}/register", status_code=201)
def register_for_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user),
):
    try:
        registration = registration_service.register(db, event_id, current_user.id)
        db.commit()
        db.refresh(registration)
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for event id=%s account id=%s", event_id, current_user.id)
        raise InternalError("Failed to register for event")

    return responses.success(
        RegistrationResponse.from_registration(registration),
        "Successfully registered for event",
    )


@router.get("/{event_id}/registrations")
def list_event_registrations(
    event_id: int,
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_officer),
):
    event = event_service.require_event(db, event_id)
    registrations = registration_service.list_for_event(db, event_id)

    return responses.success({
        "event": EventResponse.model_validate(event),
        "registrations": [RegistrationResponse.from_registration(r) for r in registrations],
        "total_registered": len(registrations),
    })


"""
Attendance API (officer only)

- attendance_status must be registered / attended / absent (422)
- the account must be registered for the event (404)

"""
@router.put("/{event_id}/attendance/{student_id}")
def update_attendance(
    event_id: int,
    student_id: int,
    data: AttendanceUpdateRequest,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    try:
        registration_service.set_attendance(db, event_id, student_id, data.attendance_status)
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.SET_ATTENDANCE,
            target_account_id=student_id,
            target_event_id=event_id,
            detail=data.attendance_status,
        )
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Attendance update failed for event id=%s account id=%s", event_id, student_id)
        raise InternalError("Failed to update attendance status")

    return responses.success(None, "Attendance status updated successfully")


ROSTER_HEADER = [
    "event_id", "membership_id", "username", "first_name", "last_name",
    "student_no", "email", "attendance_status", "registered_at",
]


def _roster_row(event_id: int, r) -> list:
    a = r.account
    return [
        event_id,
        a.membership_id or "",
        a.username,
        a.first_name or "",
        a.last_name or "",
        a.student_no or "",
        a.email,
        r.attendance_status.value,
        r.registered_at.isoformat() if r.registered_at else "",
    ]


"""
Roster CSV export (officer only)

- streamed row by row
- UTF-8 with BOM so Excel opens it without mangling names

"""
@router.get("/{event_id}/registrations/export")
def export_registrations_csv(
    event_id: int,
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_officer),
):
    event_service.require_event(db, event_id)
    registrations = registration_service.list_for_event(db, event_id)

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(ROSTER_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for r in registrations:
            writer.writerow(_roster_row(event_id, r))
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    filename = f"event_{event_id}_registrations.csv"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/{event_id}/registrations/export.xlsx")
def export_registrations_xlsx(
    event_id: int,
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_officer),
):
    event_service.require_event(db, event_id)
    registrations = registration_service.list_for_event(db, event_id)

    wb = Workbook()
    ws = wb.active
    ws.title = "registrations"

    ws.append(ROSTER_HEADER)
    for r in registrations:
        ws.append(_roster_row(event_id, r))

    buf = io.BytesIO()
    wb.save(buf)

    filename = f"event_{event_id}_registrations.xlsx"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
