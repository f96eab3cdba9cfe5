import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from msc_api.core.validators import check_date, check_time
from msc_api.models.event import EventType, EventStatus, EventRestriction
from msc_api.models.registration import AttendanceStatus


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    event_name: str = Field(min_length=1, max_length=200)
    event_date: datetime.date
    event_time_start: datetime.time
    event_time_end: datetime.time
    location: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)

    event_type: EventType = EventType.ONSITE
    event_status: EventStatus = EventStatus.UPCOMING
    event_restriction: EventRestriction = EventRestriction.PUBLIC
    registration_required: bool = False

    @field_validator("event_date", mode="before")
    @classmethod
    def _date(cls, v):
        return check_date(v)

    @field_validator("event_time_start", "event_time_end", mode="before")
    @classmethod
    def _time(cls, v):
        return check_time(v)


class EventUpdateRequest(BaseModel):
    """Partial update; any status may be set, there is no transition rule."""

    model_config = ConfigDict(str_strip_whitespace=True)

    event_name: str | None = Field(default=None, min_length=1, max_length=200)
    event_date: datetime.date | None = None
    event_time_start: datetime.time | None = None
    event_time_end: datetime.time | None = None
    location: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)

    event_type: EventType | None = None
    event_status: EventStatus | None = None
    event_restriction: EventRestriction | None = None
    registration_required: bool | None = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _date(cls, v):
        return None if v is None else check_date(v)

    @field_validator("event_time_start", "event_time_end", mode="before")
    @classmethod
    def _time(cls, v):
        return None if v is None else check_time(v)


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_name: str
    event_date: datetime.date
    event_time_start: datetime.time
    event_time_end: datetime.time
    location: str
    description: str
    event_type: EventType
    event_status: EventStatus
    event_restriction: EventRestriction
    registration_required: bool
    created_by: int | None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class AttendanceUpdateRequest(BaseModel):
    # checked against AttendanceStatus by the service
    attendance_status: str


class RegistrationResponse(BaseModel):
    id: int
    event_id: int
    account_id: int
    attendance_status: AttendanceStatus
    registered_at: datetime.datetime

    username: str | None = None
    email: str | None = None
    membership_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    student_no: str | None = None

    @classmethod
    def from_registration(cls, registration) -> "RegistrationResponse":
        account = registration.account
        return cls(
            id=registration.id,
            event_id=registration.event_id,
            account_id=registration.account_id,
            attendance_status=registration.attendance_status,
            registered_at=registration.registered_at,
            username=account.username if account else None,
            email=account.email if account else None,
            membership_id=account.membership_id if account else None,
            first_name=account.first_name if account else None,
            last_name=account.last_name if account else None,
            student_no=account.student_no if account else None,
        )


class MyRegistrationResponse(BaseModel):
    event_id: int
    event_name: str
    event_date: datetime.date
    event_status: EventStatus
    attendance_status: AttendanceStatus
    registered_at: datetime.datetime
