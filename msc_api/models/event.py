"""
event.py

Event model and its enums.

Events are created, updated and deleted by officers. The status enum has
no enforced transition rules: an update may set any status.

"""

import datetime
from enum import Enum

from sqlalchemy import String, Integer, Boolean, Date, Time, Text, DateTime, Enum as SAEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from msc_api.db.base import Base
from msc_api.models.account import utcnow, _enum_values


class EventType(str, Enum):
    ONSITE = "onsite"
    ONLINE = "online"
    HYBRID = "hybrid"


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    CANCELED = "canceled"
    COMPLETED = "completed"


class EventRestriction(str, Enum):
    PUBLIC = "public"
    MEMBERS = "members"
    OFFICERS = "officers"


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_event_date", "event_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    event_name: Mapped[str] = mapped_column(String(200), nullable=False)
    event_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    event_time_start: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    event_time_end: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    event_type: Mapped[EventType] = mapped_column(
        SAEnum(EventType, name="event_type", values_callable=_enum_values),
        nullable=False,
        default=EventType.ONSITE,
    )
    event_status: Mapped[EventStatus] = mapped_column(
        SAEnum(EventStatus, name="event_status", values_callable=_enum_values),
        nullable=False,
        default=EventStatus.UPCOMING,
    )
    event_restriction: Mapped[EventRestriction] = mapped_column(
        SAEnum(EventRestriction, name="event_restriction", values_callable=_enum_values),
        nullable=False,
        default=EventRestriction.PUBLIC,
    )
    registration_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Deleting an event deletes its registrations
    registrations = relationship("EventRegistration", back_populates="event", cascade="all, delete-orphan")
