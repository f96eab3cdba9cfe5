import datetime
from enum import Enum

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint, Index, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from msc_api.db.base import Base
from msc_api.models.account import utcnow, _enum_values


class AttendanceStatus(str, Enum):
    REGISTERED = "registered"
    ATTENDED = "attended"
    ABSENT = "absent"


class EventRegistration(Base):
    """One account registered for one event.

    The (event_id, account_id) unique constraint guarantees at most one row
    per pair even when two registration requests race.
    """

    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "account_id", name="uq_event_registrations_event_account"),
        Index("ix_event_registrations_account_id", "account_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)

    attendance_status: Mapped[AttendanceStatus] = mapped_column(
        SAEnum(AttendanceStatus, name="attendance_status", values_callable=_enum_values),
        nullable=False,
        default=AttendanceStatus.REGISTERED,
    )

    registered_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    event = relationship("Event", back_populates="registrations")
    account = relationship("Account", back_populates="registrations")
