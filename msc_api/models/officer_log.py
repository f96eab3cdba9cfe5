"""

officer_log.py

Officer action (audit) log model.

Records the management actions officers perform (event changes,
attendance marking, account activation, officer creation, school-year
changes) so misuse can be traced later.

Design principles:
- the actual change and its log row are written in the same transaction
- rows are never updated or deleted
- actor (the officer) and target (account and/or event) are kept apart
- target_event_id has no foreign key so the log survives event deletion

"""

import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from msc_api.db.base import Base
from msc_api.models.account import utcnow


class OfficerAction(str, Enum):
    CREATE_EVENT = "CREATE_EVENT"
    UPDATE_EVENT = "UPDATE_EVENT"
    DELETE_EVENT = "DELETE_EVENT"
    SET_ATTENDANCE = "SET_ATTENDANCE"
    TOGGLE_ACTIVE = "TOGGLE_ACTIVE"
    CREATE_OFFICER = "CREATE_OFFICER"
    SET_SCHOOL_YEAR = "SET_SCHOOL_YEAR"


class OfficerActionLog(Base):
    __tablename__ = "officer_action_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    actor_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id"), nullable=False)
    target_account_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("accounts.id"), nullable=True)
    target_event_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    action: Mapped[OfficerAction] = mapped_column(SAEnum(OfficerAction, name="officer_action"), nullable=False)
    detail: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
