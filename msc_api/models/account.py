"""
account.py

Account and Role models.

An account is one member or officer of the organization: login
credentials, student profile, role, active flag and the membership ID
issued at creation.

Every authentication, authorization and event registration check is
based on this model.

"""

import datetime
from enum import Enum

from sqlalchemy import String, Integer, Boolean, Date, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from msc_api.db.base import Base


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


"""
Account roles

- MEMBER  : regular member
- OFFICER : executive board member, may manage events and accounts

"""

class Role(str, Enum):
    MEMBER = "member"
    OFFICER = "officer"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


"""
Account model

- username / email / membership_id are unique
- membership_id is written exactly once, right after the row is inserted
- is_active=False blocks login but keeps the membership ID reserved
- refresh_token_version revokes outstanding refresh tokens when bumped

"""

class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    name_suffix: Mapped[str | None] = mapped_column(String(20), nullable=True)
    birthdate: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[Gender | None] = mapped_column(
        SAEnum(Gender, name="account_gender", values_callable=_enum_values), nullable=True
    )

    student_no: Mapped[str | None] = mapped_column(String(30), nullable=True)
    year_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    college: Mapped[str | None] = mapped_column(String(150), nullable=True)
    program: Mapped[str | None] = mapped_column(String(150), nullable=True)
    section: Mapped[str | None] = mapped_column(String(50), nullable=True)

    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    facebook_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_path: Mapped[str | None] = mapped_column(String(255), nullable=True)

    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="account_role", values_callable=_enum_values),
        nullable=False,
        default=Role.MEMBER,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    membership_id: Mapped[str | None] = mapped_column(String(30), unique=True, index=True, nullable=True)

    refresh_token_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    registrations = relationship("EventRegistration", back_populates="account")
