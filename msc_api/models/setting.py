"""
setting.py

Key/value settings and membership ID counters.

- Setting            : runtime-editable values (e.g. school_year_code)
- MembershipSequence : last issued sequence number per (role, scope)

Sequence rows are only ever incremented, so a number is never handed
out twice even after the account holding it is deactivated.

"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from msc_api.db.base import Base


SCHOOL_YEAR_CODE_KEY = "school_year_code"


class Setting(Base):
    __tablename__ = "settings"

    key_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)


class MembershipSequence(Base):
    __tablename__ = "membership_sequences"

    # role: "member" / "officer"
    # scope: school-year code for officers, "ALL" for members
    role: Mapped[str] = mapped_column(String(20), primary_key=True)
    scope: Mapped[str] = mapped_column(String(10), primary_key=True)

    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
