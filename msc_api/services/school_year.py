"""
services/school_year.py

School-year code lookup and update.

The code is a 4-digit value (e.g. "2526" for SY 2025-2026) that scopes
officer membership ID sequences. It lives in the settings table; when the
row is missing, settings.DEFAULT_SCHOOL_YEAR_CODE is used.

"""

import re

from sqlalchemy.orm import Session

from msc_api.core.config import settings
from msc_api.core.errors import ValidationError
from msc_api.models.setting import Setting, SCHOOL_YEAR_CODE_KEY


_SY_CODE_RE = re.compile(r"^\d{4}$")


def get_stored_school_year_code(db: Session) -> str | None:
    row = db.get(Setting, SCHOOL_YEAR_CODE_KEY)
    if row is None or not row.value:
        return None
    return row.value


def get_school_year_code(db: Session) -> str:
    return get_stored_school_year_code(db) or settings.DEFAULT_SCHOOL_YEAR_CODE


def validate_school_year_code(code: str) -> None:
    if not _SY_CODE_RE.match(code or ""):
        raise ValidationError({"school_year_code": "School year code must be 4 digits"})


def set_school_year_code(db: Session, code: str) -> Setting:
    validate_school_year_code(code)

    row = db.get(Setting, SCHOOL_YEAR_CODE_KEY)
    if row is None:
        row = Setting(key_name=SCHOOL_YEAR_CODE_KEY, value=code)
        db.add(row)
    else:
        row.value = code
    db.flush()
    return row
