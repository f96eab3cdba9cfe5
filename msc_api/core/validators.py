"""
validators.py

Field checks shared by the request schemas.

Each check returns normally or raises ValueError with a human-readable
message; pydantic turns that into a field error, and the exception
handler in msc_api.main renders it as {"errors": {field: message}}.

"""

import datetime
import re


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")
_PHONE_RE = re.compile(r"^\+?[0-9][0-9\s\-()]{6,19}$")


def password_problems(password: str) -> list[str]:
    problems = []
    if len(password) < 8:
        problems.append("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", password):
        problems.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        problems.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        problems.append("Password must contain at least one number")
    return problems


def check_password(password: str) -> str:
    problems = password_problems(password)
    if problems:
        raise ValueError("; ".join(problems))
    return password


# Only YYYY-MM-DD strings; date objects pass through
def check_date(value):
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError("Invalid date format. Use YYYY-MM-DD")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError("Invalid date format. Use YYYY-MM-DD")


def check_time(value):
    if isinstance(value, datetime.time):
        return value
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise ValueError("Invalid time format. Use HH:MM")
    try:
        return datetime.time.fromisoformat(value)
    except ValueError:
        raise ValueError("Invalid time format. Use HH:MM")


def check_phone(value: str | None) -> str | None:
    if value and not _PHONE_RE.match(value):
        raise ValueError("Invalid phone number format")
    return value or None
