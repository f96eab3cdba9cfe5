"""
services/membership_ids.py

Membership ID issuance.

Formats:
- officer : MSC<sy>EB-NNN   (sequence per school-year code, 3 digits)
- member  : MSC-NNNN        (one global sequence, 4 digits)

Each (role, scope) pair owns one row in membership_sequences. A number is
taken with a single UPDATE ... SET last_value = last_value + 1 RETURNING,
so two concurrent sign-ups can never read the same value. The row is
created on first use and seeded with the highest number already issued
in that scope, so databases that predate the counter table keep counting
from where they were.

Numbers are never reused: deactivating an account does not give its
number back.

Related files:
- msc_api.models.setting          : MembershipSequence
- msc_api.services.school_year    : current school-year code
- msc_api.services.accounts       : calls issue_membership_id after insert

"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from msc_api.models.account import Account, Role
from msc_api.models.setting import MembershipSequence
from msc_api.services.school_year import get_school_year_code

logger = logging.getLogger(__name__)

MEMBER_SCOPE = "ALL"


def format_officer_id(school_year_code: str, seq: int) -> str:
    return f"MSC{school_year_code}EB-{seq:03d}"


def format_member_id(seq: int) -> str:
    return f"MSC-{seq:04d}"


def _id_pattern(role: Role, scope: str) -> str:
    if role == Role.OFFICER:
        return f"MSC{scope}EB-%"
    return "MSC-%"


# Highest number already used in the scope; legacy IDs may have gaps
def _highest_issued(db: Session, role: Role, scope: str) -> int:
    issued = db.scalars(
        select(Account.membership_id).where(Account.membership_id.like(_id_pattern(role, scope)))
    ).all()

    highest = 0
    for membership_id in issued:
        suffix = membership_id.rsplit("-", 1)[1]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


def _increment(db: Session, role: Role, scope: str) -> int | None:
    stmt = (
        update(MembershipSequence)
        .where(MembershipSequence.role == role.value, MembershipSequence.scope == scope)
        .values(last_value=MembershipSequence.last_value + 1)
        .returning(MembershipSequence.last_value)
        .execution_options(synchronize_session=False)
    )
    return db.execute(stmt).scalar_one_or_none()


def next_sequence(db: Session, role: Role, scope: str) -> int:
    value = _increment(db, role, scope)
    if value is not None:
        return value

    first = _highest_issued(db, role, scope) + 1
    try:
        with db.begin_nested():
            db.add(MembershipSequence(role=role.value, scope=scope, last_value=first))
        return first
    except IntegrityError:
        # another request created the counter row in between
        value = _increment(db, role, scope)
        if value is None:
            raise
        return value


"""
Issue the next membership ID for a role

- school_year_code is only used for officers; when omitted the current
  code from the settings table (or the configured default) is used
- runs inside the caller's transaction; the caller commits

"""

def issue_membership_id(db: Session, role: Role | str, school_year_code: str | None = None) -> str:
    role = Role(role)

    if role == Role.OFFICER:
        sy = school_year_code or get_school_year_code(db)
        membership_id = format_officer_id(sy, next_sequence(db, role, sy))
    else:
        membership_id = format_member_id(next_sequence(db, role, MEMBER_SCOPE))

    logger.debug("Issued membership id %s for role=%s", membership_id, role.value)
    return membership_id
