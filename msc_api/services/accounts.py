"""
services/accounts.py

Account (credential store) business logic.

Routers call these functions and only translate the results into
responses. Nothing here knows about HTTP; failures are reported with the
typed errors from msc_api.core.errors.

Main features:
- account creation with uniqueness checks and membership ID issuance
- lookups by id / username / email
- credential check at login (deactivated accounts rejected here)
- partial profile update, password change, active flag toggle
- paginated listing and counts

Design principles:
- transaction control (commit/rollback) belongs to the router
- the unique constraints on username/email are the final word: an
  IntegrityError raised by a racing insert becomes the same
  DuplicateCredentialError as the pre-insert check
- emails are stored and compared in lower case; usernames exactly

Related files:
- msc_api.models.account            : Account / Role
- msc_api.services.membership_ids   : issue_membership_id
- msc_api.routers.auth / students   : HTTP endpoints

"""

import logging

from sqlalchemy import select, func, or_, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from msc_api.core.errors import (
    AuthenticationError,
    AuthorizationError,
    DuplicateCredentialError,
    NotFoundError,
)
from msc_api.core.security import get_password_hash, verify_password
from msc_api.models.account import Account, Role
from msc_api.services.membership_ids import issue_membership_id

logger = logging.getLogger(__name__)


PROFILE_FIELDS = (
    "first_name",
    "middle_name",
    "last_name",
    "name_suffix",
    "birthdate",
    "gender",
    "student_no",
    "year_level",
    "college",
    "program",
    "section",
    "address",
    "phone",
    "facebook_link",
    "profile_image_path",
)

MAX_PAGE_SIZE = 100


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_account(db: Session, account_id: int) -> Account | None:
    return db.get(Account, account_id)


def require_account(db: Session, account_id: int) -> Account:
    account = get_account(db, account_id)
    if not account:
        raise NotFoundError("Student not found")
    return account


def find_by_username(db: Session, username: str) -> Account | None:
    return db.scalar(select(Account).where(Account.username == username))


def find_by_email(db: Session, email: str) -> Account | None:
    return db.scalar(select(Account).where(Account.email == normalize_email(email)))


def credentials_taken(db: Session, username: str, email: str) -> bool:
    existing = db.scalar(
        select(Account.id).where(or_(Account.username == username, Account.email == normalize_email(email)))
    )
    return existing is not None


"""
Create an account

1) reject if the username or email is already taken
2) insert the row (inside a SAVEPOINT so a unique-constraint race maps to
   DuplicateCredentialError instead of poisoning the transaction)
3) issue the membership ID and write it onto the new row

Role defaults to MEMBER and the account starts active.

"""

def create_account(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: Role | str = Role.MEMBER,
    **profile,
) -> Account:
    role = Role(role)
    email = normalize_email(email)

    if credentials_taken(db, username, email):
        raise DuplicateCredentialError()

    unknown = set(profile) - set(PROFILE_FIELDS)
    if unknown:
        raise TypeError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

    account = Account(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        is_active=True,
        **profile,
    )

    try:
        with db.begin_nested():
            db.add(account)
            db.flush()
    except IntegrityError:
        raise DuplicateCredentialError()

    account.membership_id = issue_membership_id(db, role)
    db.flush()

    logger.info("Created %s account id=%s membership_id=%s", role.value, account.id, account.membership_id)
    return account


"""
Check login credentials

- identifier may be a username or an email
- unknown account or wrong password -> AuthenticationError (401)
- correct password on a deactivated account -> AuthorizationError (403)

"""

def authenticate_credentials(db: Session, identifier: str, password: str) -> Account:
    account = find_by_username(db, identifier)
    if not account:
        account = find_by_email(db, identifier)

    if not account or not verify_password(password, account.password_hash):
        logger.info("Failed login for identifier=%r", identifier)
        raise AuthenticationError("Invalid username/email or password")

    if not account.is_active:
        logger.info("Login refused for deactivated account id=%s", account.id)
        raise AuthorizationError("Account is deactivated. Please contact administrator.")

    return account


def update_profile(db: Session, account_id: int, fields: dict) -> bool:
    account = get_account(db, account_id)
    if not account:
        return False

    for key, value in fields.items():
        if key in PROFILE_FIELDS:
            setattr(account, key, value)

    db.flush()
    return True


"""
Replace the stored password hash

The new password is hashed as given; strength checks are the caller's
job. Bumping refresh_token_version forces other sessions to log in again.

"""

def change_password(db: Session, account_id: int, new_password: str) -> bool:
    account = get_account(db, account_id)
    if not account:
        return False

    account.password_hash = get_password_hash(new_password)
    account.refresh_token_version += 1
    db.flush()
    return True


def toggle_active(db: Session, account_id: int) -> bool:
    account = get_account(db, account_id)
    if not account:
        return False

    account.is_active = not account.is_active
    if not account.is_active:
        account.refresh_token_version += 1
    db.flush()
    return True


def _clamp_paging(page: int, limit: int) -> tuple[int, int]:
    page = max(1, page)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return page, limit


def list_accounts(db: Session, page: int = 1, limit: int = 20, role: Role | str | None = None) -> list[Account]:
    page, limit = _clamp_paging(page, limit)

    stmt = select(Account)
    if role:
        stmt = stmt.where(Account.role == Role(role))
    stmt = stmt.order_by(desc(Account.created_at), desc(Account.id)).limit(limit).offset((page - 1) * limit)

    return list(db.scalars(stmt).all())


def count_accounts(db: Session, role: Role | str | None = None) -> int:
    stmt = select(func.count()).select_from(Account)
    if role:
        stmt = stmt.where(Account.role == Role(role))
    return db.scalar(stmt) or 0
