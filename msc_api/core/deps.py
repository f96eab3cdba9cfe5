"""
deps.py

FastAPI dependencies: database session and the authentication /
authorization guard.

- get_db                 : one Session per request, always closed
- get_current_account_id : who is calling (401 if unknown)
- get_current_user       : the caller's Account row
- get_optional_user      : the caller's Account, or None without a token
- get_current_member / get_current_officer : role checks (403)

Deactivated accounts are refused at login, not here.

"""

from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from msc_api.core.errors import AuthenticationError, AuthorizationError
from msc_api.core.security import decode_access_token
from msc_api.db.session import SessionLocal
from msc_api.models.account import Account, Role

# Lets Swagger's Authorize button send a Bearer token
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_account_id(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    if cred is None:
        raise AuthenticationError("Not authenticated")

    try:
        return decode_access_token(cred.credentials)
    except JWTError:
        raise AuthenticationError("Could not validate credentials")


def get_current_user(
    account_id: int = Depends(get_current_account_id),
    db: Session = Depends(get_db),
) -> Account:
    account = db.get(Account, account_id)
    if not account:
        raise AuthenticationError("User not found")
    return account


def get_optional_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Account | None:
    if cred is None:
        return None
    try:
        account_id = decode_access_token(cred.credentials)
    except JWTError:
        # a stale token on a public endpoint counts as anonymous
        return None
    return db.get(Account, account_id)


ROLE_LEVEL = {
    Role.MEMBER: 1,
    Role.OFFICER: 2,
}


def require_min_role(min_role: Role):
    def _checker(current_user: Account = Depends(get_current_user)) -> Account:
        if ROLE_LEVEL[current_user.role] < ROLE_LEVEL[min_role]:
            raise AuthorizationError("Insufficient privileges")
        return current_user
    return _checker


def is_officer(account: Account | None) -> bool:
    return account is not None and account.role == Role.OFFICER


def require_self_or_officer(current_user: Account, account_id: int) -> None:
    if not is_officer(current_user) and current_user.id != account_id:
        raise AuthorizationError("Insufficient privileges")


get_current_member = require_min_role(Role.MEMBER)
get_current_officer = require_min_role(Role.OFFICER)
