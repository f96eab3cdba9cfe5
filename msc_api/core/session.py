"""
session.py

Login session handling on top of JWT tokens.

A "session" is the pair (access token, refresh token cookie):

- set_user_session   : issue both after a successful login / refresh
- clear_user_session : revoke every refresh token of the account by
                       bumping refresh_token_version and drop the cookie

Session state lives in the tokens and the account row only; nothing is
kept in process memory between requests.

"""

from fastapi import Response
from sqlalchemy.orm import Session

from msc_api.core.config import settings
from msc_api.core.security import create_access_token, create_refresh_token
from msc_api.models.account import Account

REFRESH_COOKIE_NAME = "refresh_token"


def set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
        path="/",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def delete_refresh_cookie(response: Response) -> None:
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path="/", domain=settings.COOKIE_DOMAIN)


def set_user_session(response: Response, account: Account) -> dict:
    """Issue tokens for `account`; returns the token payload for the body."""
    access = create_access_token(subject=str(account.id))
    refresh = create_refresh_token(
        subject=str(account.id),
        refresh_token_version=account.refresh_token_version,
    )
    set_refresh_cookie(response, refresh)
    return {
        "access_token": access,
        "token_type": "bearer",
    }


def clear_user_session(response: Response, db: Session, account: Account | None) -> None:
    # db.commit() is the caller's job
    if account is not None:
        account.refresh_token_version += 1
        db.flush()
    delete_refresh_cookie(response)
