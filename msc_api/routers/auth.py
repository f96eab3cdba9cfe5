"""
auth.py

Authentication and own-account API.

Covers sign-up, login, token refresh, logout, own profile, password
change and the forgot-password entry point. JWT based: access token in
the response body, refresh token in an HttpOnly cookie.

Main features:
- sign-up (members; officers only when an officer is calling)
- login by username or email (deactivated accounts refused)
- access token refresh with refresh token rotation
- logout (refresh token revocation)
- own profile and password change
- forgot password (neutral answer, no mail delivery)

Design principles:
- access token travels in the Authorization header
- refresh token travels in an HttpOnly cookie
- refresh_token_version revokes tokens on logout / password change
- services raise typed errors; the app-level handlers render them

Related files:
- msc_api.core.session        : set_user_session / clear_user_session
- msc_api.core.deps           : authentication dependencies
- msc_api.services.accounts   : account creation and credential checks
- msc_api.schemas.auth        : request schemas

"""

import logging

from jose import JWTError
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from msc_api.core import responses
from msc_api.core.deps import get_db, get_current_user, get_optional_user, is_officer
from msc_api.core.errors import AppError, AuthenticationError, AuthorizationError, InternalError, ValidationError
from msc_api.core.security import decode_refresh_token, verify_password
from msc_api.core.session import (
    REFRESH_COOKIE_NAME,
    set_user_session,
    clear_user_session,
    delete_refresh_cookie,
)
from msc_api.models.account import Account, Role
from msc_api.models.officer_log import OfficerAction
from msc_api.schemas.account import AccountResponse
from msc_api.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest, ForgotPasswordRequest
from msc_api.services import accounts as account_service
from msc_api.services.officer_log import write_officer_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
Sign-up API

- username and email must both be unused (409 otherwise)
- role defaults to member; creating an officer requires an officer token
- the membership ID is issued as part of the same transaction

"""

@router.post("/register", status_code=201)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    caller: Account | None = Depends(get_optional_user),
):
    if data.role == Role.OFFICER and not is_officer(caller):
        raise AuthorizationError("Only officers can create officer accounts")

    profile = data.model_dump(exclude={"username", "email", "password", "role"})

    try:
        account = account_service.create_account(
            db,
            username=data.username,
            email=data.email,
            password=data.password,
            role=data.role,
            **profile,
        )
        if data.role == Role.OFFICER:
            write_officer_log(
                db,
                actor_id=caller.id,
                action=OfficerAction.CREATE_OFFICER,
                target_account_id=account.id,
                detail=account.membership_id,
            )
        db.commit()
        db.refresh(account)
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for username=%r", data.username)
        raise InternalError("Failed to create account")

    return responses.success(AccountResponse.model_validate(account), "Registration successful")


"""
Login API

- wrong username/email or password -> 401
- deactivated account -> 403 even with the right password
- access token in the body, refresh token as HttpOnly cookie

"""

@router.post("/login")
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    account = account_service.authenticate_credentials(db, data.username.strip(), data.password)

    tokens = set_user_session(response, account)
    return responses.success(
        {**tokens, "user": AccountResponse.model_validate(account)},
        "Login successful",
    )


"""
Token refresh API

- requires the refresh cookie; version must match the account
- rotates the refresh token on every call

"""

@router.post("/refresh")
def refresh(request: Request, response: Response, db: Session = Depends(get_db)):
    token = request.cookies.get(REFRESH_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Missing refresh token")

    try:
        account_id, token_rtv = decode_refresh_token(token)
    except JWTError:
        raise AuthenticationError("Invalid refresh token")

    account = db.get(Account, account_id)
    if not account or not account.is_active:
        raise AuthenticationError("User not found")

    if token_rtv != account.refresh_token_version:
        raise AuthenticationError("Refresh token revoked")

    try:
        account.refresh_token_version += 1
        db.commit()
        db.refresh(account)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Refresh token rotation failed for account id=%s", account_id)
        raise InternalError("Failed to refresh session")

    tokens = set_user_session(response, account)
    return responses.success(tokens)


@router.post("/logout")
def logout(
    response: Response,
    db: Session = Depends(get_db),
    user: Account = Depends(get_current_user),
):
    try:
        clear_user_session(response, db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Logout failed for account id=%s", user.id)
        raise InternalError("Failed to log out")

    return responses.success(None, "Logout successful")


@router.get("/profile")
def profile(current_user: Account = Depends(get_current_user)):
    return responses.success(AccountResponse.model_validate(current_user))


"""
Password change API

- current password must match (422 otherwise)
- new password must differ from the current one
- all refresh tokens are revoked; the cookie is dropped

"""

@router.put("/password")
def change_password(
    data: ChangePasswordRequest,
    response: Response,
    db: Session = Depends(get_db),
    user: Account = Depends(get_current_user),
):
    if not verify_password(data.current_password, user.password_hash):
        raise ValidationError({"current_password": "Current password is incorrect"}, "Current password is incorrect")

    if verify_password(data.new_password, user.password_hash):
        raise ValidationError({"new_password": "New password must be different"}, "New password must be different")

    try:
        account_service.change_password(db, user.id, data.new_password)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password change failed for account id=%s", user.id)
        raise InternalError("Failed to change password")

    delete_refresh_cookie(response)
    return responses.success(None, "Password changed successfully")


# Same answer whether or not the email exists; no mail is sent
@router.post("/forgot-password")
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    account = account_service.find_by_email(db, data.email)
    if account:
        logger.info("Password reset requested for account id=%s", account.id)
    return responses.success(None, "If the email exists, a reset link has been sent")
