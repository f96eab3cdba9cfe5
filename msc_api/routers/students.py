"""
students.py

Student (account) management API.

Main features:
- account list for officers (paged, optional role filter)
- single account view / profile update (self or officer)
- activate / deactivate accounts (officer, not self)
- dashboard summary for the calling user
- search entry point (placeholder, returns no results)

Design principles:
- members may only see and edit their own account
- officers may see and edit every account
- the password hash never leaves the service layer

Related files:
- msc_api.services.accounts      : account operations
- msc_api.services.registrations : member dashboard registrations
- msc_api.core.deps              : authentication / role dependencies

"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from msc_api.core import responses
from msc_api.core.deps import get_db, get_current_user, get_current_officer, require_self_or_officer, is_officer
from msc_api.core.errors import AppError, InternalError, ValidationError
from msc_api.models.account import Account, Role
from msc_api.models.officer_log import OfficerAction
from msc_api.schemas.account import AccountResponse, ProfileUpdateRequest
from msc_api.schemas.event import MyRegistrationResponse
from msc_api.services import accounts as account_service
from msc_api.services.events import count_upcoming
from msc_api.services.officer_log import write_officer_log
from msc_api.services.registrations import list_for_account

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])


def _parse_role(role: str | None) -> Role | None:
    if not role:
        return None
    try:
        return Role(role)
    except ValueError:
        raise ValidationError({"role": "Invalid role value"})


"""
Account list API (officer only)

- newest accounts first
- optional role filter: member / officer

"""
@router.get("")
@router.get("/all")
def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    role: str | None = None,
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_officer),
):
    role_filter = _parse_role(role)
    students = account_service.list_accounts(db, page, limit, role_filter)
    return responses.success({
        "students": [AccountResponse.model_validate(s) for s in students],
        "pagination": {"page": page, "limit": limit},
    })


"""
Dashboard API

- officer: member / officer counts and the number of upcoming events
- member : own profile and own event registrations

"""
@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user),
):
    if is_officer(current_user):
        total_members = account_service.count_accounts(db, Role.MEMBER)
        total_officers = account_service.count_accounts(db, Role.OFFICER)
        return responses.success({
            "total_members": total_members,
            "total_officers": total_officers,
            "total_students": total_members + total_officers,
            "upcoming_events": count_upcoming(db),
            "user_role": Role.OFFICER.value,
        })

    registrations = [
        MyRegistrationResponse(
            event_id=r.event_id,
            event_name=r.event.event_name,
            event_date=r.event.event_date,
            event_status=r.event.event_status,
            attendance_status=r.attendance_status,
            registered_at=r.registered_at,
        )
        for r in list_for_account(db, current_user.id)
    ]
    return responses.success({
        "profile": AccountResponse.model_validate(current_user),
        "registrations": registrations,
        "user_role": current_user.role.value,
    })


# Full-text search is not provided; the endpoint only validates its input
@router.get("/search")
def search_students(
    q: str = "",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _: Account = Depends(get_current_officer),
):
    query = q.strip()
    if not query:
        raise ValidationError({"q": "Search query is required"})

    return responses.success(
        {
            "students": [],
            "pagination": {"page": page, "limit": limit, "query": query},
        },
        "Search functionality coming soon",
    )


@router.get("/{account_id}")
def get_student(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user),
):
    require_self_or_officer(current_user, account_id)
    student = account_service.require_account(db, account_id)
    return responses.success(AccountResponse.model_validate(student))


"""
Profile update API

- self or officer
- partial: only the fields present in the body change
- username / email / role / membership ID cannot be changed here

"""
@router.put("/{account_id}")
@router.put("/{account_id}/profile")
def update_student_profile(
    account_id: int,
    data: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user),
):
    require_self_or_officer(current_user, account_id)
    account_service.require_account(db, account_id)

    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise ValidationError(message="No changes provided")

    try:
        account_service.update_profile(db, account_id, fields)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Profile update failed for account id=%s", account_id)
        raise InternalError("Failed to update profile")

    student = account_service.require_account(db, account_id)
    return responses.success(AccountResponse.model_validate(student), "Profile updated successfully")


"""
Activate / deactivate API (officer only)

- officers cannot deactivate themselves
- deactivation revokes the account's refresh tokens; login is refused
  until it is activated again

"""
@router.put("/{account_id}/toggle-active")
@router.post("/{account_id}/toggle-active")
def toggle_student_active(
    account_id: int,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    student = account_service.require_account(db, account_id)

    if student.id == officer.id:
        raise ValidationError(message="Cannot deactivate your own account")

    try:
        account_service.toggle_active(db, account_id)
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.TOGGLE_ACTIVE,
            target_account_id=account_id,
            detail="activated" if student.is_active else "deactivated",
        )
        db.commit()
        db.refresh(student)
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Toggle active failed for account id=%s", account_id)
        raise InternalError("Failed to update student status")

    status = "activated" if student.is_active else "deactivated"
    logger.info("Account id=%s %s by officer id=%s", account_id, status, officer.id)
    return responses.success(
        AccountResponse.model_validate(student),
        f"Student account {status} successfully",
    )
