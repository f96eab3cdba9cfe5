"""
settings.py

School-year setting API.

- GET : current school-year code (any authenticated account)
- PUT : change it (officer only); affects officer membership IDs issued
        from now on, never IDs already issued

"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from msc_api.core import responses
from msc_api.core.deps import get_db, get_current_user, get_current_officer
from msc_api.core.errors import AppError, InternalError
from msc_api.models.account import Account
from msc_api.models.officer_log import OfficerAction
from msc_api.schemas.setting import SchoolYearUpdateRequest, SchoolYearResponse
from msc_api.services.officer_log import write_officer_log
from msc_api.services.school_year import get_stored_school_year_code, get_school_year_code, set_school_year_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/school-year")
def read_school_year(
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_user),
):
    return responses.success(SchoolYearResponse(
        school_year_code=get_school_year_code(db),
        is_default=get_stored_school_year_code(db) is None,
    ))


@router.put("/school-year")
def update_school_year(
    data: SchoolYearUpdateRequest,
    db: Session = Depends(get_db),
    officer: Account = Depends(get_current_officer),
):
    before = get_school_year_code(db)

    try:
        set_school_year_code(db, data.school_year_code)
        write_officer_log(
            db,
            actor_id=officer.id,
            action=OfficerAction.SET_SCHOOL_YEAR,
            detail=f"{before} -> {data.school_year_code}",
        )
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("School year update failed")
        raise InternalError("Failed to update school year")

    logger.info("School year code changed %s -> %s by officer id=%s", before, data.school_year_code, officer.id)
    return responses.success(
        SchoolYearResponse(school_year_code=data.school_year_code, is_default=False),
        "School year updated successfully",
    )
