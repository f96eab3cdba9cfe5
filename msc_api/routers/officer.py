"""
officer.py

Officer-only audit API.

Lists the officer action log (event changes, attendance marking,
account activation, officer creation, school-year changes), newest
first, with the acting officer and the target account resolved.

"""

from fastapi import APIRouter, Depends
from sqlalchemy import select, desc
from sqlalchemy.orm import Session, aliased

from msc_api.core import responses
from msc_api.core.deps import get_db, get_current_officer
from msc_api.models.account import Account
from msc_api.models.officer_log import OfficerActionLog

router = APIRouter(prefix="/officer", tags=["officer"])


def _account_brief(account: Account | None) -> dict | None:
    if account is None:
        return None
    return {
        "id": account.id,
        "username": account.username,
        "membership_id": account.membership_id,
        "role": account.role.value,
    }


@router.get("/logs")
def list_officer_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: Account = Depends(get_current_officer),
):
    limit = max(1, min(limit, 200))

    Actor = aliased(Account)
    Target = aliased(Account)

    rows = db.execute(
        select(OfficerActionLog, Actor, Target)
        .join(Actor, Actor.id == OfficerActionLog.actor_id)
        .outerjoin(Target, Target.id == OfficerActionLog.target_account_id)
        .order_by(desc(OfficerActionLog.created_at), desc(OfficerActionLog.id))
        .limit(limit)
    ).all()

    result = [
        {
            "id": log.id,
            "created_at": log.created_at.isoformat(),
            "action": log.action.value,
            "detail": log.detail,
            "target_event_id": log.target_event_id,
            "actor": _account_brief(actor),
            "target": _account_brief(target),
        }
        for log, actor, target in rows
    ]
    return {
        **responses.success(result),
        "meta": {
            "limit": limit,
            "count": len(result),
        },
    }
