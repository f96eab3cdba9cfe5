"""
services/officer_log.py

Officer action log writer.

Routers call this right before committing a management action so the
change and its log row land in the same transaction. Writing the log does
not influence the business flow.

Design principles:
- append only: rows are never updated or deleted
- db.commit() is the caller's job

"""

from sqlalchemy.orm import Session

from msc_api.models.officer_log import OfficerActionLog, OfficerAction


"""
Append one officer action log row

- actor_id          : officer performing the action
- action            : OfficerAction
- target_account_id : affected account (optional)
- target_event_id   : affected event (optional)
- detail            : short free-text summary (optional, cut to 255 chars)

"""
def write_officer_log(
    db: Session,
    *,
    actor_id: int,
    action: OfficerAction,
    target_account_id: int | None = None,
    target_event_id: int | None = None,
    detail: str | None = None,
) -> OfficerActionLog:
    log = OfficerActionLog(
        actor_id=actor_id,
        action=action,
        target_account_id=target_account_id,
        target_event_id=target_event_id,
        detail=detail[:255] if detail else None,
    )
    db.add(log)
    return log
