# tests/helpers.py
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from msc_api.models.account import Account, Role
from msc_api.services.accounts import create_account


OFFICER_PASSWORD = "OfficerPass1"
MEMBER_PASSWORD = "MemberPass1"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def registration_payload(**overrides) -> dict:
    suffix = uuid.uuid4().hex[:6]
    payload = {
        "username": f"user_{suffix}",
        "email": f"user_{suffix}@test.com",
        "password": MEMBER_PASSWORD,
        "first_name": "Test",
        "last_name": "Member",
        "birthdate": "2004-05-17",
        "gender": "Female",
        "student_no": f"2022-{suffix}",
        "year_level": "2",
        "college": "College of Science",
        "program": "BS Mathematics",
    }
    payload.update(overrides)
    return payload


def create_officer_in_db(db: Session, *, username: str | None = None, password: str = OFFICER_PASSWORD) -> Account:
    username = username or f"officer_{uuid.uuid4().hex[:6]}"
    officer = create_account(
        db,
        username=username,
        email=f"{username}@test.com",
        password=password,
        role=Role.OFFICER,
        first_name="Org",
        last_name="Officer",
    )
    db.commit()
    db.refresh(officer)
    return officer


def login(client, identifier: str, password: str) -> str:
    r = client.post("/auth/login", json={"username": identifier, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["access_token"]


def register_member(client, **overrides) -> dict:
    payload = registration_payload(**overrides)
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 201, r.text
    return {**r.json()["data"], "password": payload["password"]}


def setup_officer_and_member(client, db: Session) -> dict:
    """
    officer token + registered member (id, token, membership_id)
    """
    officer = create_officer_in_db(db)
    officer_token = login(client, officer.username, OFFICER_PASSWORD)

    member = register_member(client)
    member_token = login(client, member["username"], member["password"])

    return {
        "officer_id": officer.id,
        "officer_username": officer.username,
        "officer_token": officer_token,
        "member_id": member["id"],
        "member_username": member["username"],
        "member_membership_id": member["membership_id"],
        "member_token": member_token,
    }


def event_payload(**overrides) -> dict:
    payload = {
        "event_name": "General Assembly",
        "event_date": "2030-08-20",
        "event_time_start": "13:00",
        "event_time_end": "15:00",
        "location": "Main Hall",
        "description": "First general assembly of the school year",
    }
    payload.update(overrides)
    return payload


def create_event(client, officer_token: str, **overrides) -> dict:
    r = client.post("/events", json=event_payload(**overrides), headers=auth_header(officer_token))
    assert r.status_code == 201, r.text
    return r.json()["data"]


def get_account(db: Session, account_id: int) -> Account:
    db.expire_all()
    return db.scalar(select(Account).where(Account.id == account_id))
