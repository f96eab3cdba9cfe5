"""

Event registry integration tests.
- officers create / update / delete events, members cannot
- list, upcoming and calendar views
- deleting an event removes its registrations

"""

from sqlalchemy import select, func

from msc_api.models.event import Event
from msc_api.models.registration import EventRegistration
from tests.helpers import auth_header, create_event, event_payload, setup_officer_and_member


def test_officer_creates_event(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    r = client.post("/events", json=event_payload(), headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Event created successfully"

    data = r.json()["data"]
    assert data["event_name"] == "General Assembly"
    assert data["event_status"] == "upcoming"
    assert data["event_type"] == "onsite"
    assert data["event_restriction"] == "public"
    assert data["created_by"] == ctx["officer_id"]

    detail = client.get(f"/events/{data['id']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["location"] == "Main Hall"


def test_member_cannot_manage_events(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    event = create_event(client, ctx["officer_token"])

    create = client.post("/events", json=event_payload(), headers=auth_header(ctx["member_token"]))
    assert create.status_code == 403

    update = client.put(
        f"/events/{event['id']}",
        json={"event_name": "Renamed"},
        headers=auth_header(ctx["member_token"]),
    )
    assert update.status_code == 403

    delete = client.delete(f"/events/{event['id']}", headers=auth_header(ctx["member_token"]))
    assert delete.status_code == 403
    assert delete.json()["message"] == "Insufficient privileges"

    # still there, unchanged
    assert db_session.get(Event, event["id"]).event_name == "General Assembly"


def test_create_event_validation(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    r = client.post(
        "/events",
        json=event_payload(event_date="20-08-2030", event_time_start="1pm"),
        headers=auth_header(ctx["officer_token"]),
    )
    assert r.status_code == 422
    errors = r.json()["errors"]
    assert errors["event_date"] == "Invalid date format. Use YYYY-MM-DD"
    assert errors["event_time_start"] == "Invalid time format. Use HH:MM"

    bad_type = client.post(
        "/events",
        json=event_payload(event_type="in-person"),
        headers=auth_header(ctx["officer_token"]),
    )
    assert bad_type.status_code == 422


def test_update_event_is_partial(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    event = create_event(client, ctx["officer_token"])

    r = client.put(
        f"/events/{event['id']}",
        json={"event_status": "canceled"},
        headers=auth_header(ctx["officer_token"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Event updated successfully"
    assert r.json()["data"]["event_status"] == "canceled"
    assert r.json()["data"]["event_name"] == "General Assembly"

    # no transition rules
    back = client.put(
        f"/events/{event['id']}",
        json={"event_status": "upcoming"},
        headers=auth_header(ctx["officer_token"]),
    )
    assert back.json()["data"]["event_status"] == "upcoming"

    empty = client.put(f"/events/{event['id']}", json={}, headers=auth_header(ctx["officer_token"]))
    assert empty.status_code == 422
    assert empty.json()["message"] == "No changes provided"

    missing = client.put("/events/9999", json={"event_name": "X"}, headers=auth_header(ctx["officer_token"]))
    assert missing.status_code == 404
    assert missing.json()["message"] == "Event not found"


def test_delete_event_removes_registrations(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    event = create_event(client, ctx["officer_token"])

    reg = client.post(f"/events/{event['id']}/register", headers=auth_header(ctx["member_token"]))
    assert reg.status_code == 201, reg.text

    r = client.delete(f"/events/{event['id']}", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Event deleted successfully"

    assert client.get(f"/events/{event['id']}").status_code == 404
    remaining = db_session.scalar(
        select(func.count()).select_from(EventRegistration).where(EventRegistration.event_id == event["id"])
    )
    assert remaining == 0

    again = client.delete(f"/events/{event['id']}", headers=auth_header(ctx["officer_token"]))
    assert again.status_code == 404


def test_list_events_with_filters(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    create_event(client, ctx["officer_token"], event_name="Onsite", event_date="2030-01-10")
    create_event(client, ctx["officer_token"], event_name="Online", event_date="2030-02-10", event_type="online")
    create_event(client, ctx["officer_token"], event_name="Later", event_date="2030-03-10")

    all_events = client.get("/events")
    assert all_events.status_code == 200
    names = [e["event_name"] for e in all_events.json()["data"]["events"]]
    assert names == ["Later", "Online", "Onsite"]

    online = client.get("/events", params={"type": "online"})
    assert [e["event_name"] for e in online.json()["data"]["events"]] == ["Online"]
    assert online.json()["data"]["filters"] == {"event_type": "online"}

    ranged = client.get("/events", params={"date_from": "2030-02-01", "date_to": "2030-03-10"})
    assert [e["event_name"] for e in ranged.json()["data"]["events"]] == ["Later", "Online"]

    paged = client.get("/events", params={"page": 2, "limit": 2})
    assert [e["event_name"] for e in paged.json()["data"]["events"]] == ["Onsite"]

    bad = client.get("/events", params={"status": "postponed"})
    assert bad.status_code == 422


def test_upcoming_and_calendar(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    create_event(client, ctx["officer_token"], event_name="Past", event_date="2001-01-01")
    create_event(client, ctx["officer_token"], event_name="Soon", event_date="2030-05-01")
    create_event(client, ctx["officer_token"], event_name="Sooner", event_date="2030-04-01")
    create_event(client, ctx["officer_token"], event_name="Canceled", event_date="2030-04-15", event_status="canceled")

    upcoming = client.get("/events/upcoming")
    assert upcoming.status_code == 200
    assert [e["event_name"] for e in upcoming.json()["data"]] == ["Sooner", "Soon"]

    calendar = client.get("/events/calendar", params={"start": "2030-04-01", "end": "2030-04-30"})
    assert calendar.status_code == 200
    assert [e["event_name"] for e in calendar.json()["data"]] == ["Sooner", "Canceled"]

    bad = client.get("/events/calendar", params={"start": "April"})
    assert bad.status_code == 422
