"""

School-year setting and officer action log tests.

"""

from tests.helpers import auth_header, create_event, register_member, registration_payload, setup_officer_and_member


def test_school_year_defaults_and_update(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    r = client.get("/settings/school-year", headers=auth_header(ctx["member_token"]))
    assert r.status_code == 200
    assert r.json()["data"] == {"school_year_code": "2526", "is_default": True}

    by_member = client.put(
        "/settings/school-year",
        json={"school_year_code": "2627"},
        headers=auth_header(ctx["member_token"]),
    )
    assert by_member.status_code == 403

    bad = client.put(
        "/settings/school-year",
        json={"school_year_code": "26-27"},
        headers=auth_header(ctx["officer_token"]),
    )
    assert bad.status_code == 422

    ok = client.put(
        "/settings/school-year",
        json={"school_year_code": "2627"},
        headers=auth_header(ctx["officer_token"]),
    )
    assert ok.status_code == 200, ok.text
    assert ok.json()["message"] == "School year updated successfully"

    r = client.get("/settings/school-year", headers=auth_header(ctx["member_token"]))
    assert r.json()["data"] == {"school_year_code": "2627", "is_default": False}

    # new officers are numbered in the new school year
    officer = client.post(
        "/auth/register",
        json=registration_payload(role="officer"),
        headers=auth_header(ctx["officer_token"]),
    )
    assert officer.status_code == 201, officer.text
    assert officer.json()["data"]["membership_id"] == "MSC2627EB-001"


def test_officer_actions_are_logged(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    event = create_event(client, ctx["officer_token"])
    client.post(f"/events/{event['id']}/register", headers=auth_header(ctx["member_token"]))
    client.put(
        f"/events/{event['id']}/attendance/{ctx['member_id']}",
        json={"attendance_status": "attended"},
        headers=auth_header(ctx["officer_token"]),
    )
    other = register_member(client)
    client.put(f"/students/{other['id']}/toggle-active", headers=auth_header(ctx["officer_token"]))

    r = client.get("/officer/logs", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200, r.text
    body = r.json()
    actions = [log["action"] for log in body["data"]]
    assert set(actions) == {"CREATE_EVENT", "SET_ATTENDANCE", "TOGGLE_ACTIVE"}
    assert body["meta"] == {"limit": 50, "count": 3}

    toggle = next(log for log in body["data"] if log["action"] == "TOGGLE_ACTIVE")
    assert toggle["actor"]["id"] == ctx["officer_id"]
    assert toggle["target"]["id"] == other["id"]
    assert toggle["detail"] == "deactivated"

    limited = client.get("/officer/logs", params={"limit": 1}, headers=auth_header(ctx["officer_token"]))
    assert limited.json()["meta"] == {"limit": 1, "count": 1}

    forbidden = client.get("/officer/logs", headers=auth_header(ctx["member_token"]))
    assert forbidden.status_code == 403
