"""

Student (account) management tests.
- members see and edit only themselves, officers everyone
- partial profile update
- officer listing, dashboard counts, search placeholder

"""

from tests.helpers import auth_header, create_event, register_member, login, setup_officer_and_member


def test_member_sees_only_self(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    other = register_member(client)

    own = client.get(f"/students/{ctx['member_id']}", headers=auth_header(ctx["member_token"]))
    assert own.status_code == 200
    assert own.json()["data"]["username"] == ctx["member_username"]

    foreign = client.get(f"/students/{other['id']}", headers=auth_header(ctx["member_token"]))
    assert foreign.status_code == 403

    by_officer = client.get(f"/students/{other['id']}", headers=auth_header(ctx["officer_token"]))
    assert by_officer.status_code == 200

    missing = client.get("/students/9999", headers=auth_header(ctx["officer_token"]))
    assert missing.status_code == 404
    assert missing.json()["message"] == "Student not found"


def test_profile_update_is_partial(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    r = client.put(
        f"/students/{ctx['member_id']}/profile",
        json={"section": "B", "phone": "+63 912 345 6789"},
        headers=auth_header(ctx["member_token"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Profile updated successfully"
    data = r.json()["data"]
    assert data["section"] == "B"
    assert data["phone"] == "+63 912 345 6789"
    assert data["first_name"] == "Test"
    assert data["membership_id"] == ctx["member_membership_id"]

    # role and membership ID are not profile fields
    ignored = client.put(
        f"/students/{ctx['member_id']}",
        json={"role": "officer", "membership_id": "MSC-9999", "college": "College of Arts"},
        headers=auth_header(ctx["member_token"]),
    )
    assert ignored.status_code == 200
    assert ignored.json()["data"]["role"] == "member"
    assert ignored.json()["data"]["membership_id"] == ctx["member_membership_id"]

    empty = client.put(f"/students/{ctx['member_id']}", json={}, headers=auth_header(ctx["member_token"]))
    assert empty.status_code == 422

    bad_phone = client.put(
        f"/students/{ctx['member_id']}",
        json={"phone": "call me"},
        headers=auth_header(ctx["member_token"]),
    )
    assert bad_phone.status_code == 422
    assert bad_phone.json()["errors"]["phone"] == "Invalid phone number format"


def test_member_cannot_edit_others(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    other = register_member(client)

    r = client.put(f"/students/{other['id']}", json={"section": "C"}, headers=auth_header(ctx["member_token"]))
    assert r.status_code == 403

    by_officer = client.put(f"/students/{other['id']}", json={"section": "C"}, headers=auth_header(ctx["officer_token"]))
    assert by_officer.status_code == 200


def test_officer_lists_students(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    register_member(client)

    r = client.get("/students", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200
    assert len(r.json()["data"]["students"]) == 3

    members = client.get("/students/all", params={"role": "member"}, headers=auth_header(ctx["officer_token"]))
    assert {s["role"] for s in members.json()["data"]["students"]} == {"member"}
    assert len(members.json()["data"]["students"]) == 2

    forbidden = client.get("/students", headers=auth_header(ctx["member_token"]))
    assert forbidden.status_code == 403


def test_officer_dashboard(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    create_event(client, ctx["officer_token"], event_date="2030-01-01")
    create_event(client, ctx["officer_token"], event_date="2001-01-01")

    r = client.get("/students/dashboard", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user_role"] == "officer"
    assert data["total_members"] == 1
    assert data["total_officers"] == 1
    assert data["total_students"] == 2
    assert data["upcoming_events"] == 1


def test_search_placeholder(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    empty = client.get("/students/search", headers=auth_header(ctx["officer_token"]))
    assert empty.status_code == 422
    assert empty.json()["errors"]["q"] == "Search query is required"

    r = client.get("/students/search", params={"q": "alice"}, headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200
    assert r.json()["data"]["students"] == []
    assert r.json()["message"] == "Search functionality coming soon"


def test_deactivation_revokes_refresh(client, db_session):
    ctx = setup_officer_and_member(client, db_session)
    member = register_member(client)
    login(client, member["username"], member["password"])
    assert client.cookies.get("refresh_token")

    client.put(f"/students/{member['id']}/toggle-active", headers=auth_header(ctx["officer_token"]))

    r = client.post("/auth/refresh")
    assert r.status_code == 401
