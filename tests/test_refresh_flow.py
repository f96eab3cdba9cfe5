# tests/test_refresh_flow.py
from tests.helpers import auth_header, register_member


def test_refresh_token_rotation_and_revocation(client):
    member = register_member(client)

    login = client.post("/auth/login", json={"username": member["username"], "password": member["password"]})
    assert login.status_code == 200, login.text
    access1 = login.json()["data"]["access_token"]
    assert access1
    assert "refresh_token" in client.cookies
    refresh1 = client.cookies.get("refresh_token")
    assert refresh1

    r1 = client.post("/auth/refresh")
    assert r1.status_code == 200, r1.text
    access2 = r1.json()["data"]["access_token"]
    assert access2

    refresh2 = client.cookies.get("refresh_token")
    assert refresh2 and refresh2 != refresh1

    client.cookies.clear()
    client.cookies.set("refresh_token", refresh1)
    r_old = client.post("/auth/refresh")
    assert r_old.status_code == 401
    assert r_old.json()["message"] == "Refresh token revoked"

    logout = client.post("/auth/logout", headers=auth_header(access2))
    assert logout.status_code == 200, logout.text
    assert logout.json()["message"] == "Logout successful"

    client.cookies.clear()
    client.cookies.set("refresh_token", refresh2)
    r_after = client.post("/auth/refresh")
    assert r_after.status_code == 401
    assert r_after.json()["message"] == "Refresh token revoked"


def test_refresh_without_cookie(client):
    r = client.post("/auth/refresh")
    assert r.status_code == 401
    assert r.json()["message"] == "Missing refresh token"

    client.cookies.set("refresh_token", "garbage")
    r = client.post("/auth/refresh")
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid refresh token"
