"""

Roster export tests (CSV / xlsx).
- officer only
- header row plus one row per registration
- CSV carries a BOM and an attachment Content-Disposition

"""

import csv
import io

from openpyxl import load_workbook

from msc_api.routers.events import ROSTER_HEADER
from tests.helpers import auth_header, create_event, setup_officer_and_member


def _parse_csv_text(text: str) -> list[list[str]]:
    # the server writes a BOM for Excel; strip it before parsing
    text = text.lstrip("\ufeff")
    return list(csv.reader(io.StringIO(text)))


def _event_with_registration(client, db_session) -> tuple[dict, dict]:
    ctx = setup_officer_and_member(client, db_session)
    event = create_event(client, ctx["officer_token"])
    r = client.post(f"/events/{event['id']}/register", headers=auth_header(ctx["member_token"]))
    assert r.status_code == 201, r.text
    return ctx, event


def test_export_csv_ok(client, db_session):
    ctx, event = _event_with_registration(client, db_session)

    r = client.get(f"/events/{event['id']}/registrations/export", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    assert f"event_{event['id']}_registrations.csv" in r.headers["content-disposition"]
    assert r.content.startswith(b"\xef\xbb\xbf")

    rows = _parse_csv_text(r.text)
    assert rows[0] == ROSTER_HEADER
    assert len(rows) == 2

    row = dict(zip(ROSTER_HEADER, rows[1]))
    assert row["event_id"] == str(event["id"])
    assert row["membership_id"] == ctx["member_membership_id"]
    assert row["username"] == ctx["member_username"]
    assert row["attendance_status"] == "registered"


def test_export_csv_forbidden_for_member(client, db_session):
    ctx, event = _event_with_registration(client, db_session)

    r = client.get(f"/events/{event['id']}/registrations/export", headers=auth_header(ctx["member_token"]))
    assert r.status_code == 403


def test_export_csv_unknown_event(client, db_session):
    ctx = setup_officer_and_member(client, db_session)

    r = client.get("/events/9999/registrations/export", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 404


def test_export_xlsx_ok(client, db_session):
    ctx, event = _event_with_registration(client, db_session)

    r = client.get(f"/events/{event['id']}/registrations/export.xlsx", headers=auth_header(ctx["officer_token"]))
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attachment" in r.headers["content-disposition"]

    wb = load_workbook(io.BytesIO(r.content))
    ws = wb.active
    rows = list(ws.iter_rows(values_only=True))

    assert list(rows[0]) == ROSTER_HEADER
    assert len(rows) == 2
    assert rows[1][0] == event["id"]
    assert rows[1][1] == ctx["member_membership_id"]
