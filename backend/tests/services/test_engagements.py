"""Engagements — projects, timesheet review, invoices and immigration cases."""

from decimal import Decimal

import pytest

from tests.services.tenant_helpers import join_team


@pytest.fixture
async def placement(client, acme) -> dict:
    h = acme["headers"]
    customer = (await client.post("/api/v1/clients", json={"name": "Initech"}, headers=h)).json()
    candidate = (await client.post(
        "/api/v1/candidates", json={"first_name": "Luis", "last_name": "Ortega"}, headers=h,
    )).json()
    project = (await client.post(
        "/api/v1/projects",
        json={
            "name": "Initech Data Platform",
            "client_id": customer["id"],
            "candidate_id": candidate["id"],
            "start_date": "2024-04-01",
        },
        headers=h,
    )).json()
    return {"client": customer, "candidate": candidate, "project": project}


async def _timesheet(client, headers, placement, status="submitted"):
    res = await client.post(
        "/api/v1/timesheets",
        json={
            "project_id": placement["project"]["id"],
            "candidate_id": placement["candidate"]["id"],
            "week_ending": "2024-04-07",
            "hours": "40",
            "status": status,
        },
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def test_project_dates_validated(client, acme):
    res = await client.post(
        "/api/v1/projects",
        json={"name": "Backwards", "start_date": "2024-05-01", "end_date": "2024-04-01"},
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_approve_submitted_timesheet(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.post(
        f"/api/v1/timesheets/{sheet['id']}/approve", headers=acme["headers"],
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "approved"
    assert body["approved_by"] == "auth-acme-admin"
    assert body["approved_at"] is not None
    assert Decimal(body["hours"]) == Decimal("40")


async def test_reject_submitted_timesheet(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.post(
        f"/api/v1/timesheets/{sheet['id']}/reject", headers=acme["headers"],
    )
    assert res.json()["status"] == "rejected"
    assert res.json()["approved_by"] is None


async def test_draft_timesheet_cannot_be_reviewed(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement, status="draft")
    res = await client.post(
        f"/api/v1/timesheets/{sheet['id']}/approve", headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "TIMESHEET_NOT_SUBMITTED"


async def test_timesheet_status_cannot_be_patched_to_approved(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.patch(
        f"/api/v1/timesheets/{sheet['id']}", json={"status": "approved"},
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_approved_timesheet_is_locked(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    await client.post(f"/api/v1/timesheets/{sheet['id']}/approve", headers=acme["headers"])

    res = await client.patch(
        f"/api/v1/timesheets/{sheet['id']}", json={"hours": "80"},
        headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "TIMESHEET_LOCKED"

    current = (await client.get(
        f"/api/v1/timesheets/{sheet['id']}", headers=acme["headers"],
    )).json()
    assert Decimal(current["hours"]) == Decimal("40")
    assert current["status"] == "approved"


async def test_submitted_timesheet_still_editable(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.patch(
        f"/api/v1/timesheets/{sheet['id']}", json={"hours": "38.5"},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert Decimal(res.json()["hours"]) == Decimal("38.5")


async def test_timesheet_approval_needs_permission(client, acme, placement):
    recruiter = await join_team(client, acme, "auth-rec", "rec@acme.io", role_name="Recruiter")
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.post(
        f"/api/v1/timesheets/{sheet['id']}/approve", headers=recruiter["headers"],
    )
    assert res.status_code == 403


async def test_finance_role_can_approve(client, acme, placement):
    finance = await join_team(client, acme, "auth-fin", "fin@acme.io", role_name="Finance")
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.post(
        f"/api/v1/timesheets/{sheet['id']}/approve", headers=finance["headers"],
    )
    assert res.status_code == 200


async def test_timesheets_have_no_delete(client, acme, placement):
    sheet = await _timesheet(client, acme["headers"], placement)
    res = await client.delete(f"/api/v1/timesheets/{sheet['id']}", headers=acme["headers"])
    assert res.status_code == 405


async def test_invoice_number_unique_per_team(client, acme, globex, placement):
    body = {"client_id": placement["client"]["id"], "number": "INV-1001", "amount": "1500.00"}
    first = await client.post("/api/v1/invoices", json=body, headers=acme["headers"])
    assert first.status_code == 201
    assert Decimal(first.json()["amount"]) == Decimal("1500.00")

    dup = await client.post("/api/v1/invoices", json=body, headers=acme["headers"])
    assert dup.status_code == 409

    hooli = (await client.post(
        "/api/v1/clients", json={"name": "Hooli"}, headers=globex["headers"],
    )).json()
    other_team = await client.post(
        "/api/v1/invoices",
        json={**body, "client_id": hooli["id"]},
        headers=globex["headers"],
    )
    assert other_team.status_code == 201


async def test_immigration_case_lifecycle(client, acme, placement):
    res = await client.post(
        "/api/v1/immigration",
        json={"candidate_id": placement["candidate"]["id"], "visa_type": "H-1B"},
        headers=acme["headers"],
    )
    assert res.status_code == 201, res.text
    case = res.json()
    assert case["status"] == "in_progress"

    updated = await client.patch(
        f"/api/v1/immigration/{case['id']}", json={"status": "approved"},
        headers=acme["headers"],
    )
    assert updated.json()["status"] == "approved"

    res = await client.delete(f"/api/v1/immigration/{case['id']}", headers=acme["headers"])
    assert res.status_code == 405
