"""Pipeline — requirements, submissions and interviews with in-team references."""

from decimal import Decimal

import pytest


@pytest.fixture
async def acme_pipeline(client, acme) -> dict:
    h = acme["headers"]
    customer = (await client.post("/api/v1/clients", json={"name": "Initech"}, headers=h)).json()
    candidate = (await client.post(
        "/api/v1/candidates", json={"first_name": "Priya", "last_name": "Nair"}, headers=h,
    )).json()
    requirement = (await client.post(
        "/api/v1/requirements",
        json={
            "title": "Senior Data Engineer",
            "client_id": customer["id"],
            "bill_rate_min": "80.00",
            "bill_rate_max": "95.50",
            "work_mode": "remote",
            "priority": "high",
        },
        headers=h,
    )).json()
    return {"client": customer, "candidate": candidate, "requirement": requirement}


async def test_requirement_created_with_rates(acme_pipeline):
    req = acme_pipeline["requirement"]
    assert req["status"] == "open"
    assert Decimal(req["bill_rate_max"]) == Decimal("95.50")


async def test_requirement_rate_range_validated(client, acme):
    res = await client.post(
        "/api/v1/requirements",
        json={"title": "QA", "bill_rate_min": "100", "bill_rate_max": "50"},
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_requirement_client_must_be_in_team(client, acme, globex):
    foreign = (await client.post(
        "/api/v1/clients", json={"name": "Hooli"}, headers=globex["headers"],
    )).json()
    res = await client.post(
        "/api/v1/requirements",
        json={"title": "SRE", "client_id": foreign["id"]},
        headers=acme["headers"],
    )
    assert res.status_code == 400
    assert "Client not found in this team" in res.json()["error"]["message"]


async def test_submission_stamps_time_and_logs_candidate_activity(client, acme, acme_pipeline):
    res = await client.post(
        "/api/v1/submissions",
        json={
            "candidate_id": acme_pipeline["candidate"]["id"],
            "requirement_id": acme_pipeline["requirement"]["id"],
            "bill_rate_offered": "90.00",
        },
        headers=acme["headers"],
    )
    assert res.status_code == 201, res.text
    assert res.json()["submitted_at"] is not None
    assert res.json()["status"] == "submitted"

    timeline = await client.get(
        f"/api/v1/timeline/candidate/{acme_pipeline['candidate']['id']}",
        headers=acme["headers"],
    )
    assert "Submission Created" in [i["title"] for i in timeline.json()["items"]]


async def test_submission_with_foreign_candidate_is_400(client, acme, globex, acme_pipeline):
    foreign = (await client.post(
        "/api/v1/candidates", json={"first_name": "Sam", "last_name": "Ito"},
        headers=globex["headers"],
    )).json()
    res = await client.post(
        "/api/v1/submissions",
        json={
            "candidate_id": foreign["id"],
            "requirement_id": acme_pipeline["requirement"]["id"],
        },
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_interview_flow(client, acme, acme_pipeline):
    submission = (await client.post(
        "/api/v1/submissions",
        json={
            "candidate_id": acme_pipeline["candidate"]["id"],
            "requirement_id": acme_pipeline["requirement"]["id"],
        },
        headers=acme["headers"],
    )).json()
    res = await client.post(
        "/api/v1/interviews",
        json={
            "submission_id": submission["id"],
            "round": "Technical",
            "scheduled_at": "2024-07-01T15:00:00Z",
            "mode": "video",
        },
        headers=acme["headers"],
    )
    assert res.status_code == 201, res.text
    interview = res.json()
    assert interview["status"] == "scheduled"

    done = await client.patch(
        f"/api/v1/interviews/{interview['id']}",
        json={"status": "completed", "outcome": "passed", "feedback": "Strong SQL"},
        headers=acme["headers"],
    )
    assert done.json()["outcome"] == "passed"

    listed = await client.get(
        "/api/v1/interviews", params={"submission_id": submission["id"]},
        headers=acme["headers"],
    )
    assert listed.json()["pagination"]["total"] == 1


async def test_bad_uuid_filter_is_400(client, acme):
    res = await client.get(
        "/api/v1/submissions", params={"candidate_id": "nope"}, headers=acme["headers"],
    )
    assert res.status_code == 400
