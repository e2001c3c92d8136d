"""Candidates — CRUD, deduplication, merge, bench tracking and skill search.

Invariants:
    - Exact (email/phone/passport) or fuzzy (name) matches block create with 409
    - skip_duplicate_check=true forces the create through
    - Merge fills blanks and unions skills instead of creating a duplicate
    - Bench transitions keep bench_history in step
"""

from tests.services.tenant_helpers import join_team

JANE = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane.doe@acme.io",
    "phone": "+1-512-555-0100",
    "skills": ["Python", "SQL"],
}


async def _create(client, headers, body=None, **params):
    return await client.post(
        "/api/v1/candidates", json=body or JANE, headers=headers, params=params,
    )


async def test_create_and_get(client, acme):
    res = await _create(client, acme["headers"])
    assert res.status_code == 201, res.text
    created = res.json()
    assert created["team_id"] == acme["team"]["id"]
    assert created["created_by"] == "auth-acme-admin"
    assert created["status"] == "new"

    fetched = await client.get(f"/api/v1/candidates/{created['id']}", headers=acme["headers"])
    assert fetched.json()["email"] == "jane.doe@acme.io"


async def test_team_id_in_body_is_ignored(client, acme, globex):
    res = await _create(client, acme["headers"], {**JANE, "team_id": globex["team"]["id"]})
    assert res.json()["team_id"] == acme["team"]["id"]


async def test_exact_duplicate_is_409_with_matches(client, acme):
    await _create(client, acme["headers"])
    res = await _create(client, acme["headers"], {
        "first_name": "Janet", "last_name": "Different", "email": "jane.doe@acme.io",
    })
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_RECORD"
    assert error["details"]["match_type"] == "exact"
    assert error["details"]["confidence"] == 1.0
    assert error["details"]["matches"][0]["email"] == "jane.doe@acme.io"


async def test_fuzzy_name_duplicate_is_409(client, acme):
    await _create(client, acme["headers"])
    res = await _create(client, acme["headers"], {"first_name": "Jayne", "last_name": "Doe"})
    assert res.status_code == 409
    details = res.json()["error"]["details"]
    assert details["match_type"] == "fuzzy"
    assert 0.6 < details["confidence"] < 1.0


async def test_skip_duplicate_check(client, acme):
    await _create(client, acme["headers"])
    res = await _create(client, acme["headers"], skip_duplicate_check="true")
    assert res.status_code == 201
    listed = await client.get("/api/v1/candidates", headers=acme["headers"])
    assert listed.json()["pagination"]["total"] == 2


async def test_duplicates_are_scoped_to_team(client, acme, globex):
    await _create(client, acme["headers"])
    res = await _create(client, globex["headers"])
    assert res.status_code == 201


async def test_list_search_filter_and_pagination(client, acme):
    for first, last, status in (
        ("Ana", "Lopez", "new"), ("Ben", "Okafor", "screening"), ("Chen", "Wei", "screening"),
    ):
        await _create(
            client, acme["headers"],
            {"first_name": first, "last_name": last, "status": status},
            skip_duplicate_check="true",
        )

    res = await client.get(
        "/api/v1/candidates", params={"status": "screening"}, headers=acme["headers"],
    )
    assert res.json()["pagination"]["total"] == 2

    res = await client.get(
        "/api/v1/candidates", params={"search": "okaf"}, headers=acme["headers"],
    )
    assert [c["last_name"] for c in res.json()["items"]] == ["Okafor"]

    res = await client.get(
        "/api/v1/candidates", params={"limit": 1, "offset": 1}, headers=acme["headers"],
    )
    body = res.json()
    assert len(body["items"]) == 1
    assert body["pagination"] == {"limit": 1, "offset": 1, "total": 3}


async def test_search_wildcards_match_literally(client, acme):
    await _create(
        client, acme["headers"],
        {"first_name": "Jon", "last_name": "Smith"}, skip_duplicate_check="true",
    )
    for term in ("J_n", "%", "Sm%th"):
        res = await client.get(
            "/api/v1/candidates", params={"search": term}, headers=acme["headers"],
        )
        assert res.json()["pagination"]["total"] == 0, term

    res = await client.get(
        "/api/v1/candidates", params={"search": "jon"}, headers=acme["headers"],
    )
    assert res.json()["pagination"]["total"] == 1


async def test_update_status_writes_activity(client, acme):
    created = (await _create(client, acme["headers"])).json()
    res = await client.patch(
        f"/api/v1/candidates/{created['id']}",
        json={"status": "screening"},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["status"] == "screening"

    timeline = await client.get(
        f"/api/v1/timeline/candidate/{created['id']}", headers=acme["headers"],
    )
    titles = [i["title"] for i in timeline.json()["items"]]
    assert "Status Updated" in titles
    assert "Candidate Created" in titles


async def test_merge_fills_blanks_and_unions_skills(client, acme):
    created = (await _create(client, acme["headers"])).json()
    res = await client.post(
        f"/api/v1/candidates/{created['id']}/merge",
        json={"location": "Austin, TX", "skills": ["python", "Go"], "phone": ""},
        headers=acme["headers"],
    )
    assert res.status_code == 200, res.text
    merged = res.json()
    assert merged["location"] == "Austin, TX"
    assert merged["skills"] == ["Python", "SQL", "Go"]
    assert merged["phone"] == "+1-512-555-0100"


async def test_bench_lifecycle(client, acme):
    created = (await _create(client, acme["headers"])).json()
    url = f"/api/v1/candidates/{created['id']}"

    res = await client.post(f"{url}/bench", json={"notes": "Project ended"}, headers=acme["headers"])
    assert res.status_code == 200
    assert res.json()["bench_status"] == "on_bench"
    assert res.json()["bench_added_date"] is not None

    again = await client.post(f"{url}/bench", json={}, headers=acme["headers"])
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "ALREADY_ON_BENCH"

    res = await client.post(
        f"{url}/bench/remove", json={"reason": "Placed at Initech"}, headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["bench_status"] == "placed"

    history = (await client.get(f"{url}/bench-history", headers=acme["headers"])).json()
    assert len(history) == 1
    assert history[0]["notes"] == "Project ended"
    assert history[0]["reason_bench_out"] == "Placed at Initech"
    assert history[0]["bench_removed_date"] is not None


async def test_bench_status_cannot_be_patched(client, acme):
    created = (await _create(client, acme["headers"])).json()
    url = f"/api/v1/candidates/{created['id']}"
    await client.post(f"{url}/bench", json={}, headers=acme["headers"])

    res = await client.patch(url, json={"bench_status": "available"}, headers=acme["headers"])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    again = await client.post(f"{url}/bench", json={}, headers=acme["headers"])
    assert again.status_code == 400
    history = (await client.get(f"{url}/bench-history", headers=acme["headers"])).json()
    assert [h for h in history if h["bench_removed_date"] is None] == history
    assert len(history) == 1


async def test_bench_status_not_accepted_on_create(client, acme):
    res = await _create(client, acme["headers"], {**JANE, "bench_status": "on_bench"})
    assert res.status_code == 400


async def test_remove_from_bench_when_not_on_bench(client, acme):
    created = (await _create(client, acme["headers"])).json()
    res = await client.post(
        f"/api/v1/candidates/{created['id']}/bench/remove", json={}, headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NOT_ON_BENCH"


async def test_search_by_skills(client, acme):
    await _create(client, acme["headers"])
    await _create(
        client, acme["headers"],
        {"first_name": "Raj", "last_name": "Patel", "skills": ["Java", "Kotlin"]},
    )
    res = await client.get(
        "/api/v1/candidates/search/skills", params={"skills": "kotlin, rust"},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert [c["first_name"] for c in res.json()["items"]] == ["Raj"]


async def test_delete_candidate(client, acme):
    created = (await _create(client, acme["headers"])).json()
    res = await client.delete(f"/api/v1/candidates/{created['id']}", headers=acme["headers"])
    assert res.status_code == 204
    gone = await client.get(f"/api/v1/candidates/{created['id']}", headers=acme["headers"])
    assert gone.status_code == 404


async def test_viewer_can_read_but_not_write(client, acme):
    viewer = await join_team(client, acme, "auth-view", "view@acme.io")
    assert (await client.get("/api/v1/candidates", headers=viewer["headers"])).status_code == 200
    res = await _create(client, viewer["headers"])
    assert res.status_code == 403
    assert "candidate.create" in res.json()["error"]["message"]


async def test_invalid_email_is_400(client, acme):
    res = await _create(client, acme["headers"], {**JANE, "email": "not-an-email"})
    assert res.status_code == 400
