"""Vendors & Clients — CRUD with duplicate detection."""


async def test_vendor_crud(client, acme):
    res = await client.post(
        "/api/v1/vendors",
        json={"name": "TechBridge Solutions", "email": "sales@techbridge.io"},
        headers=acme["headers"],
    )
    assert res.status_code == 201, res.text
    vendor = res.json()
    url = f"/api/v1/vendors/{vendor['id']}"

    patched = await client.patch(url, json={"status": "inactive"}, headers=acme["headers"])
    assert patched.json()["status"] == "inactive"

    listed = await client.get(
        "/api/v1/vendors", params={"status": "inactive"}, headers=acme["headers"],
    )
    assert listed.json()["pagination"]["total"] == 1

    assert (await client.delete(url, headers=acme["headers"])).status_code == 204


async def test_vendor_exact_email_duplicate(client, acme):
    body = {"name": "TechBridge Solutions", "email": "sales@techbridge.io"}
    await client.post("/api/v1/vendors", json=body, headers=acme["headers"])
    res = await client.post(
        "/api/v1/vendors",
        json={"name": "Totally Different", "email": "sales@techbridge.io"},
        headers=acme["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["details"]["match_type"] == "exact"


async def test_vendor_fuzzy_name_duplicate(client, acme):
    await client.post(
        "/api/v1/vendors", json={"name": "TechBridge Solutions"}, headers=acme["headers"],
    )
    res = await client.post(
        "/api/v1/vendors", json={"name": "Techbridge Solution"}, headers=acme["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["details"]["match_type"] == "fuzzy"


async def test_client_duplicate_can_be_forced(client, acme):
    body = {"name": "Initech", "contact_email": "hr@initech.io"}
    await client.post("/api/v1/clients", json=body, headers=acme["headers"])
    blocked = await client.post("/api/v1/clients", json=body, headers=acme["headers"])
    assert blocked.status_code == 409
    forced = await client.post(
        "/api/v1/clients", json=body, params={"skip_duplicate_check": "true"},
        headers=acme["headers"],
    )
    assert forced.status_code == 201


async def test_client_filter_by_industry(client, acme):
    await client.post(
        "/api/v1/clients", json={"name": "Initech", "industry": "Software"},
        headers=acme["headers"],
    )
    await client.post(
        "/api/v1/clients", json={"name": "Umbrella Health", "industry": "Healthcare"},
        headers=acme["headers"],
    )
    res = await client.get(
        "/api/v1/clients", params={"industry": "Healthcare"}, headers=acme["headers"],
    )
    assert [c["name"] for c in res.json()["items"]] == ["Umbrella Health"]


async def test_unsupported_filter_is_ignored(client, acme):
    res = await client.get(
        "/api/v1/vendors", params={"website": "x"}, headers=acme["headers"],
    )
    assert res.status_code == 200
