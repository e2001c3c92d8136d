"""Onboarding — team creation, master admin bootstrap and /me.

Invariants:
    - The team creator becomes Local Admin with every team permission
    - Every new team gets the six template roles
    - Master admin bootstrap requires the configured setup token
    - Requests without a valid bearer token are 401
"""

from app.core.permission_catalog import ALL_PERMISSION_KEYS, ROLE_TEMPLATES
from tests.services.tenant_helpers import bearer, onboard_team


async def test_team_creator_becomes_local_admin(client, acme):
    assert acme["team"]["name"] == "Acme Staffing"
    assert acme["user"]["team_id"] == acme["team"]["id"]
    assert acme["user"]["role"]["name"] == "Local Admin"

    res = await client.get("/api/v1/me", headers=acme["headers"])
    assert res.status_code == 200
    me = res.json()
    assert me["team"]["id"] == acme["team"]["id"]
    assert me["role"]["is_admin"] is True
    assert me["permissions"] == sorted(ALL_PERMISSION_KEYS)


async def test_new_team_gets_template_roles(client, acme):
    res = await client.get("/api/v1/roles", headers=acme["headers"])
    names = {r["name"] for r in res.json()}
    assert names == {t.name for t in ROLE_TEMPLATES}
    assert all(not r["is_custom"] for r in res.json())


async def test_duplicate_team_name_is_409(client, acme):
    res = await client.post(
        "/api/v1/onboarding/team",
        json={"team_name": "Acme Staffing"},
        headers=bearer("auth-other", "other@initech.io"),
    )
    assert res.status_code == 409


async def test_member_cannot_create_second_team(client, acme):
    res = await client.post(
        "/api/v1/onboarding/team",
        json={"team_name": "Acme Two"},
        headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ALREADY_IN_TEAM"


async def test_invalid_body_is_400(client):
    res = await client.post(
        "/api/v1/onboarding/team",
        json={"team_name": "A"},
        headers=bearer("auth-x", "x@initech.io"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_missing_token_is_401(client):
    res = await client.get("/api/v1/me")
    assert res.status_code == 401


async def test_expired_token_is_401(client, acme):
    res = await client.get(
        "/api/v1/me", headers=bearer("auth-acme-admin", "admin@acme.io", expires_in=-30),
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Token expired"


async def test_unknown_user_is_401(client):
    res = await client.get("/api/v1/me", headers=bearer("auth-nobody", "nobody@acme.io"))
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "User not found"


async def test_master_admin_bootstrap(client, master_admin):
    assert master_admin["user"]["is_master_admin"] is True
    assert master_admin["user"]["team_id"] is None

    res = await client.get("/api/v1/me", headers=master_admin["headers"])
    me = res.json()
    assert me["team"] is None
    assert me["permissions"] == sorted(ALL_PERMISSION_KEYS)


async def test_master_admin_bootstrap_rejects_wrong_token(client):
    res = await client.post(
        "/api/v1/onboarding/master-admin",
        json={"setup_token": "guess"},
        headers=bearer("auth-mallory", "mallory@evil.io"),
    )
    assert res.status_code == 403


async def test_discoverable_teams_are_public(client, acme, globex):
    res = await client.get("/api/v1/teams/discoverable")
    assert res.status_code == 200
    teams = res.json()
    assert [t["name"] for t in teams] == ["Acme Staffing"]
    assert teams[0]["member_count"] == 1


async def test_listing_all_teams_is_master_admin_only(client, acme, globex, master_admin):
    denied = await client.get("/api/v1/teams", headers=acme["headers"])
    assert denied.status_code == 403

    res = await client.get("/api/v1/teams", headers=master_admin["headers"])
    assert res.status_code == 200
    names = [t["name"] for t in res.json()["items"]]
    assert names == ["Acme Staffing", "Globex Talent"]


async def test_second_team_is_independent(client, acme):
    initech = await onboard_team(client, "auth-initech", "boss@initech.io", "Initech")
    assert initech["team"]["id"] != acme["team"]["id"]


async def test_last_login_is_recorded(client, acme):
    assert acme["user"]["last_login_at"] is None

    res = await client.post("/api/v1/me/last-login", headers=acme["headers"])
    assert res.status_code == 200
    assert res.json()["last_login_at"] is not None

    me = (await client.get("/api/v1/me", headers=acme["headers"])).json()
    assert me["user"]["last_login_at"] == res.json()["last_login_at"]


async def test_last_login_needs_a_user_row(client):
    res = await client.post(
        "/api/v1/me/last-login", headers=bearer("auth-nobody", "nobody@acme.io"),
    )
    assert res.status_code == 401
