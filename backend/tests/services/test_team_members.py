"""Team Members — current team profile, settings and membership changes."""

from tests.services.tenant_helpers import join_team, role_id_by_name


async def test_current_team(client, acme):
    res = await client.get("/api/v1/teams/current", headers=acme["headers"])
    assert res.status_code == 200
    assert res.json()["name"] == "Acme Staffing"


async def test_update_team_profile(client, acme):
    res = await client.patch(
        "/api/v1/teams/current",
        json={"company_name": "Acme Holdings"},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["company_name"] == "Acme Holdings"


async def test_hide_team_from_discovery(client, acme):
    res = await client.put(
        "/api/v1/teams/current/settings",
        json={"is_discoverable": False},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["is_discoverable"] is False
    listed = await client.get("/api/v1/teams/discoverable")
    assert listed.json() == []


async def test_list_members(client, acme):
    await join_team(client, acme, "auth-bob", "bob@acme.io")
    res = await client.get("/api/v1/teams/current/members", headers=acme["headers"])
    assert res.status_code == 200
    emails = [m["email"] for m in res.json()]
    assert emails == ["admin@acme.io", "bob@acme.io"]


async def test_change_member_role(client, acme):
    await join_team(client, acme, "auth-bob", "bob@acme.io")
    recruiter = await role_id_by_name(client, acme["headers"], "Recruiter")
    res = await client.patch(
        "/api/v1/teams/current/members/auth-bob/role",
        json={"role_id": recruiter},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["role"]["name"] == "Recruiter"


async def test_role_from_other_team_rejected(client, acme, globex):
    await join_team(client, acme, "auth-bob", "bob@acme.io")
    foreign = await role_id_by_name(client, globex["headers"], "Recruiter")
    res = await client.patch(
        "/api/v1/teams/current/members/auth-bob/role",
        json={"role_id": foreign},
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_remove_member_clears_membership(client, acme):
    bob = await join_team(client, acme, "auth-bob", "bob@acme.io")
    res = await client.delete(
        "/api/v1/teams/current/members/auth-bob", headers=acme["headers"],
    )
    assert res.status_code == 204

    me = (await client.get("/api/v1/me", headers=bob["headers"])).json()
    assert me["team"] is None
    assert me["role"] is None
    assert me["permissions"] == []
    denied = await client.get("/api/v1/candidates", headers=bob["headers"])
    assert denied.status_code == 403


async def test_cannot_remove_self(client, acme):
    res = await client.delete(
        "/api/v1/teams/current/members/auth-acme-admin", headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SELF_REMOVAL"


async def test_cannot_touch_other_team_members(client, acme, globex):
    res = await client.delete(
        "/api/v1/teams/current/members/auth-globex-admin", headers=acme["headers"],
    )
    assert res.status_code == 404


async def test_viewer_cannot_manage_members(client, acme):
    viewer = await join_team(client, acme, "auth-view", "view@acme.io")
    res = await client.delete(
        "/api/v1/teams/current/members/auth-acme-admin", headers=viewer["headers"],
    )
    assert res.status_code == 403
