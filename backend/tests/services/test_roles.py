"""Roles — team-scoped role management and permission assignment.

Invariants:
    - Roles are confined to their team (403 across teams)
    - Role names unique per team (409)
    - Unknown permission keys rejected (400)
    - Roles in use cannot be deleted (409)
"""

from tests.services.tenant_helpers import join_team, role_id_by_name


async def test_permission_catalog_grouped_by_module(client, acme):
    res = await client.get("/api/v1/roles/permissions", headers=acme["headers"])
    assert res.status_code == 200
    grouped = res.json()
    assert "Candidates" in grouped
    assert [p["key"] for p in grouped["Timesheets"]] == [
        "timesheet.approve", "timesheet.create", "timesheet.read", "timesheet.update",
    ]


async def test_create_custom_role_with_permissions(client, acme):
    res = await client.post(
        "/api/v1/roles",
        json={
            "name": "Sourcer",
            "description": "Finds people",
            "permission_keys": ["candidate.read", "candidate.create"],
        },
        headers=acme["headers"],
    )
    assert res.status_code == 201, res.text
    role = res.json()
    assert role["is_custom"] is True
    assert role["team_id"] == acme["team"]["id"]
    assert role["permissions"] == ["candidate.create", "candidate.read"]


async def test_duplicate_role_name_is_409(client, acme):
    res = await client.post(
        "/api/v1/roles", json={"name": "Recruiter"}, headers=acme["headers"],
    )
    assert res.status_code == 409


async def test_unknown_permission_key_is_400(client, acme):
    res = await client.post(
        "/api/v1/roles",
        json={"name": "Broken", "permission_keys": ["candidate.teleport"]},
        headers=acme["headers"],
    )
    assert res.status_code == 400


async def test_malformed_permission_key_is_400(client, acme):
    res = await client.post(
        "/api/v1/roles",
        json={"name": "Broken", "permission_keys": ["Candidate Read"]},
        headers=acme["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_replace_role_permissions(client, acme):
    role_id = await role_id_by_name(client, acme["headers"], "Manager")
    res = await client.put(
        f"/api/v1/roles/{role_id}/permissions",
        json={"permission_keys": ["invoice.read"]},
        headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["permissions"] == ["invoice.read"]


async def test_permission_change_applies_to_members(client, acme):
    member = await join_team(client, acme, "auth-fin", "fin@acme.io", role_name="Finance")
    before = await client.get("/api/v1/vendors", headers=member["headers"])
    assert before.status_code == 403

    await client.put(
        f"/api/v1/roles/{member['role_id']}/permissions",
        json={"permission_keys": ["vendor.read"]},
        headers=acme["headers"],
    )
    after = await client.get("/api/v1/vendors", headers=member["headers"])
    assert after.status_code == 200


async def test_rename_role(client, acme):
    role_id = await role_id_by_name(client, acme["headers"], "Manager")
    res = await client.patch(
        f"/api/v1/roles/{role_id}", json={"name": "Team Lead"}, headers=acme["headers"],
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Team Lead"


async def test_role_in_use_cannot_be_deleted(client, acme):
    admin_role = await role_id_by_name(client, acme["headers"], "Local Admin")
    res = await client.delete(f"/api/v1/roles/{admin_role}", headers=acme["headers"])
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ROLE_IN_USE"


async def test_unused_role_can_be_deleted(client, acme):
    role_id = await role_id_by_name(client, acme["headers"], "Finance")
    res = await client.delete(f"/api/v1/roles/{role_id}", headers=acme["headers"])
    assert res.status_code == 204
    again = await client.get(f"/api/v1/roles/{role_id}", headers=acme["headers"])
    assert again.status_code == 404


async def test_roles_of_other_team_are_forbidden(client, acme, globex):
    foreign = await role_id_by_name(client, globex["headers"], "Recruiter")
    res = await client.get(f"/api/v1/roles/{foreign}", headers=acme["headers"])
    assert res.status_code == 403
    res = await client.put(
        f"/api/v1/roles/{foreign}/permissions",
        json={"permission_keys": []}, headers=acme["headers"],
    )
    assert res.status_code == 403


async def test_role_management_needs_roles_manage(client, acme):
    member = await join_team(client, acme, "auth-rec", "rec@acme.io", role_name="Recruiter")
    res = await client.post(
        "/api/v1/roles", json={"name": "Sneaky"}, headers=member["headers"],
    )
    assert res.status_code == 403
    assert "roles.manage" in res.json()["error"]["message"]


async def test_grant_and_revoke_single_permission(client, acme):
    role_id = await role_id_by_name(client, acme["headers"], "View-Only")
    url = f"/api/v1/roles/{role_id}/permissions/invoice.create"

    granted = await client.post(url, headers=acme["headers"])
    assert granted.status_code == 200
    assert "invoice.create" in granted.json()["permissions"]

    again = await client.post(url, headers=acme["headers"])
    assert again.json()["permissions"] == granted.json()["permissions"]

    revoked = await client.delete(url, headers=acme["headers"])
    assert revoked.status_code == 200
    assert "invoice.create" not in revoked.json()["permissions"]

    twice = await client.delete(url, headers=acme["headers"])
    assert twice.status_code == 200


async def test_grant_unknown_permission_is_400(client, acme):
    role_id = await role_id_by_name(client, acme["headers"], "View-Only")
    res = await client.post(
        f"/api/v1/roles/{role_id}/permissions/candidate.teleport",
        headers=acme["headers"],
    )
    assert res.status_code == 400
