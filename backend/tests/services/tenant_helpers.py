"""Tenant helpers — signed tokens and API-driven onboarding for route tests.

Tokens are real HS256 JWTs signed with the test secret, so every request
goes through the production verifier.
"""

from datetime import datetime, timedelta, timezone

import jwt

from app.config import get_settings


def make_token(sub: str, email: str | None = None, expires_in: int = 3600, **claims) -> str:
    """Sign a token the way the auth provider would."""
    settings = get_settings()
    payload = {
        "sub": sub,
        "aud": settings.auth_jwt_audience,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        **claims,
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


def bearer(sub: str, email: str | None = None, **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(sub, email, **kwargs)}"}


async def onboard_team(client, sub: str, email: str, team_name: str, **extra) -> dict:
    """Create a team through the API; returns headers, team and user payloads."""
    headers = bearer(sub, email)
    res = await client.post(
        "/api/v1/onboarding/team",
        json={"team_name": team_name, **extra},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    body = res.json()
    return {"headers": headers, "team": body["team"], "user": body["user"]}


async def role_id_by_name(client, admin_headers: dict, name: str) -> str:
    res = await client.get("/api/v1/roles", headers=admin_headers)
    assert res.status_code == 200, res.text
    return next(r["id"] for r in res.json() if r["name"] == name)


async def join_team(
    client, admin: dict, sub: str, email: str, role_name: str = "View-Only",
) -> dict:
    """Request access as `sub` and have `admin` approve it with `role_name`."""
    headers = bearer(sub, email)
    res = await client.post(
        "/api/v1/access-requests",
        json={"team_id": admin["team"]["id"]},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    role_id = await role_id_by_name(client, admin["headers"], role_name)
    res = await client.post(
        f"/api/v1/access-requests/{res.json()['id']}/approve",
        json={"role_id": role_id},
        headers=admin["headers"],
    )
    assert res.status_code == 200, res.text
    return {"headers": headers, "role_id": role_id}
