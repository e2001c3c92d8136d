"""Onboarding Routes — create a team, bootstrap a master admin, and /me.

Invariants:
    - Onboarding endpoints need only a verified token (no users row yet)
    - /me needs a users row; permissions are the role's keys (all keys for master admin)
    - /me/permissions/check answers any/all questions without raising 403
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user, get_identity
from app.config import get_settings
from app.core.permission_catalog import ALL_PERMISSION_KEYS
from app.infrastructure.auth_tokens import AuthIdentity
from app.infrastructure.database import get_db
from app.models.team import Team
from app.models.user import User
from app.schemas.team import (
    MasterAdminCreate, MeResponse, MemberResponse, RoleSummary, TeamCreate,
    TeamResponse,
)
from app.services import permissions as permission_service
from app.services import provisioning, team_members

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["onboarding"])


@router.post("/onboarding/team", status_code=status.HTTP_201_CREATED)
async def create_team(
    body: TeamCreate,
    identity: AuthIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Create a new team; the caller becomes its Local Admin."""
    team, user = await provisioning.create_team_as_local_admin(
        db,
        identity,
        body.team_name,
        first_name=body.first_name,
        last_name=body.last_name,
        company_name=body.company_name,
        description=body.description,
        is_discoverable=body.is_discoverable,
    )
    return {
        "team": TeamResponse.model_validate(team).model_dump(mode="json"),
        "user": MemberResponse.model_validate(user).model_dump(mode="json"),
    }


@router.post(
    "/onboarding/master-admin", response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_master_admin(
    body: MasterAdminCreate,
    identity: AuthIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await provisioning.create_master_admin(
        db,
        identity,
        body.setup_token,
        get_settings().setup_token,
        first_name=body.first_name,
        last_name=body.last_name,
    )


@router.get("/me", response_model=MeResponse)
async def me(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    team = await db.get(Team, user.team_id) if user.team_id else None
    if user.is_master_admin:
        permissions = sorted(ALL_PERMISSION_KEYS)
    else:
        permissions = sorted(user.role.permission_keys) if user.role else []
    return MeResponse(
        user=MemberResponse.model_validate(user),
        team=TeamResponse.model_validate(team) if team else None,
        role=RoleSummary.model_validate(user.role) if user.role else None,
        permissions=permissions,
    )


@router.get("/me/permissions/check")
async def check_my_permissions(
    keys: list[str] = Query(..., min_length=1),
    mode: Literal["any", "all"] = "all",
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Whether the caller holds any/all of `keys` (master admin: always true)."""
    if mode == "any":
        granted = await permission_service.check_any_permission(db, user, keys)
    else:
        granted = await permission_service.check_all_permissions(db, user, keys)
    return {"keys": keys, "mode": mode, "granted": granted}


@router.post("/me/last-login", response_model=MemberResponse)
async def update_last_login(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await team_members.record_login(db, user)
