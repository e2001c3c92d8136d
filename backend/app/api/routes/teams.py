"""Team Routes — discovery, the caller's current team, settings and members.

Invariants:
    - GET /teams/discoverable is public (no token)
    - GET /teams (all teams) is master admin only
    - /teams/current/* operate on the caller's own team (master admin: ?team_id=)
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import RequestContext, require_permission
from app.infrastructure.database import get_db
from app.schemas.team import (
    DiscoverableTeam, MemberResponse, MemberRoleUpdate, TeamResponse,
    TeamSettingsResponse, TeamSettingsUpdate, TeamUpdate,
)
from app.services.provisioning import get_discoverable_teams
from app.services.team_context import list_all_teams
from app.services.team_members import TeamMemberService

router = APIRouter(prefix="/api/v1/teams", tags=["teams"])


@router.get("/discoverable", response_model=list[DiscoverableTeam])
async def discoverable_teams(db: AsyncSession = Depends(get_db)):
    return await get_discoverable_teams(db)


@router.get("")
async def all_teams(
    ctx: RequestContext = Depends(require_permission(require_team=False)),
):
    teams = await list_all_teams(ctx.db, ctx.team)
    return {
        "items": [
            {
                **TeamResponse.model_validate(t["team"]).model_dump(mode="json"),
                "member_count": t["member_count"],
            }
            for t in teams
        ],
    }


@router.get("/current", response_model=TeamResponse)
async def current_team(ctx: RequestContext = Depends(require_permission())):
    return await TeamMemberService(ctx.db, ctx.team).get_team()


@router.patch("/current", response_model=TeamResponse)
async def update_current_team(
    body: TeamUpdate,
    ctx: RequestContext = Depends(require_permission("settings.manage")),
):
    return await TeamMemberService(ctx.db, ctx.team).update_team(
        body.model_dump(exclude_unset=True),
    )


@router.put("/current/settings", response_model=TeamSettingsResponse)
async def update_team_settings(
    body: TeamSettingsUpdate,
    ctx: RequestContext = Depends(require_permission("settings.manage")),
):
    return await TeamMemberService(ctx.db, ctx.team).update_settings(
        is_discoverable=body.is_discoverable, description=body.description,
    )


@router.get("/current/members", response_model=list[MemberResponse])
async def list_members(ctx: RequestContext = Depends(require_permission("user.read"))):
    return await TeamMemberService(ctx.db, ctx.team).list_members()


@router.patch("/current/members/{user_id}/role", response_model=MemberResponse)
async def change_member_role(
    user_id: str,
    body: MemberRoleUpdate,
    ctx: RequestContext = Depends(require_permission("user.update")),
):
    return await TeamMemberService(ctx.db, ctx.team).update_member_role(
        user_id, body.role_id,
    )


@router.delete("/current/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    user_id: str,
    ctx: RequestContext = Depends(require_permission("user.delete")),
):
    await TeamMemberService(ctx.db, ctx.team).remove_member(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
