"""Access Request Routes — request to join a team, and admin review.

Invariants:
    - Creating and listing one's own requests needs only a verified token
    - Listing/approving/rejecting needs a users row; admin rights checked by the service
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import RequestContext, get_identity, require_permission
from app.core.domain_types import AccessRequestStatus
from app.infrastructure.auth_tokens import AuthIdentity
from app.infrastructure.database import get_db
from app.schemas.access_request import (
    AccessRequestCreate, AccessRequestResponse, ApproveAccessRequest,
    RejectAccessRequest,
)
from app.services.access_requests import AccessRequestService

router = APIRouter(prefix="/api/v1/access-requests", tags=["access-requests"])


def _dump(r) -> dict:
    return AccessRequestResponse.model_validate(r).model_dump(mode="json")


@router.post("", response_model=AccessRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_access_request(
    body: AccessRequestCreate,
    identity: AuthIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await AccessRequestService(db).create(
        identity,
        body.team_id,
        requested_role_id=body.requested_role_id,
        message=body.message,
        first_name=body.first_name,
        last_name=body.last_name,
    )


@router.get("/mine")
async def list_my_access_requests(
    identity: AuthIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    grouped = await AccessRequestService(db).list_mine(identity)
    return {
        key: value if key == "total" else [_dump(r) for r in value]
        for key, value in grouped.items()
    }


@router.get("")
async def list_access_requests(
    status_filter: AccessRequestStatus | None = Query(None, alias="status"),
    ctx: RequestContext = Depends(require_permission(require_team=False)),
):
    requests = await AccessRequestService(ctx.db).list_for_team(
        ctx.team, status_filter.value if status_filter else None,
    )
    return {"items": [_dump(r) for r in requests]}


@router.post("/{request_id}/approve", response_model=AccessRequestResponse)
async def approve_access_request(
    request_id: UUID,
    body: ApproveAccessRequest,
    ctx: RequestContext = Depends(require_permission(require_team=False)),
):
    return await AccessRequestService(ctx.db).approve(ctx.user, request_id, body.role_id)


@router.post("/{request_id}/reject", response_model=AccessRequestResponse)
async def reject_access_request(
    request_id: UUID,
    body: RejectAccessRequest,
    ctx: RequestContext = Depends(require_permission(require_team=False)),
):
    return await AccessRequestService(ctx.db).reject(ctx.user, request_id, body.reason)
