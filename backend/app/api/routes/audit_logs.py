"""Audit & Timeline Routes — filtered audit log and per-entity timelines.

Invariants:
    - Audit log listing needs audit.view
    - Timeline of an entity needs read permission on that entity's module
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import RequestContext, require_permission
from app.core.domain_types import AuditAction
from app.core.errors import PermissionDeniedError, RequestValidationFailed
from app.core.permission_checks import has_permission
from app.core.team_context import check_team_access
from app.schemas.note import AuditLogResponse
from app.services.audit import get_entity_timeline, get_filtered_audit_logs
from app.services.notes import NOTABLE_ENTITIES

router = APIRouter(prefix="/api/v1", tags=["audit"])

_READ_PERMISSION = {
    "candidate": "candidate.read",
    "vendor": "vendor.read",
    "client": "client.read",
    "job_requirement": "job.read",
    "submission": "submission.read",
    "interview": "interview.read",
    "project": "project.read",
    "timesheet": "timesheet.read",
    "invoice": "invoice.read",
    "immigration_case": "immigration.read",
}


@router.get("/audit-logs")
async def list_audit_logs(
    entity_name: str | None = Query(None),
    action: AuditAction | None = Query(None),
    user_id: str | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    limit: int = Query(50, ge=1, le=500),
    ctx: RequestContext = Depends(require_permission("audit.view")),
):
    logs = await get_filtered_audit_logs(
        ctx.db, ctx.team,
        entity_name=entity_name,
        action=action.value if action else None,
        user_id=user_id,
        start=start,
        end=end,
        limit=limit,
    )
    return {
        "items": [AuditLogResponse.model_validate(log).model_dump(mode="json") for log in logs],
    }


@router.get("/timeline/{entity_type}/{entity_id}")
async def entity_timeline(
    entity_type: str,
    entity_id: UUID,
    ctx: RequestContext = Depends(require_permission()),
):
    if entity_type not in NOTABLE_ENTITIES:
        raise RequestValidationFailed(f"Unknown entity type '{entity_type}'", "entity_type")
    key = _READ_PERMISSION[entity_type]
    if not has_permission(ctx.user.is_master_admin, ctx.user.role_id, ctx.permissions, key):
        raise PermissionDeniedError(key)
    target = await ctx.db.get(NOTABLE_ENTITIES[entity_type], entity_id)
    if target is not None:
        check_team_access(ctx.team, target.team_id)
    return {"items": await get_entity_timeline(ctx.db, ctx.team, entity_type, entity_id)}
