"""Role Routes — team roles, their permission sets, and the permission catalog.

Invariants:
    - Listing/reading roles needs user.read; every write needs roles.manage
    - Roles of other teams are 403 (master admin excepted)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import RequestContext, require_permission
from app.schemas.role import (
    RoleCreate, RolePermissionsUpdate, RoleResponse, RoleUpdate,
)
from app.services import permissions as permission_service
from app.services.roles import RoleService

router = APIRouter(prefix="/api/v1/roles", tags=["roles"])


@router.get("/permissions")
async def list_permissions(
    ctx: RequestContext = Depends(require_permission("user.read")),
):
    """Whole permission catalog grouped by module."""
    return await permission_service.get_all_permissions_grouped(ctx.db)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    ctx: RequestContext = Depends(require_permission("user.read")),
):
    return await RoleService(ctx.db, ctx.team).list_roles()


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    body: RoleCreate,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    return await RoleService(ctx.db, ctx.team).create_role(
        name=body.name,
        description=body.description,
        is_admin=body.is_admin,
        permission_keys=body.permission_keys,
        based_on_template=body.based_on_template,
    )


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: UUID,
    ctx: RequestContext = Depends(require_permission("user.read")),
):
    return await RoleService(ctx.db, ctx.team).get_role(role_id)


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    body: RoleUpdate,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    return await RoleService(ctx.db, ctx.team).update_role(
        role_id, body.model_dump(exclude_unset=True),
    )


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: UUID,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    await RoleService(ctx.db, ctx.team).delete_role(role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{role_id}/permissions", response_model=RoleResponse)
async def replace_role_permissions(
    role_id: UUID,
    body: RolePermissionsUpdate,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    return await RoleService(ctx.db, ctx.team).set_permissions(
        role_id, body.permission_keys,
    )


@router.post("/{role_id}/permissions/{permission_key}", response_model=RoleResponse)
async def grant_role_permission(
    role_id: UUID,
    permission_key: str,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    """Add one permission; granting an already-held key is a no-op."""
    return await RoleService(ctx.db, ctx.team).grant_permission(role_id, permission_key)


@router.delete("/{role_id}/permissions/{permission_key}", response_model=RoleResponse)
async def revoke_role_permission(
    role_id: UUID,
    permission_key: str,
    ctx: RequestContext = Depends(require_permission("roles.manage")),
):
    return await RoleService(ctx.db, ctx.team).revoke_permission(role_id, permission_key)
