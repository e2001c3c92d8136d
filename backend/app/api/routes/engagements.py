"""Engagement Routes — projects, timesheets (with review), invoices, immigration cases.

Invariants:
    - Timesheets have no delete; approve/reject need timesheet.approve
    - Immigration cases have no delete permission, hence no DELETE route
"""

from uuid import UUID

from fastapi import Depends

from app.api.dependencies import RequestContext, require_permission
from app.api.routes.crud_router import build_crud_router
from app.schemas.engagement import (
    ImmigrationCreate, ImmigrationResponse, ImmigrationUpdate,
    InvoiceCreate, InvoiceResponse, InvoiceUpdate,
    ProjectCreate, ProjectResponse, ProjectUpdate,
    TimesheetCreate, TimesheetResponse, TimesheetUpdate,
)
from app.services.engagements import (
    ImmigrationService, InvoiceService, ProjectService, TimesheetService,
)

projects_router = build_crud_router(
    prefix="/api/v1/projects",
    tags=["projects"],
    service_cls=ProjectService,
    permission_prefix="project",
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    response_schema=ProjectResponse,
)

timesheets_router = build_crud_router(
    prefix="/api/v1/timesheets",
    tags=["timesheets"],
    service_cls=TimesheetService,
    permission_prefix="timesheet",
    create_schema=TimesheetCreate,
    update_schema=TimesheetUpdate,
    response_schema=TimesheetResponse,
    allow_delete=False,
)


@timesheets_router.post("/{record_id}/approve", response_model=TimesheetResponse)
async def approve_timesheet(
    record_id: UUID,
    ctx: RequestContext = Depends(require_permission("timesheet.approve")),
):
    return await TimesheetService(ctx.db, ctx.team).review(record_id, approve=True)


@timesheets_router.post("/{record_id}/reject", response_model=TimesheetResponse)
async def reject_timesheet(
    record_id: UUID,
    ctx: RequestContext = Depends(require_permission("timesheet.approve")),
):
    return await TimesheetService(ctx.db, ctx.team).review(record_id, approve=False)


invoices_router = build_crud_router(
    prefix="/api/v1/invoices",
    tags=["invoices"],
    service_cls=InvoiceService,
    permission_prefix="invoice",
    create_schema=InvoiceCreate,
    update_schema=InvoiceUpdate,
    response_schema=InvoiceResponse,
)

immigration_router = build_crud_router(
    prefix="/api/v1/immigration",
    tags=["immigration"],
    service_cls=ImmigrationService,
    permission_prefix="immigration",
    create_schema=ImmigrationCreate,
    update_schema=ImmigrationUpdate,
    response_schema=ImmigrationResponse,
    allow_delete=False,
)
