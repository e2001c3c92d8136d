"""CRUD Router Factory — builds the standard five endpoints for a team-scoped resource.

Invariants:
    - Every endpoint guarded by "<permission_prefix>.<action>" via require_permission
      (no prefix: team membership only)
    - List responses use the {"items", "pagination"} envelope
    - Filters accepted only for the service's filter_fields; *_id filters parsed as UUIDs
    - DELETE registered only when the resource has a delete permission

Design Decisions:
    - Factory over ten hand-copied modules: each resource module stays a few lines
      and can still add its own extra endpoints to the returned router
"""

from typing import Callable
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel

from app.api.dependencies import Pagination, RequestContext, require_permission
from app.config import get_settings
from app.core.errors import RequestValidationFailed
from app.schemas.common import page
from app.services.tenant_records import TenantRecordService


def _parse_filters(request: Request, fields: tuple[str, ...]) -> dict:
    filters = {}
    for field in fields:
        raw = request.query_params.get(field)
        if raw is None or raw == "":
            continue
        if field.endswith("_id"):
            try:
                filters[field] = UUID(raw)
            except ValueError:
                raise RequestValidationFailed(f"'{field}' must be a UUID", field)
        else:
            filters[field] = raw
    return filters


def default_service_factory(service_cls: type[TenantRecordService]) -> Callable:
    def make(ctx: RequestContext) -> TenantRecordService:
        return service_cls(ctx.db, ctx.team)
    return make


def deduplicating_service_factory(service_cls) -> Callable:
    def make(ctx: RequestContext):
        settings = get_settings()
        return service_cls(
            ctx.db, ctx.team,
            fuzzy_threshold=settings.dedup_fuzzy_threshold,
            scan_limit=settings.dedup_scan_limit,
        )
    return make


def build_crud_router(
    *,
    prefix: str,
    tags: list[str],
    service_cls: type[TenantRecordService],
    permission_prefix: str | None,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
    allow_delete: bool = True,
    deduplicate: bool = False,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)
    make_service = (
        deduplicating_service_factory(service_cls) if deduplicate
        else default_service_factory(service_cls)
    )
    entity = service_cls.entity_name

    def _key(action: str) -> str | None:
        return f"{permission_prefix}.{action}" if permission_prefix else None

    @router.get("", name=f"list_{entity}s")
    async def list_records(
        request: Request,
        search: str | None = Query(None, max_length=200),
        paging: Pagination = Depends(),
        ctx: RequestContext = Depends(require_permission(_key("read"))),
    ):
        service = make_service(ctx)
        items, total = await service.list(
            filters=_parse_filters(request, service_cls.filter_fields),
            search=search,
            limit=paging.limit,
            offset=paging.offset,
        )
        return page(items, response_schema, total, paging.limit, paging.offset)

    if deduplicate:
        @router.post(
            "", response_model=response_schema, status_code=status.HTTP_201_CREATED,
            name=f"create_{entity}",
        )
        async def create_record(
            body: create_schema,
            skip_duplicate_check: bool = Query(False),
            ctx: RequestContext = Depends(require_permission(_key("create"))),
        ):
            return await make_service(ctx).create(
                body.model_dump(), skip_duplicate_check=skip_duplicate_check,
            )
    else:
        @router.post(
            "", response_model=response_schema, status_code=status.HTTP_201_CREATED,
            name=f"create_{entity}",
        )
        async def create_record(
            body: create_schema,
            ctx: RequestContext = Depends(require_permission(_key("create"))),
        ):
            return await make_service(ctx).create(body.model_dump())

    @router.get("/{record_id}", response_model=response_schema, name=f"get_{entity}")
    async def get_record(
        record_id: UUID,
        ctx: RequestContext = Depends(require_permission(_key("read"))),
    ):
        return await make_service(ctx).get(record_id)

    @router.patch("/{record_id}", response_model=response_schema, name=f"update_{entity}")
    async def update_record(
        record_id: UUID,
        body: update_schema,
        ctx: RequestContext = Depends(require_permission(_key("update"))),
    ):
        return await make_service(ctx).update(
            record_id, body.model_dump(exclude_unset=True),
        )

    if allow_delete:
        @router.delete(
            "/{record_id}", status_code=status.HTTP_204_NO_CONTENT,
            name=f"delete_{entity}",
        )
        async def delete_record(
            record_id: UUID,
            ctx: RequestContext = Depends(require_permission(_key("delete"))),
        ):
            await make_service(ctx).delete(record_id)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
