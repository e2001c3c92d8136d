"""Candidate Routes — CRUD plus merge, bench transitions and skill search.

Invariants:
    - POST returns 409 DUPLICATE_RECORD with matches unless ?skip_duplicate_check=true
    - Merge and bench transitions need candidate.update
"""

from uuid import UUID

from fastapi import Depends, Query

from app.api.dependencies import RequestContext, require_permission
from app.api.routes.crud_router import build_crud_router, deduplicating_service_factory
from app.core.domain_types import BenchStatus
from app.schemas.candidate import (
    BenchAdd, BenchHistoryResponse, BenchRemove,
    CandidateCreate, CandidateResponse, CandidateUpdate,
)
from app.services.candidates import CandidateService

router = build_crud_router(
    prefix="/api/v1/candidates",
    tags=["candidates"],
    service_cls=CandidateService,
    permission_prefix="candidate",
    create_schema=CandidateCreate,
    update_schema=CandidateUpdate,
    response_schema=CandidateResponse,
    deduplicate=True,
)

_service = deduplicating_service_factory(CandidateService)


@router.get("/search/skills")
async def search_by_skills(
    skills: str = Query(..., min_length=1, description="Comma-separated skills"),
    limit: int = Query(50, ge=1, le=200),
    ctx: RequestContext = Depends(require_permission("candidate.read")),
):
    found = await _service(ctx).search_by_skills(skills.split(","), limit)
    return {
        "items": [
            CandidateResponse.model_validate(c).model_dump(mode="json") for c in found
        ],
    }


@router.post("/{record_id}/merge", response_model=CandidateResponse)
async def merge_candidate(
    record_id: UUID,
    body: CandidateUpdate,
    ctx: RequestContext = Depends(require_permission("candidate.update")),
):
    return await _service(ctx).merge(record_id, body.model_dump(exclude_unset=True))


@router.post("/{record_id}/bench", response_model=CandidateResponse)
async def add_to_bench(
    record_id: UUID,
    body: BenchAdd,
    ctx: RequestContext = Depends(require_permission("candidate.update")),
):
    return await _service(ctx).add_to_bench(record_id, body.notes)


@router.post("/{record_id}/bench/remove", response_model=CandidateResponse)
async def remove_from_bench(
    record_id: UUID,
    body: BenchRemove,
    ctx: RequestContext = Depends(require_permission("candidate.update")),
):
    return await _service(ctx).remove_from_bench(
        record_id, body.reason, BenchStatus(body.new_status),
    )


@router.get("/{record_id}/bench-history", response_model=list[BenchHistoryResponse])
async def get_bench_history(
    record_id: UUID,
    ctx: RequestContext = Depends(require_permission("candidate.read")),
):
    return await _service(ctx).bench_history(record_id)
