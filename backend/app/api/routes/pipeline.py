"""Pipeline Routes — job requirements, submissions, interviews.

Invariants:
    - Requirements guarded by job.*, submissions by submission.*, interviews by interview.*
    - Parent ids in bodies validated in-team by the services (400 otherwise)
"""

from app.api.routes.crud_router import build_crud_router
from app.schemas.pipeline import (
    InterviewCreate, InterviewResponse, InterviewUpdate,
    RequirementCreate, RequirementResponse, RequirementUpdate,
    SubmissionCreate, SubmissionResponse, SubmissionUpdate,
)
from app.services.pipeline import (
    InterviewService, RequirementService, SubmissionService,
)

requirements_router = build_crud_router(
    prefix="/api/v1/requirements",
    tags=["requirements"],
    service_cls=RequirementService,
    permission_prefix="job",
    create_schema=RequirementCreate,
    update_schema=RequirementUpdate,
    response_schema=RequirementResponse,
)

submissions_router = build_crud_router(
    prefix="/api/v1/submissions",
    tags=["submissions"],
    service_cls=SubmissionService,
    permission_prefix="submission",
    create_schema=SubmissionCreate,
    update_schema=SubmissionUpdate,
    response_schema=SubmissionResponse,
)

interviews_router = build_crud_router(
    prefix="/api/v1/interviews",
    tags=["interviews"],
    service_cls=InterviewService,
    permission_prefix="interview",
    create_schema=InterviewCreate,
    update_schema=InterviewUpdate,
    response_schema=InterviewResponse,
)
