"""Pipeline Services — job requirements, submissions and interviews.

Invariants:
    - A submission's candidate, requirement and vendor belong to the submission's team
    - An interview's submission belongs to the interview's team
    - Submissions get submitted_at stamped on create when not provided
"""

from app.db.base import utcnow
from app.models.candidate import Candidate
from app.models.client import Client
from app.models.interview import Interview
from app.models.job_requirement import JobRequirement
from app.models.submission import Submission
from app.models.vendor import Vendor
from app.services.audit import create_activity
from app.services.tenant_records import TenantRecordService


class RequirementService(TenantRecordService):
    model = JobRequirement
    entity_name = "job_requirement"
    search_fields = ("title", "location", "skills_required")
    filter_fields = ("status", "client_id", "vendor_id", "priority")
    references = {
        "client_id": (Client, "Client"),
        "vendor_id": (Vendor, "Vendor"),
    }


class SubmissionService(TenantRecordService):
    model = Submission
    entity_name = "submission"
    filter_fields = ("status", "candidate_id", "requirement_id", "vendor_id")
    references = {
        "candidate_id": (Candidate, "Candidate"),
        "requirement_id": (JobRequirement, "Job requirement"),
        "vendor_id": (Vendor, "Vendor"),
    }

    async def create(self, data: dict) -> Submission:
        if data.get("submitted_at") is None:
            data = {**data, "submitted_at": utcnow()}
        return await super().create(data)

    async def after_create(self, record: Submission) -> None:
        create_activity(
            self.db, "candidate", record.candidate_id, "submission",
            "Submission Created", "Submitted for a job requirement",
            metadata={"submission_id": record.id, "requirement_id": record.requirement_id},
            user_id=self.context.user_id, team_id=record.team_id,
        )


class InterviewService(TenantRecordService):
    model = Interview
    entity_name = "interview"
    search_fields = ("interviewer_name", "round")
    filter_fields = ("status", "submission_id", "outcome")
    references = {"submission_id": (Submission, "Submission")}
