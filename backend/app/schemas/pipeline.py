"""Pipeline Schemas — job requirements, submissions, interviews.

Invariants:
    - bill_rate_min <= bill_rate_max when both given
    - received_date <= expiry_date when both given
    - Money fields non-negative, two decimal places
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field, model_validator

from app.core.domain_types import InterviewStatus, RequirementStatus
from app.schemas.common import InputModel, ORMModel


class RequirementUpdate(InputModel):
    client_id: UUID | None = None
    vendor_id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=20_000)
    skills_required: str | None = Field(None, max_length=2000)
    location: str | None = Field(None, max_length=200)
    work_mode: str | None = Field(None, pattern=r"^(onsite|remote|hybrid)$")
    bill_rate_min: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    bill_rate_max: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    employment_type: str | None = Field(None, max_length=50)
    priority: str | None = Field(None, pattern=r"^(low|medium|high|urgent)$")
    received_date: date | None = None
    expiry_date: date | None = None
    status: RequirementStatus | None = None
    notes: str | None = Field(None, max_length=10_000)

    @model_validator(mode="after")
    def check_ranges(self):
        if (
            self.bill_rate_min is not None and self.bill_rate_max is not None
            and self.bill_rate_min > self.bill_rate_max
        ):
            raise ValueError("bill_rate_min cannot exceed bill_rate_max")
        if (
            self.received_date and self.expiry_date
            and self.received_date > self.expiry_date
        ):
            raise ValueError("expiry_date must be on or after received_date")
        return self


class RequirementCreate(RequirementUpdate):
    title: str = Field(min_length=1, max_length=200)
    status: RequirementStatus = RequirementStatus.OPEN


class RequirementResponse(ORMModel):
    id: UUID
    team_id: UUID
    client_id: UUID | None = None
    vendor_id: UUID | None = None
    title: str
    description: str | None = None
    skills_required: str | None = None
    location: str | None = None
    work_mode: str | None = None
    bill_rate_min: Decimal | None = None
    bill_rate_max: Decimal | None = None
    employment_type: str | None = None
    priority: str | None = None
    received_date: date | None = None
    expiry_date: date | None = None
    status: RequirementStatus
    notes: str | None = None
    created_at: datetime


SUBMISSION_STATUS = r"^(submitted|shortlisted|interviewing|offered|rejected|withdrawn|placed)$"


class SubmissionUpdate(InputModel):
    vendor_id: UUID | None = None
    status: str | None = Field(None, pattern=SUBMISSION_STATUS)
    bill_rate_offered: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    pay_rate_offered: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: str | None = Field(None, max_length=10_000)


class SubmissionCreate(SubmissionUpdate):
    requirement_id: UUID
    candidate_id: UUID
    status: str = Field("submitted", pattern=SUBMISSION_STATUS)
    submitted_at: datetime | None = None


class SubmissionResponse(ORMModel):
    id: UUID
    team_id: UUID
    requirement_id: UUID
    candidate_id: UUID
    vendor_id: UUID | None = None
    status: str
    bill_rate_offered: Decimal | None = None
    pay_rate_offered: Decimal | None = None
    notes: str | None = None
    submitted_at: datetime | None = None
    created_at: datetime


class InterviewUpdate(InputModel):
    round: str | None = Field(None, min_length=1, max_length=50)
    scheduled_at: datetime | None = None
    interviewer_name: str | None = Field(None, max_length=200)
    mode: str | None = Field(None, pattern=r"^(phone|video|onsite)$")
    location: str | None = Field(None, max_length=200)
    status: InterviewStatus | None = None
    outcome: str | None = Field(None, pattern=r"^(pending|passed|failed|on_hold)$")
    feedback: str | None = Field(None, max_length=10_000)


class InterviewCreate(InterviewUpdate):
    submission_id: UUID
    round: str = Field(min_length=1, max_length=50)
    scheduled_at: datetime
    status: InterviewStatus = InterviewStatus.SCHEDULED


class InterviewResponse(ORMModel):
    id: UUID
    team_id: UUID
    submission_id: UUID
    round: str
    scheduled_at: datetime
    interviewer_name: str | None = None
    mode: str | None = None
    location: str | None = None
    status: InterviewStatus
    outcome: str | None = None
    feedback: str | None = None
    created_at: datetime
