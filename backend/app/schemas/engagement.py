"""Engagement Schemas — projects, timesheets, invoices, immigration cases."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import Field, model_validator

from app.core.domain_types import TimesheetStatus
from app.schemas.common import InputModel, ORMModel


class ProjectUpdate(InputModel):
    client_id: UUID | None = None
    candidate_id: UUID | None = None
    name: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = Field(None, pattern=r"^(active|completed|on_hold|cancelled)$")

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class ProjectCreate(ProjectUpdate):
    name: str = Field(min_length=1, max_length=200)
    start_date: date
    status: str = Field("active", pattern=r"^(active|completed|on_hold|cancelled)$")


class ProjectResponse(ORMModel):
    id: UUID
    team_id: UUID
    client_id: UUID | None = None
    candidate_id: UUID | None = None
    name: str
    start_date: date
    end_date: date | None = None
    status: str
    created_at: datetime


class TimesheetUpdate(InputModel):
    week_ending: date | None = None
    hours: Decimal | None = Field(None, ge=0, le=168, max_digits=5, decimal_places=2)
    # approve/reject go through the review endpoints
    status: Literal["draft", "submitted"] | None = None


class TimesheetCreate(TimesheetUpdate):
    project_id: UUID
    candidate_id: UUID
    week_ending: date
    hours: Decimal = Field(ge=0, le=168, max_digits=5, decimal_places=2)
    status: Literal["draft", "submitted"] = "draft"


class TimesheetResponse(ORMModel):
    id: UUID
    team_id: UUID
    project_id: UUID
    candidate_id: UUID
    week_ending: date
    hours: Decimal
    status: TimesheetStatus
    approved_by: str | None = None
    approved_at: datetime | None = None
    created_at: datetime


INVOICE_STATUS = r"^(draft|sent|paid|overdue|cancelled)$"


class InvoiceUpdate(InputModel):
    number: str | None = Field(None, min_length=1, max_length=50)
    amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    due_date: date | None = None
    status: str | None = Field(None, pattern=INVOICE_STATUS)


class InvoiceCreate(InvoiceUpdate):
    client_id: UUID
    number: str = Field(min_length=1, max_length=50)
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    status: str = Field("draft", pattern=INVOICE_STATUS)


class InvoiceResponse(ORMModel):
    id: UUID
    team_id: UUID
    client_id: UUID
    number: str
    amount: Decimal
    due_date: date | None = None
    status: str
    created_at: datetime


class ImmigrationUpdate(InputModel):
    visa_type: str | None = Field(None, min_length=1, max_length=50)
    status: str | None = Field(None, max_length=30)
    notes: str | None = Field(None, max_length=10_000)


class ImmigrationCreate(ImmigrationUpdate):
    candidate_id: UUID
    visa_type: str = Field(min_length=1, max_length=50)
    status: str = Field("in_progress", max_length=30)


class ImmigrationResponse(ORMModel):
    id: UUID
    team_id: UUID
    candidate_id: UUID
    visa_type: str
    status: str
    notes: str | None = None
    created_at: datetime
