"""Candidate Schemas — create/update/merge bodies, bench operations, responses.

Invariants:
    - first_name/last_name required on create, 1-100 chars
    - skills de-duplicated case-insensitively, order preserved
    - experience_years within 0-70
    - bench_status/bench_added_date are never accepted in a body (bench endpoints own them)
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from app.core.domain_types import BenchStatus, CandidateStatus
from app.schemas.common import InputModel, ORMModel

BENCH_FIELDS = ("bench_status", "bench_added_date")


def _dedupe_skills(skills: list[str] | None) -> list[str] | None:
    if skills is None:
        return None
    seen, out = set(), []
    for s in skills:
        s = s.strip()
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return out


class CandidateUpdate(InputModel):
    """Partial update; also the body for merge."""
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=200)
    current_title: str | None = Field(None, max_length=200)
    current_employer: str | None = Field(None, max_length=200)
    skills: list[str] | None = None
    experience_years: int | None = Field(None, ge=0, le=70)
    work_authorization: str | None = Field(None, max_length=100)
    passport_number: str | None = Field(None, max_length=50)
    linkedin_url: str | None = Field(None, max_length=500)
    notes_internal: str | None = Field(None, max_length=10_000)
    status: CandidateStatus | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_bench_fields(cls, data):
        if isinstance(data, dict):
            for field in BENCH_FIELDS:
                if field in data:
                    raise ValueError(f"{field} is changed through the bench endpoints")
        return data

    @field_validator("skills")
    @classmethod
    def clean_skills(cls, v):
        return _dedupe_skills(v)


class CandidateCreate(CandidateUpdate):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    skills: list[str] = []
    status: CandidateStatus = CandidateStatus.NEW


class CandidateResponse(ORMModel):
    id: UUID
    team_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    current_title: str | None = None
    current_employer: str | None = None
    skills: list[str] = []
    experience_years: int | None = None
    work_authorization: str | None = None
    linkedin_url: str | None = None
    notes_internal: str | None = None
    status: CandidateStatus
    bench_status: BenchStatus | None = None
    bench_added_date: date | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class BenchAdd(InputModel):
    notes: str | None = Field(None, max_length=2000)


class BenchRemove(InputModel):
    reason: str | None = Field(None, max_length=2000)
    new_status: Literal["available", "placed"] = "placed"


class BenchHistoryResponse(ORMModel):
    id: UUID
    candidate_id: UUID
    bench_added_date: date
    bench_removed_date: date | None = None
    notes: str | None = None
    reason_bench_out: str | None = None
