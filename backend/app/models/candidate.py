"""Candidate ORM — people the team places, plus their bench history.

Invariants:
    - Always belongs to a Team (team_id FK, from TenantScopedMixin)
    - status ∈ CandidateStatus; bench_status ∈ BenchStatus or NULL
    - BenchHistory rows are append-only except for closing an open stint

Design Decisions:
    - skills as JSON list: portable across PostgreSQL and SQLite test DB
    - passport_number kept for exact-match deduplication only
"""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TenantScopedMixin


class Candidate(TenantScopedMixin, Base):
    __tablename__ = "candidates"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    current_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    current_employer: Mapped[str | None] = mapped_column(String(200), nullable=True)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    experience_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    work_authorization: Mapped[str | None] = mapped_column(String(100), nullable=True)
    passport_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes_internal: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
    bench_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    bench_added_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class BenchHistory(TenantScopedMixin, Base):
    """One bench stint; open while bench_removed_date is NULL."""
    __tablename__ = "bench_history"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    bench_added_date: Mapped[date] = mapped_column(Date, nullable=False)
    bench_removed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reason_bench_out: Mapped[str | None] = mapped_column(Text, nullable=True)
