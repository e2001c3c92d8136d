"""SQLAlchemy Declarative Base — shared base class and column mixins for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Tenant-scoped tables get team_id/created_by/timestamps from TenantScopedMixin

Design Decisions:
    - Separate file for Base: avoids circular imports between models (ADR: SQLAlchemy best practice)
    - Mixin over copy-paste: every business table carries the same tenancy columns
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ATS ORM models."""
    pass


class TimestampMixin:
    """created_at / updated_at maintained by the ORM."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )


class TenantScopedMixin(TimestampMixin):
    """UUID id + team_id + created_by for every team-owned business row."""
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )

    @declared_attr
    def team_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            UUID(as_uuid=True), ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=False, index=True,
        )

    @declared_attr
    def created_by(cls) -> Mapped[str | None]:
        return mapped_column(
            String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        )
