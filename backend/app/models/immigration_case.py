"""Immigration Case ORM — visa tracking for a candidate."""

import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TenantScopedMixin


class ImmigrationCase(TenantScopedMixin, Base):
    __tablename__ = "immigration_cases"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    visa_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="in_progress")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
