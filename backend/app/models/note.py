"""Note ORM — free-text comment attached to any team-owned entity.

Design Decisions:
    - (entity_type, entity_id) instead of per-table FKs: one notes table for every entity
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TenantScopedMixin


class Note(TenantScopedMixin, Base):
    __tablename__ = "notes"

    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
