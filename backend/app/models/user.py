"""User ORM — application account linked to the auth provider's user id.

Invariants:
    - id is the auth provider's user id (text), never generated here
    - email is unique and stored lower-cased
    - is_master_admin=True → team_id IS NULL and role_id IS NULL
    - is_master_admin=False → team_id and role_id both set once onboarding completes

Design Decisions:
    - Text primary key: mirrors the provider id so token `sub` maps 1:1 to a row
    - role eagerly loaded (selectin): every request needs it for permission checks
"""

import uuid
from typing import Optional
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    team_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    role_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_master_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    role: Mapped[Optional["Role"]] = relationship("Role", lazy="selectin")
