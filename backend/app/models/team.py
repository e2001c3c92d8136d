"""Team ORM — the tenant boundary, plus its per-team settings row.

Invariants:
    - name is unique across the system
    - is_active=False locks every regular member out of team data
    - TeamSettings is 1:1 with Team (team_id is the primary key)

Design Decisions:
    - Discoverability lives in team_settings, not teams: signup flow queries it alone
    - cascade delete for settings and roles: a team owns both
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TimestampMixin


class Team(TimestampMixin, Base):
    """Tenant container — every business row points at one."""
    __tablename__ = "teams"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    company_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    settings: Mapped["TeamSettings"] = relationship(
        "TeamSettings", back_populates="team", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    roles: Mapped[list["Role"]] = relationship(
        "Role", back_populates="team", cascade="all, delete-orphan",
    )


class TeamSettings(TimestampMixin, Base):
    """Per-team configuration (default: not discoverable)."""
    __tablename__ = "team_settings"

    team_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id", ondelete="CASCADE"),
        primary_key=True,
    )
    is_discoverable: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    team: Mapped["Team"] = relationship("Team", back_populates="settings")
