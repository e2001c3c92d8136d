"""Role & Permission ORM — RBAC catalog and team-scoped role bundles.

Invariants:
    - permissions.key is unique (e.g. "candidate.create")
    - roles are team-scoped; (team_id, name) unique
    - role_permissions is a pure join table (composite PK, no extra columns)

Design Decisions:
    - Roles cloned per team from templates at team creation (see services/provisioning)
    - Role.permissions via secondary relationship: one selectin load per role
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, TimestampMixin


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id", UUID(as_uuid=True),
        ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "permission_id", UUID(as_uuid=True),
        ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Permission(TimestampMixin, Base):
    """System-wide permission catalog entry."""
    __tablename__ = "permissions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    module: Mapped[str] = mapped_column(String(100), nullable=False)


class Role(TimestampMixin, Base):
    """Named bundle of permission keys assigned to users of one team."""
    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("team_id", "name", name="uq_roles_team_name"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    team_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    based_on_template: Mapped[str | None] = mapped_column(String(100), nullable=True)

    team: Mapped[Optional["Team"]] = relationship("Team", back_populates="roles")
    permissions: Mapped[list["Permission"]] = relationship(
        "Permission", secondary=role_permissions, lazy="selectin",
    )

    @property
    def permission_keys(self) -> set[str]:
        return {p.key for p in self.permissions}
