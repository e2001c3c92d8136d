"""Role & Permission Schemas.

Invariants:
    - permission keys look like "<module>.<action>"
    - RoleResponse.permissions is sorted
"""

import re
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.common import InputModel, ORMModel

_KEY_PATTERN = r"^[a-z_]+\.[a-z_]+$"


class PermissionResponse(ORMModel):
    id: UUID
    key: str
    name: str
    module: str


class RoleCreate(InputModel):
    name: str = Field(min_length=2, max_length=100)
    description: str | None = Field(None, max_length=1000)
    is_admin: bool = False
    based_on_template: str | None = Field(None, max_length=100)
    permission_keys: list[str] = []

    @field_validator("permission_keys")
    @classmethod
    def check_keys(cls, v: list[str]) -> list[str]:
        return _validate_keys(v)


class RoleUpdate(InputModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, max_length=1000)
    is_admin: bool | None = None


class RolePermissionsUpdate(InputModel):
    permission_keys: list[str]

    @field_validator("permission_keys")
    @classmethod
    def check_keys(cls, v: list[str]) -> list[str]:
        return _validate_keys(v)


class RoleResponse(ORMModel):
    id: UUID
    team_id: UUID | None = None
    name: str
    description: str | None = None
    is_admin: bool
    is_custom: bool
    based_on_template: str | None = None
    permissions: list[str] = Field(default_factory=list, validation_alias="permission_keys")

    @field_validator("permissions", mode="before")
    @classmethod
    def sort_keys(cls, v) -> list[str]:
        return sorted(v or [])


def _validate_keys(keys: list[str]) -> list[str]:
    bad = [k for k in keys if not re.match(_KEY_PATTERN, k)]
    if bad:
        raise ValueError(f"malformed permission keys: {bad}")
    return sorted(set(keys))
