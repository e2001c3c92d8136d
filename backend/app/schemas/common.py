"""Shared schema pieces — ORM base model, strip helpers and the list envelope."""

from typing import Iterable

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    """Response model readable straight from SQLAlchemy rows."""
    model_config = ConfigDict(from_attributes=True)


class InputModel(BaseModel):
    """Request body: enums stored as plain values, whitespace stripped."""
    model_config = ConfigDict(
        use_enum_values=True, str_strip_whitespace=True, validate_default=True,
    )


def page(
    items: Iterable, schema: type[BaseModel], total: int, limit: int, offset: int,
) -> dict:
    return {
        "items": [schema.model_validate(i).model_dump(mode="json") for i in items],
        "pagination": {"limit": limit, "offset": offset, "total": total},
    }
