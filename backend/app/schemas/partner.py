"""Vendor & Client Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from app.schemas.common import InputModel, ORMModel


class VendorUpdate(InputModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    company_name: str | None = Field(None, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=500)
    status: str | None = Field(None, pattern=r"^(active|inactive)$")
    notes: str | None = Field(None, max_length=10_000)


class VendorCreate(VendorUpdate):
    name: str = Field(min_length=1, max_length=200)
    status: str = Field("active", pattern=r"^(active|inactive)$")


class VendorResponse(ORMModel):
    id: UUID
    team_id: UUID
    name: str
    company_name: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    status: str
    notes: str | None = None
    created_at: datetime


class ClientUpdate(InputModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    industry: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=500)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=50)
    status: str | None = Field(None, pattern=r"^(active|inactive|prospect)$")
    notes: str | None = Field(None, max_length=10_000)


class ClientCreate(ClientUpdate):
    name: str = Field(min_length=1, max_length=200)
    status: str = Field("active", pattern=r"^(active|inactive|prospect)$")


class ClientResponse(ORMModel):
    id: UUID
    team_id: UUID
    name: str
    industry: str | None = None
    website: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    status: str
    notes: str | None = None
    created_at: datetime
