"""Vendor & Client Services — team-scoped CRUD with duplicate detection on create."""

import logging

from app.core.errors import DuplicateRecordError
from app.core.team_context import write_team_id
from app.models.client import Client
from app.models.vendor import Vendor
from app.services.duplicate_finder import DuplicateFinder, DuplicateResult
from app.services.tenant_records import TenantRecordService

logger = logging.getLogger(__name__)


class _DedupedService(TenantRecordService):
    summary_fields: tuple[str, ...] = ("id", "name")

    def __init__(self, db, context, fuzzy_threshold: float = 0.4, scan_limit: int = 1000):
        super().__init__(db, context)
        self.fuzzy_threshold = fuzzy_threshold
        self.scan_limit = scan_limit

    def finder(self) -> DuplicateFinder:
        return DuplicateFinder(
            self.db, write_team_id(self.context), self.fuzzy_threshold, self.scan_limit,
        )

    async def find_duplicates(self, data: dict) -> DuplicateResult:
        raise NotImplementedError

    async def create(self, data: dict, skip_duplicate_check: bool = False):
        if not skip_duplicate_check:
            result = await self.find_duplicates(data)
            if result.found:
                raise DuplicateRecordError(
                    self.entity_name,
                    [
                        {f: str(getattr(m, f)) if f == "id" else getattr(m, f)
                         for f in self.summary_fields}
                        for m in result.matches
                    ],
                    result.match_type.value,
                    result.confidence,
                )
        return await super().create(data)


class VendorService(_DedupedService):
    model = Vendor
    entity_name = "vendor"
    search_fields = ("name", "company_name", "email")
    summary_fields = ("id", "name", "email", "phone")

    async def find_duplicates(self, data: dict) -> DuplicateResult:
        return await self.finder().vendors(
            name=data.get("name"), email=data.get("email"), phone=data.get("phone"),
        )


class ClientService(_DedupedService):
    model = Client
    entity_name = "client"
    search_fields = ("name", "contact_name", "contact_email")
    filter_fields = ("status", "industry")
    summary_fields = ("id", "name", "contact_email", "contact_phone")

    async def find_duplicates(self, data: dict) -> DuplicateResult:
        return await self.finder().clients(
            name=data.get("name"),
            contact_email=data.get("contact_email"),
            contact_phone=data.get("contact_phone"),
        )
