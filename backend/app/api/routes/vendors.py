"""Vendor Routes — team-scoped CRUD, duplicate check on create."""

from app.api.routes.crud_router import build_crud_router
from app.schemas.partner import VendorCreate, VendorResponse, VendorUpdate
from app.services.partners import VendorService

router = build_crud_router(
    prefix="/api/v1/vendors",
    tags=["vendors"],
    service_cls=VendorService,
    permission_prefix="vendor",
    create_schema=VendorCreate,
    update_schema=VendorUpdate,
    response_schema=VendorResponse,
    deduplicate=True,
)
