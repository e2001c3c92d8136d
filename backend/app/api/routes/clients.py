"""Client Routes — team-scoped CRUD, duplicate check on create."""

from app.api.routes.crud_router import build_crud_router
from app.schemas.partner import ClientCreate, ClientResponse, ClientUpdate
from app.services.partners import ClientService

router = build_crud_router(
    prefix="/api/v1/clients",
    tags=["clients"],
    service_cls=ClientService,
    permission_prefix="client",
    create_schema=ClientCreate,
    update_schema=ClientUpdate,
    response_schema=ClientResponse,
    deduplicate=True,
)
