"""Truck Routes — owner-scoped CRUD plus load attach/detach.

Invariants:
    - Every route requires a verified bearer token (router-level dependency → 401)
    - Check order: 415 → 406 → 404 → 403 → 400 → mutation
    - A truck is only visible to and mutable by its owner; list shows only own trucks
    - PUT and DELETE release every load first (bulk detach), then write the truck
    - owner and loads are server-managed: PUT resets loads to [], PATCH keeps both

Design Decisions:
    - get_truck_or_404 + ensure_owner shared by every item route
    - Collection PUT/DELETE answer 405 explicitly instead of falling through to FastAPI's default
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from fleet_api.api.dependencies import (
    get_association_manager, get_base_url, get_pagination_engine,
    get_principal, get_store, read_json_body, require_json_accept,
    require_json_content, validate_body,
)
from fleet_api.core.domain_types import EntityKey, Kind, LoadId, Principal, TruckId
from fleet_api.core.enforce_ownership import ensure_owner
from fleet_api.core.errors import ErrorContext, MethodNotAllowedError, NotFoundError
from fleet_api.core.link_projection import project_truck
from fleet_api.core.repository_protocols import DocumentStore
from fleet_api.schemas.truck import TruckCreate, TruckPatch
from fleet_api.services.association_manager import AssociationManager
from fleet_api.services.pagination_engine import PaginationEngine

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/trucks", tags=["trucks"], dependencies=[Depends(get_principal)],
)


async def get_truck_or_404(store: DocumentStore, truck_id: TruckId) -> dict:
    truck = await store.get(EntityKey(Kind.TRUCK, truck_id))
    if truck is None:
        raise NotFoundError("truck", ErrorContext(truck_id=truck_id))
    return truck


async def _saved_truck(store: DocumentStore, key: EntityKey) -> dict:
    """Re-read after a write so the response reflects what the store holds."""
    return await get_truck_or_404(store, TruckId(key.id))


@router.get("", dependencies=[Depends(require_json_accept)])
async def list_trucks(
    request: Request,
    cursor: str | None = Query(None),
    principal: Principal = Depends(get_principal),
    engine: PaginationEngine = Depends(get_pagination_engine),
    base_url: str = Depends(get_base_url),
):
    """List the caller's trucks, one page at a time."""
    return await engine.list_page(
        Kind.TRUCK, base_url, request.url.path, project_truck,
        cursor=cursor, owner_filter=principal.sub,
    )


@router.get("/{truck_id}", dependencies=[Depends(require_json_accept)])
async def get_truck(
    truck_id: int,
    principal: Principal = Depends(get_principal),
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    truck = await get_truck_or_404(store, TruckId(truck_id))
    ensure_owner(principal, truck)
    return project_truck(truck, base_url)


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def create_truck(
    request: Request,
    principal: Principal = Depends(get_principal),
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    """Create a truck owned by the caller, with no loads."""
    values = validate_body(TruckCreate, await read_json_body(request))
    data = {"owner": principal.sub, **values.model_dump(), "loads": []}
    key = await store.save(EntityKey(Kind.TRUCK), data)
    logger.info(f"Created truck {key.id}", extra={"truck_id": key.id})
    return project_truck(await _saved_truck(store, key), base_url)


@router.put(
    "/{truck_id}",
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def replace_truck(
    truck_id: int,
    request: Request,
    principal: Principal = Depends(get_principal),
    store: DocumentStore = Depends(get_store),
    associations: AssociationManager = Depends(get_association_manager),
    base_url: str = Depends(get_base_url),
):
    """Full replace. Every attached load is released and loads resets to []."""
    truck = await get_truck_or_404(store, TruckId(truck_id))
    ensure_owner(principal, truck)
    values = validate_body(TruckCreate, await read_json_body(request))

    await associations.bulk_detach_all(truck)
    data = {"owner": truck["owner"], **values.model_dump(), "loads": []}
    key = await store.save(EntityKey(Kind.TRUCK, truck_id), data)
    return project_truck(await _saved_truck(store, key), base_url)


@router.patch(
    "/{truck_id}",
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def patch_truck(
    truck_id: int,
    request: Request,
    principal: Principal = Depends(get_principal),
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    """Partial update. owner and loads are kept as stored."""
    truck = await get_truck_or_404(store, TruckId(truck_id))
    ensure_owner(principal, truck)
    changes = validate_body(TruckPatch, await read_json_body(request)).changes()

    key = await store.save(EntityKey(Kind.TRUCK, truck_id), {**truck, **changes})
    return project_truck(await _saved_truck(store, key), base_url)


@router.put(
    "/{truck_id}/loads/{load_id}",
    status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def attach_load(
    truck_id: int,
    load_id: int,
    principal: Principal = Depends(get_principal),
    associations: AssociationManager = Depends(get_association_manager),
):
    """Put a load on a truck."""
    await associations.attach(TruckId(truck_id), LoadId(load_id), principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{truck_id}/loads/{load_id}",
    status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def detach_load(
    truck_id: int,
    load_id: int,
    principal: Principal = Depends(get_principal),
    associations: AssociationManager = Depends(get_association_manager),
):
    """Take a load off a truck."""
    await associations.detach(TruckId(truck_id), LoadId(load_id), principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{truck_id}",
    status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_truck(
    truck_id: int,
    principal: Principal = Depends(get_principal),
    store: DocumentStore = Depends(get_store),
    associations: AssociationManager = Depends(get_association_manager),
):
    """Release every load, then delete the truck."""
    truck = await get_truck_or_404(store, TruckId(truck_id))
    ensure_owner(principal, truck)

    await associations.bulk_detach_all(truck)
    await store.delete(EntityKey(Kind.TRUCK, truck_id))
    logger.info(f"Deleted truck {truck_id}", extra={"truck_id": truck_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("", include_in_schema=False)
@router.delete("", include_in_schema=False)
async def truck_collection_not_allowed():
    raise MethodNotAllowedError()
