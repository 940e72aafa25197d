"""Load Routes — unscoped CRUD over loads.

Invariants:
    - No authentication: loads are not owned
    - Check order: 415 → 406 → 404 → 400 → mutation
    - carrier is never set from a body; POST creates with carrier null
    - PUT and DELETE first remove the load from its carrier's list (truck side first),
      then write the load; PUT leaves carrier null
    - PATCH keeps carrier as stored
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from fleet_api.api.dependencies import (
    get_association_manager, get_base_url, get_pagination_engine, get_store,
    read_json_body, require_json_accept, require_json_content, validate_body,
)
from fleet_api.core.domain_types import EntityKey, Kind, LoadId
from fleet_api.core.errors import ErrorContext, MethodNotAllowedError, NotFoundError
from fleet_api.core.link_projection import project_load
from fleet_api.core.repository_protocols import DocumentStore
from fleet_api.schemas.load import LoadCreate, LoadPatch
from fleet_api.services.association_manager import AssociationManager
from fleet_api.services.pagination_engine import PaginationEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/loads", tags=["loads"])


async def get_load_or_404(store: DocumentStore, load_id: LoadId) -> dict:
    load = await store.get(EntityKey(Kind.LOAD, load_id))
    if load is None:
        raise NotFoundError("load", ErrorContext(load_id=load_id))
    return load


@router.get("", dependencies=[Depends(require_json_accept)])
async def list_loads(
    request: Request,
    cursor: str | None = Query(None),
    engine: PaginationEngine = Depends(get_pagination_engine),
    base_url: str = Depends(get_base_url),
):
    return await engine.list_page(
        Kind.LOAD, base_url, request.url.path, project_load, cursor=cursor,
    )


@router.get("/{load_id}", dependencies=[Depends(require_json_accept)])
async def get_load(
    load_id: int,
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    return project_load(await get_load_or_404(store, LoadId(load_id)), base_url)


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def create_load(
    request: Request,
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    values = validate_body(LoadCreate, await read_json_body(request))
    key = await store.save(
        EntityKey(Kind.LOAD), {**values.model_dump(), "carrier": None},
    )
    logger.info(f"Created load {key.id}", extra={"load_id": key.id})
    return project_load(await get_load_or_404(store, LoadId(key.id)), base_url)


@router.put(
    "/{load_id}",
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def replace_load(
    load_id: int,
    request: Request,
    store: DocumentStore = Depends(get_store),
    associations: AssociationManager = Depends(get_association_manager),
    base_url: str = Depends(get_base_url),
):
    """Full replace. The load comes off its truck and carrier resets to null."""
    load = await get_load_or_404(store, LoadId(load_id))
    values = validate_body(LoadCreate, await read_json_body(request))

    await associations.detach_from_carrier(load)
    await store.save(
        EntityKey(Kind.LOAD, load_id), {**values.model_dump(), "carrier": None},
    )
    return project_load(await get_load_or_404(store, LoadId(load_id)), base_url)


@router.patch(
    "/{load_id}",
    dependencies=[Depends(require_json_content), Depends(require_json_accept)],
)
async def patch_load(
    load_id: int,
    request: Request,
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    load = await get_load_or_404(store, LoadId(load_id))
    changes = validate_body(LoadPatch, await read_json_body(request)).changes()

    await store.save(EntityKey(Kind.LOAD, load_id), {**load, **changes})
    return project_load(await get_load_or_404(store, LoadId(load_id)), base_url)


@router.delete(
    "/{load_id}",
    status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_load(
    load_id: int,
    store: DocumentStore = Depends(get_store),
    associations: AssociationManager = Depends(get_association_manager),
):
    """Remove the load from its carrier's list, then delete it."""
    load = await get_load_or_404(store, LoadId(load_id))

    await associations.detach_from_carrier(load)
    await store.delete(EntityKey(Kind.LOAD, load_id))
    logger.info(f"Deleted load {load_id}", extra={"load_id": load_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("", include_in_schema=False)
@router.delete("", include_in_schema=False)
async def load_collection_not_allowed():
    raise MethodNotAllowedError()
