"""User Routes — public user listing and the caller's lazily created profile.

Invariants:
    - GET /users/me requires a verified bearer token and always answers 200:
      the User is created on first access when no stored user has the token's sub
    - GET /users and GET /users/{id} are public; the list is paged like the other collections
    - /users/me is declared before /users/{id} so "me" never parses as an id
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from fleet_api.api.dependencies import (
    get_base_url, get_pagination_engine, get_principal, get_store,
    get_user_directory, require_json_accept,
)
from fleet_api.core.domain_types import EntityKey, Kind, Principal, UserId
from fleet_api.core.errors import ErrorContext, NotFoundError
from fleet_api.core.link_projection import project_user
from fleet_api.core.repository_protocols import DocumentStore
from fleet_api.services.pagination_engine import PaginationEngine
from fleet_api.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


async def get_user_or_404(store: DocumentStore, user_id: UserId) -> dict:
    user = await store.get(EntityKey(Kind.USER, user_id))
    if user is None:
        raise NotFoundError("user", ErrorContext(debug_info={"user_id": user_id}))
    return user


@router.get("", dependencies=[Depends(require_json_accept)])
async def list_users(
    request: Request,
    cursor: str | None = Query(None),
    engine: PaginationEngine = Depends(get_pagination_engine),
    base_url: str = Depends(get_base_url),
):
    return await engine.list_page(
        Kind.USER, base_url, request.url.path, project_user, cursor=cursor,
    )


@router.get("/me", dependencies=[Depends(require_json_accept)])
async def get_my_profile(
    principal: Principal = Depends(get_principal),
    users: UserDirectory = Depends(get_user_directory),
    base_url: str = Depends(get_base_url),
):
    """Profile of the caller, created on first access."""
    user, _ = await users.get_or_create(principal)
    return project_user(user, base_url)


@router.get("/{user_id}", dependencies=[Depends(require_json_accept)])
async def get_user(
    user_id: int,
    store: DocumentStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
):
    return project_user(await get_user_or_404(store, UserId(user_id)), base_url)
