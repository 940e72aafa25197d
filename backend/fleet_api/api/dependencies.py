"""API Dependencies — injection of store, services and principal; request guards.

Invariants:
    - The DocumentStore and TokenVerifier are read from app.state, set once in lifespan
    - get_principal never returns without a verified sub; otherwise UnauthorizedError (401)
    - require_json_content (415) and require_json_accept (406) run before the route body
    - read_json_body only accepts a JSON object; anything else is a ValidationError (400)
    - NaN and Infinity literals are rejected while parsing (400)

Design Decisions:
    - Guards are dependencies listed on the route decorator so FastAPI runs them in
      declaration order (415 before 406), ahead of any store access
    - Bodies parsed by hand instead of as FastAPI body params: a 400 must not
      pre-empt the 404/403 checks that the handler performs first
    - get_principal is a plain def: the verifier may block on a JWKS fetch, so FastAPI
      runs it in the threadpool
"""

import json
from typing import TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError as PydanticValidationError

from fleet_api.config import Settings, get_settings
from fleet_api.core.domain_types import Principal
from fleet_api.core.enforce_media_types import accepts_json, is_json_content
from fleet_api.core.errors import (
    NotAcceptableError, UnauthorizedError, UnsupportedMediaTypeError,
    ValidationError,
)
from fleet_api.core.repository_protocols import DocumentStore, TokenVerifier
from fleet_api.services.association_manager import AssociationManager
from fleet_api.services.pagination_engine import PaginationEngine
from fleet_api.services.user_directory import UserDirectory

bearer_scheme = HTTPBearer(auto_error=False)

M = TypeVar("M", bound=BaseModel)


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store not initialized")
    return store


def get_token_verifier(request: Request) -> TokenVerifier:
    verifier = getattr(request.app.state, "token_verifier", None)
    if verifier is None:
        raise RuntimeError("Token verifier not initialized")
    return verifier


def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return verifier.verify(credentials.credentials)


def get_association_manager(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AssociationManager:
    return AssociationManager(
        store, max_concurrent_writes=settings.association_write_concurrency,
    )


def get_pagination_engine(
    store: DocumentStore = Depends(get_store),
) -> PaginationEngine:
    return PaginationEngine(store)


def get_user_directory(
    store: DocumentStore = Depends(get_store),
) -> UserDirectory:
    return UserDirectory(store)


def get_base_url(
    request: Request, settings: Settings = Depends(get_settings),
) -> str:
    """Scheme://host the links are built on; public_base_url wins when set."""
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


def require_json_accept(request: Request) -> None:
    if not accepts_json(request.headers.get("accept")):
        raise NotAcceptableError()


def require_json_content(request: Request) -> None:
    if not is_json_content(request.headers.get("content-type")):
        raise UnsupportedMediaTypeError()


def _reject_constant(token: str):
    raise ValueError(f"non-finite number {token}")


async def read_json_body(request: Request) -> dict:
    raw = await request.body()
    try:
        body = json.loads(raw, parse_constant=_reject_constant) if raw else None
    except ValueError:
        raise ValidationError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise ValidationError()
    return body


def validate_body(schema: type[M], body: dict) -> M:
    """Validate body against schema, mapping pydantic errors to ValidationError."""
    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        field = ".".join(str(loc) for loc in first.get("loc", ())) or None
        raise ValidationError(field=field)
