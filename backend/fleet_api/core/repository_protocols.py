"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every row a DocumentStore returns carries its numeric "id"

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO;
      the pure helpers in core/ never await
    - One generic DocumentStore instead of per-kind repositories: the store is
      schemaless and keyed by (kind, id), entity shape lives in schemas/
"""

from dataclasses import dataclass, field
from typing import Protocol

from fleet_api.core.domain_types import EntityKey, Kind, Principal


@dataclass
class QueryPage:
    """One slice of a kind in the store's stable order."""
    rows: list[dict] = field(default_factory=list)
    more_results: bool = False
    end_cursor: str | None = None


class DocumentStore(Protocol):
    """Contract for schemaless document persistence, implemented by shell."""
    async def get(self, key: EntityKey) -> dict | None: ...
    async def list_kind(
        self, kind: Kind, owner: str | None = None,
    ) -> list[dict]: ...
    async def count(self, kind: Kind) -> int: ...
    async def query(
        self, kind: Kind, limit: int,
        cursor: str | None = None, owner: str | None = None,
    ) -> QueryPage: ...
    async def save(self, key: EntityKey, data: dict) -> EntityKey: ...
    async def delete(self, key: EntityKey) -> None: ...


class TokenVerifier(Protocol):
    """Contract for bearer token verification, implemented by shell."""
    def verify(self, token: str) -> Principal: ...
