"""User Directory — lazily materialises a stored User for an authenticated subject.

Invariants:
    - At most one User is created per sub by a single caller sequence
    - An existing User is returned unchanged (name is not refreshed from the token)

Design Decisions:
    - Lookup is a kind scan filtered in Python: users are few and sub is not a
      promoted column
    - Two first-time requests for the same sub racing each other can both create a
      User; get_or_create returns the lowest id when duplicates exist
"""

import logging

from fleet_api.core.domain_types import EntityKey, Kind, Principal
from fleet_api.core.repository_protocols import DocumentStore

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def find_by_sub(self, sub: str) -> dict | None:
        users = await self._store.list_kind(Kind.USER)
        matches = [u for u in users if u.get("sub") == sub]
        return min(matches, key=lambda u: u["id"]) if matches else None

    async def get_or_create(self, principal: Principal) -> tuple[dict, bool]:
        """Return (user, created)."""
        existing = await self.find_by_sub(principal.sub)
        if existing is not None:
            return existing, False

        data = {"name": principal.name or principal.sub, "sub": principal.sub}
        key = await self._store.save(EntityKey(Kind.USER), data)
        logger.info(f"Created user {key.id} for new subject", extra={"kind": Kind.USER.value})
        return {"id": key.id, **data}, True
