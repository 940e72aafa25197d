"""SQL Document Store — DocumentStore implementation over the documents table.

Invariants:
    - Every public method opens, uses and closes its own session (stateless per call)
    - Returned rows are plain dicts with "id" first; callers may mutate them freely
    - save() with an incomplete key inserts and returns the completed key;
      save() with a complete key replaces the whole document (upsert)
    - query() returns rows in ascending id order and reads limit + 1 rows to
      decide more_results without a second round-trip
    - Two saves are never atomic together; there is no cross-call transaction

Design Decisions:
    - Keyset pagination on the integer primary key: the "native key order" of the store
    - owner filter applied in SQL on the promoted owner column, so owner-scoped pages
      are always full when enough matching rows exist
    - delete() of a missing key is a no-op, matching document-store semantics
"""

import logging

from sqlalchemy import select, func, delete as sa_delete

from fleet_api.core.domain_types import EntityKey, Kind
from fleet_api.core.errors import StorageError
from fleet_api.core.pagination import decode_cursor, encode_cursor
from fleet_api.core.repository_protocols import QueryPage
from fleet_api.infrastructure.database import DatabaseSessionManager
from fleet_api.models.document import Document

logger = logging.getLogger(__name__)


def _to_row(document: Document) -> dict:
    row = {"id": document.id}
    row.update({k: v for k, v in (document.data or {}).items() if k != "id"})
    return row


def _payload(data: dict) -> dict:
    return {k: v for k, v in data.items() if k != "id"}


class SqlDocumentStore:
    """Schemaless (kind, id) document store backed by SQLAlchemy."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get(self, key: EntityKey) -> dict | None:
        if not key.is_complete:
            return None
        async with self._db.session() as session:
            result = await session.execute(
                select(Document)
                .where(Document.kind == key.kind.value)
                .where(Document.id == key.id),
            )
            document = result.scalar_one_or_none()
            return _to_row(document) if document else None

    async def list_kind(
        self, kind: Kind, owner: str | None = None,
    ) -> list[dict]:
        query = select(Document).where(Document.kind == kind.value)
        if owner is not None:
            query = query.where(Document.owner == owner)
        async with self._db.session() as session:
            result = await session.execute(query.order_by(Document.id))
            return [_to_row(d) for d in result.scalars().all()]

    async def count(self, kind: Kind) -> int:
        async with self._db.session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(Document)
                .where(Document.kind == kind.value),
            )
            return int(result.scalar_one())

    async def query(
        self, kind: Kind, limit: int,
        cursor: str | None = None, owner: str | None = None,
    ) -> QueryPage:
        if limit < 1:
            raise ValueError("limit must be positive")
        query = select(Document).where(Document.kind == kind.value)
        if owner is not None:
            query = query.where(Document.owner == owner)
        if cursor:
            query = query.where(Document.id > decode_cursor(cursor))
        query = query.order_by(Document.id).limit(limit + 1)

        async with self._db.session() as session:
            result = await session.execute(query)
            documents = list(result.scalars().all())

        more_results = len(documents) > limit
        rows = [_to_row(d) for d in documents[:limit]]
        end_cursor = encode_cursor(rows[-1]["id"]) if rows else cursor
        return QueryPage(
            rows=rows, more_results=more_results, end_cursor=end_cursor,
        )

    async def save(self, key: EntityKey, data: dict) -> EntityKey:
        payload = _payload(data)
        owner = payload.get("owner")
        async with self._db.session() as session:
            if key.is_complete:
                document = await session.get(Document, key.id)
                if document is not None and document.kind != key.kind.value:
                    raise StorageError(
                        f"id {key.id} belongs to kind {document.kind}", "save",
                    )
                if document is None:
                    document = Document(id=key.id, kind=key.kind.value)
                    session.add(document)
                document.data = payload
                document.owner = owner
            else:
                document = Document(kind=key.kind.value, owner=owner, data=payload)
                session.add(document)
            await session.flush()
            saved = EntityKey(key.kind, document.id)
            await session.commit()
        logger.debug(
            f"Saved {key.kind.value} {saved.id}",
            extra={"kind": key.kind.value},
        )
        return saved

    async def delete(self, key: EntityKey) -> None:
        if not key.is_complete:
            return
        async with self._db.session() as session:
            await session.execute(
                sa_delete(Document)
                .where(Document.kind == key.kind.value)
                .where(Document.id == key.id),
            )
            await session.commit()
        logger.debug(
            f"Deleted {key.kind.value} {key.id}",
            extra={"kind": key.kind.value},
        )
