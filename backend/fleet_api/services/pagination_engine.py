"""Pagination Engine — fixed-size cursor pages over one kind, decorated with links.

Invariants:
    - A page holds at most page_size rows, in the store's stable (ascending id) order
    - "next" is present iff the store reports more rows after this page
    - totalEntities counts the whole kind, ignoring owner_filter
    - owner_filter is applied by the store query, so a page is only short when
      no more matching rows exist

Caveats:
    - Rows written between page requests may be skipped or repeated; no snapshot is held
    - totalEntities is a separate count query, so it can disagree with the pages
      under concurrent writes
"""

import logging
from typing import Callable

from fleet_api.core.domain_types import Kind, PAGE_SIZES
from fleet_api.core.pagination import build_page, next_link
from fleet_api.core.repository_protocols import DocumentStore

logger = logging.getLogger(__name__)


class PaginationEngine:
    """Lists one page of a kind through a DocumentStore."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def list_page(
        self,
        kind: Kind,
        base_url: str,
        path: str,
        project: Callable[[dict, str], dict],
        cursor: str | None = None,
        page_size: int | None = None,
        owner_filter: str | None = None,
    ) -> dict:
        size = page_size or PAGE_SIZES[kind]
        page = await self._store.query(
            kind, size, cursor=cursor, owner=owner_filter,
        )
        total = await self._store.count(kind)

        next_url = None
        if page.more_results and page.end_cursor:
            next_url = next_link(base_url, path, page.end_cursor)

        logger.debug(
            f"Listed {len(page.rows)} {kind.value} row(s), more={page.more_results}",
            extra={"kind": kind.value, "owner": owner_filter},
        )
        return build_page(
            total, [project(row, base_url) for row in page.rows], next_url,
        )
