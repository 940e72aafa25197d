"""Association Manager — the truck ↔ load relationship protocol over two documents.

Invariants:
    - After attach succeeds: load.carrier == truck.id AND truck.loads contains load.id
    - After detach succeeds: load.carrier is None AND truck.loads lacks load.id
    - Failed preconditions raise before any write (NotFoundError, ForbiddenError,
      AlreadyAssignedError, NotAssociatedError)
    - Write order is fixed: truck document first, load document second
    - Load rewrites preserve every field except carrier

Half-applied states (no multi-document transaction in the store):
    - attach interrupted after the truck write: truck lists the load, load.carrier is None.
      A retried attach answers AlreadyAssigned; detach answers NotAssociated.
    - detach interrupted after the truck write: truck no longer lists the load,
      load.carrier still names the truck. The load cannot be attached elsewhere
      until its carrier is cleared (load PUT or truck delete/PUT do this).

Design Decisions:
    - Read-modify-write re-reads each document right before writing it, so the
      race window is one document round-trip, not the whole request
    - No locking or compare-and-swap: two concurrent attaches of one load can both
      pass the precondition check (lost update). Accepted; the store offers no
      conditional write as used here
    - bulk_detach_all starts every carrier write and awaits them all, reporting
      failures instead of raising. Fan-out is bounded by max_concurrent_writes so a
      truck with many loads cannot drain the connection pool
"""

import asyncio
import logging
from dataclasses import dataclass, field

from fleet_api.core.domain_types import EntityKey, Kind, LoadId, Principal, TruckId
from fleet_api.core.enforce_association import (
    carrier_of, check_attachable, check_detachable, load_ids,
    with_load, without_load,
)
from fleet_api.core.enforce_ownership import ensure_owner
from fleet_api.core.errors import ErrorContext, NotFoundError
from fleet_api.core.repository_protocols import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class BulkDetachResult:
    """Outcome of clearing the carrier of every load a truck lists."""
    detached: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class AssociationManager:
    """Attach, detach and bulk-detach loads on trucks."""

    def __init__(self, store: DocumentStore, max_concurrent_writes: int = 8):
        self._store = store
        self._max_concurrent_writes = max(1, max_concurrent_writes)

    async def _require(self, kind: Kind, entity_id: int, resource: str) -> dict:
        entity = await self._store.get(EntityKey(kind, entity_id))
        if entity is None:
            ctx = ErrorContext(
                truck_id=entity_id if kind is Kind.TRUCK else None,
                load_id=entity_id if kind is Kind.LOAD else None,
            )
            raise NotFoundError(resource, ctx)
        return entity

    async def _write_truck_loads(self, truck_id: TruckId, update) -> None:
        truck = await self._require(Kind.TRUCK, truck_id, "truck")
        truck["loads"] = update(truck)
        await self._store.save(EntityKey(Kind.TRUCK, truck_id), truck)

    async def _write_carrier(self, load_id: LoadId, carrier: TruckId | None) -> dict:
        load = await self._require(Kind.LOAD, load_id, "load")
        load["carrier"] = carrier
        await self._store.save(EntityKey(Kind.LOAD, load_id), load)
        return load

    async def attach(
        self, truck_id: TruckId, load_id: LoadId, principal: Principal | None = None,
    ) -> None:
        """Put load on truck. Truck side written first."""
        truck = await self._require(Kind.TRUCK, truck_id, "truck")
        if principal is not None:
            ensure_owner(principal, truck)
        load = await self._require(Kind.LOAD, load_id, "load")
        check_attachable(truck, load)

        await self._write_truck_loads(truck_id, lambda t: with_load(t, load_id))
        await self._write_carrier(load_id, truck_id)
        logger.info(
            f"Attached load {load_id} to truck {truck_id}",
            extra={"truck_id": truck_id, "load_id": load_id},
        )

    async def detach(
        self, truck_id: TruckId, load_id: LoadId, principal: Principal | None = None,
    ) -> None:
        """Take load off truck. Truck side written first."""
        truck = await self._require(Kind.TRUCK, truck_id, "truck")
        if principal is not None:
            ensure_owner(principal, truck)
        load = await self._require(Kind.LOAD, load_id, "load")
        check_detachable(truck, load)

        await self._write_truck_loads(truck_id, lambda t: without_load(t, load_id))
        await self._write_carrier(load_id, None)
        logger.info(
            f"Detached load {load_id} from truck {truck_id}",
            extra={"truck_id": truck_id, "load_id": load_id},
        )

    async def _release_load(self, load_id: LoadId, truck_id: TruckId) -> bool:
        """Clear carrier if it still names truck_id. False when skipped."""
        load = await self._store.get(EntityKey(Kind.LOAD, load_id))
        if load is None or carrier_of(load) != truck_id:
            return False
        load["carrier"] = None
        await self._store.save(EntityKey(Kind.LOAD, load_id), load)
        return True

    async def bulk_detach_all(self, truck: dict) -> BulkDetachResult:
        """Clear the carrier of every load the truck lists. Never raises on write failures."""
        truck_id = truck["id"]
        ids = load_ids(truck)
        limit = asyncio.Semaphore(self._max_concurrent_writes)

        async def release(load_id: LoadId) -> bool:
            async with limit:
                return await self._release_load(load_id, truck_id)

        outcomes = await asyncio.gather(
            *(release(load_id) for load_id in ids), return_exceptions=True,
        )

        result = BulkDetachResult()
        for load_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                result.failed.append(load_id)
                logger.error(
                    f"Failed to clear carrier of load {load_id}: {outcome}",
                    extra={"truck_id": truck_id, "load_id": load_id},
                )
            elif outcome:
                result.detached.append(load_id)
            else:
                result.skipped.append(load_id)

        if ids:
            logger.info(
                f"Bulk detach for truck {truck_id}: "
                f"{len(result.detached)} cleared, {len(result.skipped)} skipped, "
                f"{len(result.failed)} failed",
                extra={
                    "truck_id": truck_id,
                    "attempted": len(ids),
                    "failed": len(result.failed),
                },
            )
        return result

    async def detach_from_carrier(self, load: dict) -> bool:
        """Remove load from its carrier's list. Leaves load.carrier untouched."""
        truck_id = carrier_of(load)
        if truck_id is None:
            return False
        truck = await self._store.get(EntityKey(Kind.TRUCK, truck_id))
        if truck is None:
            logger.warning(
                f"Load {load['id']} names missing carrier {truck_id}",
                extra={"truck_id": truck_id, "load_id": load["id"]},
            )
            return False
        truck["loads"] = without_load(truck, load["id"])
        await self._store.save(EntityKey(Kind.TRUCK, truck_id), truck)
        return True
