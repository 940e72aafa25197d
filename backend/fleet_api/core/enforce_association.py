"""Association Enforcement — pure preconditions of the truck ↔ load protocol.

Invariants:
    - check_* functions are PURE: they inspect the two documents and raise, never write
    - A load is attachable only if its carrier is null AND the truck does not list it
    - A pair is detachable only if the truck lists the load AND load.carrier == truck id
    - with_load / without_load return new lists; the truck's list is never mutated in place

Design Decisions:
    - Both sides checked on every attach/detach: the mirror can be half-applied after a
      failed write, and either side alone can lie
    - Ids normalised to int before comparison: path params and stored values must agree
"""

from fleet_api.core.errors import (
    AlreadyAssignedError, ErrorContext, NotAssociatedError,
)


def load_ids(truck: dict) -> list[int]:
    return [int(load_id) for load_id in truck.get("loads") or []]


def carrier_of(load: dict) -> int | None:
    carrier = load.get("carrier")
    return int(carrier) if carrier is not None else None


def check_attachable(truck: dict, load: dict) -> None:
    """Raise AlreadyAssignedError unless load can be put on truck."""
    if load["id"] in load_ids(truck) or carrier_of(load) is not None:
        raise AlreadyAssignedError(
            ErrorContext(truck_id=truck["id"], load_id=load["id"]),
        )


def check_detachable(truck: dict, load: dict) -> None:
    """Raise NotAssociatedError unless truck and load point at each other."""
    if load["id"] not in load_ids(truck) or carrier_of(load) != truck["id"]:
        raise NotAssociatedError(
            ErrorContext(truck_id=truck["id"], load_id=load["id"]),
        )


def with_load(truck: dict, load_id: int) -> list[int]:
    ids = load_ids(truck)
    if load_id not in ids:
        ids.append(load_id)
    return ids


def without_load(truck: dict, load_id: int) -> list[int]:
    return [existing for existing in load_ids(truck) if existing != load_id]
