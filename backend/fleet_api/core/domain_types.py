"""Domain Types — kinds, identifiers and fixed paging constants.

Invariants:
    - Kind values are the stored partition names ("Truck", "Load", "User")
    - TruckId, LoadId, UserId wrap int; ids are compared as integers everywhere
    - PAGE_SIZES holds exactly one fixed page size per listed kind

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for Kind: stored verbatim in the documents.kind column
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TruckId = NewType("TruckId", int)
LoadId = NewType("LoadId", int)
UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Kind(str, Enum):
    """Stored entity partitions, analogous to table names."""
    TRUCK = "Truck"
    LOAD = "Load"
    USER = "User"


# ─── Keys & Principals ───────────────────────────────────────────

@dataclass(frozen=True)
class EntityKey:
    """Address of a stored document. An incomplete key (id=None) asks the store to assign one."""
    kind: Kind
    id: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as produced by the token verifier."""
    sub: str
    name: str | None = None
    claims: dict = field(default_factory=dict, compare=False)


# ─── Paging ──────────────────────────────────────────────────────

PAGE_SIZES: dict[Kind, int] = {
    Kind.TRUCK: 5,
    Kind.LOAD: 5,
    Kind.USER: 5,
}

# Attributes every caller may set; server-managed ones (id, owner, loads, carrier) excluded
TRUCK_FIELDS: tuple[str, ...] = (
    "truck_vin", "trailer_vin", "truck_model", "trailer_type", "trailer_capacity",
)
LOAD_FIELDS: tuple[str, ...] = ("vendor", "item", "quantity", "weight")
