"""Ownership Enforcement — capability check between a principal and an owned resource.

Invariants:
    - authorize is PURE: returns a bool, never raises, never touches IO
    - Resources without an "owner" attribute are never authorized
    - Identity source is irrelevant: only Principal.sub is compared
"""

from fleet_api.core.domain_types import Principal
from fleet_api.core.errors import ErrorContext, ForbiddenError


def authorize(principal: Principal, resource: dict) -> bool:
    owner = resource.get("owner")
    return owner is not None and owner == principal.sub


def ensure_owner(principal: Principal, resource: dict) -> None:
    """Raise ForbiddenError unless principal owns resource."""
    if not authorize(principal, resource):
        raise ForbiddenError(ErrorContext(truck_id=resource.get("id")))
