"""Link Projection — turns stored entities into representations with hyperlinks.

Invariants:
    - Pure: inputs are never mutated, a new dict is always returned
    - Idempotent for a fixed base_url: projecting a projected value changes nothing
    - A null carrier stays null; a set carrier becomes {id, self}
    - Truck.loads order is preserved exactly

Design Decisions:
    - base_url passed in, never read from a request: keeps projection testable without HTTP
    - Already-projected references ({"id": ...} dicts) are unwrapped before re-linking,
      which is what makes projection idempotent
"""


def _ref_id(value):
    """Id of a reference that may already be projected."""
    if isinstance(value, dict):
        return value.get("id")
    return value


def self_link(base_url: str, collection: str, entity_id) -> str:
    return f"{base_url.rstrip('/')}/{collection}/{entity_id}"


def project_load(load: dict, base_url: str) -> dict:
    """Add load self link and expand carrier into {id, self}."""
    projected = dict(load)
    carrier_id = _ref_id(load.get("carrier"))
    if carrier_id is not None:
        projected["carrier"] = {
            "id": carrier_id,
            "self": self_link(base_url, "trucks", carrier_id),
        }
    else:
        projected["carrier"] = None
    projected["self"] = self_link(base_url, "loads", load["id"])
    return projected


def project_truck(truck: dict, base_url: str) -> dict:
    """Add truck self link and expand every load id into {id, self}."""
    projected = dict(truck)
    projected["loads"] = [
        {"id": load_id, "self": self_link(base_url, "loads", load_id)}
        for load_id in (_ref_id(item) for item in truck.get("loads") or [])
    ]
    projected["self"] = self_link(base_url, "trucks", truck["id"])
    return projected


def project_user(user: dict, base_url: str) -> dict:
    projected = dict(user)
    projected["self"] = self_link(base_url, "users", user["id"])
    return projected
