"""Service test fixtures — seeded trucks and loads in the test store."""

import pytest

from fleet_api.core.domain_types import EntityKey, Kind
from fleet_api.services.association_manager import AssociationManager


def truck_data(owner: str, **overrides) -> dict:
    data = {
        "owner": owner,
        "truck_vin": "1HGBH41JXMN109186",
        "trailer_vin": "1GRAA0621YB700001",
        "truck_model": "Volvo VNL 860",
        "trailer_type": "dry van",
        "trailer_capacity": 45000,
        "loads": [],
    }
    data.update(overrides)
    return data


def load_data(**overrides) -> dict:
    data = {
        "vendor": "Acme Corp",
        "item": "pallets",
        "quantity": 20,
        "weight": 1800.5,
        "carrier": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def associations(store):
    return AssociationManager(store, max_concurrent_writes=1)


@pytest.fixture
def seed_truck(store, alice):
    """Factory: store a truck owned by alice (or owner=...) and return it."""
    async def _seed(**overrides) -> dict:
        data = truck_data(alice.sub, **overrides)
        key = await store.save(EntityKey(Kind.TRUCK), data)
        return await store.get(key)
    return _seed


@pytest.fixture
def seed_load(store):
    async def _seed(**overrides) -> dict:
        key = await store.save(EntityKey(Kind.LOAD), load_data(**overrides))
        return await store.get(key)
    return _seed
