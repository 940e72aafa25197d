"""Domain Types — kinds, keys, principals and paging constants."""

import pytest

from fleet_api.core.domain_types import (
    LOAD_FIELDS, PAGE_SIZES, TRUCK_FIELDS,
    EntityKey, Kind, LoadId, Principal, TruckId, UserId,
)


def test_identity_types_wrap_int():
    assert TruckId(3) == 3
    assert LoadId(4) == 4
    assert UserId(5) == 5


def test_kind_values_are_partition_names():
    assert [k.value for k in Kind] == ["Truck", "Load", "User"]


def test_incomplete_key():
    assert not EntityKey(Kind.TRUCK).is_complete
    assert EntityKey(Kind.TRUCK, 1).is_complete


def test_entity_key_is_frozen():
    key = EntityKey(Kind.LOAD, 1)
    with pytest.raises(AttributeError):
        key.id = 2


def test_principal_equality_ignores_claims():
    assert Principal("s", claims={"a": 1}) == Principal("s", claims={"b": 2})


def test_every_kind_has_a_page_size_of_five():
    assert PAGE_SIZES == {Kind.TRUCK: 5, Kind.LOAD: 5, Kind.USER: 5}


def test_server_managed_fields_not_settable():
    for managed in ("id", "owner", "loads", "carrier", "self"):
        assert managed not in TRUCK_FIELDS
        assert managed not in LOAD_FIELDS
