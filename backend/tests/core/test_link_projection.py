"""Link Projection — self links, carrier and loads expansion.

Tests cover:
    - load carrier null stays null; set carrier becomes {id, self}
    - truck loads become [{id, self}] in stored order
    - projection never mutates its input
    - projecting twice equals projecting once
"""

from fleet_api.core.link_projection import (
    project_load, project_truck, project_user, self_link,
)

BASE = "https://fleet.example.com"


def test_self_link_strips_trailing_slash():
    assert self_link(BASE + "/", "trucks", 7) == f"{BASE}/trucks/7"


def test_project_load_without_carrier():
    load = {"id": 3, "vendor": "Acme", "carrier": None}
    assert project_load(load, BASE) == {
        "id": 3, "vendor": "Acme", "carrier": None, "self": f"{BASE}/loads/3",
    }


def test_project_load_with_carrier():
    projected = project_load({"id": 3, "carrier": 9}, BASE)
    assert projected["carrier"] == {"id": 9, "self": f"{BASE}/trucks/9"}


def test_project_load_missing_carrier_attribute_is_null():
    assert project_load({"id": 3}, BASE)["carrier"] is None


def test_project_truck_expands_loads_in_order():
    projected = project_truck({"id": 1, "owner": "a", "loads": [5, 2, 8]}, BASE)
    assert projected["loads"] == [
        {"id": 5, "self": f"{BASE}/loads/5"},
        {"id": 2, "self": f"{BASE}/loads/2"},
        {"id": 8, "self": f"{BASE}/loads/8"},
    ]
    assert projected["self"] == f"{BASE}/trucks/1"
    assert projected["owner"] == "a"


def test_project_truck_empty_loads():
    assert project_truck({"id": 1, "loads": []}, BASE)["loads"] == []


def test_projection_does_not_mutate_input():
    truck = {"id": 1, "loads": [5]}
    load = {"id": 5, "carrier": 1}
    project_truck(truck, BASE)
    project_load(load, BASE)
    assert truck == {"id": 1, "loads": [5]}
    assert load == {"id": 5, "carrier": 1}


def test_projection_is_idempotent():
    truck = project_truck({"id": 1, "loads": [5, 6]}, BASE)
    load = project_load({"id": 5, "carrier": 1}, BASE)
    user = project_user({"id": 2, "sub": "s"}, BASE)
    assert project_truck(truck, BASE) == truck
    assert project_load(load, BASE) == load
    assert project_user(user, BASE) == user
