"""Load Routes — public CRUD and the truck side of load replace/delete.

Tests cover:
    - POST creates with carrier null and a self link; carrier in the body is ignored
    - PATCH keeps carrier; PUT takes the load off its truck and nulls carrier
    - DELETE removes the load from its truck's list before deleting it
    - 404 / 405 / 406 / 415 / 400 with {"Error": message}
"""

import pytest

from fleet_api.core.errors import MESSAGES, StorageError

LOAD = {"vendor": "Initech", "item": "printers", "quantity": 12, "weight": 340.5}


async def test_create_load(client):
    res = await client.post("/loads", json={**LOAD, "carrier": 5})

    assert res.status_code == 201
    body = res.json()
    assert body["carrier"] is None
    assert body["self"] == f"http://test/loads/{body['id']}"
    assert body["vendor"] == "Initech"


async def test_loads_need_no_token(client, create_load):
    load = await create_load()
    assert (await client.get(f"/loads/{load['id']}")).status_code == 200


async def test_create_invalid_quantity_is_400(client):
    res = await client.post("/loads", json={**LOAD, "quantity": -1})
    assert res.status_code == 400
    assert res.json() == {"Error": MESSAGES[400]}


async def test_create_malformed_json_is_400(client):
    res = await client.post(
        "/loads", content="{not json", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


async def test_create_form_body_is_415(client):
    res = await client.post("/loads", data={"vendor": "x"})
    assert res.status_code == 415


async def test_get_missing_load_is_404(client):
    res = await client.get("/loads/9999")
    assert res.status_code == 404
    assert res.json() == {"Error": MESSAGES[404]["load"]}


async def test_get_with_xml_accept_is_406(client, create_load):
    load = await create_load()
    res = await client.get(f"/loads/{load['id']}", headers={"Accept": "application/xml"})
    assert res.status_code == 406


async def test_list_loads_pages(client, create_load):
    for _ in range(7):
        await create_load()

    first = (await client.get("/loads")).json()
    second = (await client.get(first["next"])).json()

    assert first["totalEntities"] == 7
    assert len(first["data"]) == 5
    assert len(second["data"]) == 2
    assert "next" not in second
    ids = [item["id"] for item in first["data"] + second["data"]]
    assert ids == sorted(ids)


async def test_patch_keeps_carrier(client, alice_auth, create_truck, create_load):
    truck = await create_truck()
    load = await create_load()
    await client.put(f"/trucks/{truck['id']}/loads/{load['id']}", headers=alice_auth)

    res = await client.patch(f"/loads/{load['id']}", json={"quantity": 3, "carrier": None})

    body = res.json()
    assert res.status_code == 200
    assert body["quantity"] == 3
    assert body["carrier"]["id"] == truck["id"]


async def test_put_takes_load_off_its_truck(client, alice_auth, create_truck, create_load):
    truck = await create_truck()
    load = await create_load()
    await client.put(f"/trucks/{truck['id']}/loads/{load['id']}", headers=alice_auth)

    res = await client.put(f"/loads/{load['id']}", json=LOAD)

    assert res.status_code == 200
    assert res.json()["carrier"] is None
    assert res.json()["item"] == "printers"
    truck_after = (await client.get(f"/trucks/{truck['id']}", headers=alice_auth)).json()
    assert truck_after["loads"] == []


async def test_put_missing_attribute_is_400_and_keeps_link(
    client, alice_auth, create_truck, create_load,
):
    truck = await create_truck()
    load = await create_load()
    await client.put(f"/trucks/{truck['id']}/loads/{load['id']}", headers=alice_auth)

    res = await client.put(f"/loads/{load['id']}", json={"vendor": "only"})

    assert res.status_code == 400
    truck_after = (await client.get(f"/trucks/{truck['id']}", headers=alice_auth)).json()
    assert [item["id"] for item in truck_after["loads"]] == [load["id"]]


async def test_delete_removes_load_from_truck(client, alice_auth, create_truck, create_load):
    truck = await create_truck()
    kept, dropped = await create_load(), await create_load()
    for load in (kept, dropped):
        await client.put(f"/trucks/{truck['id']}/loads/{load['id']}", headers=alice_auth)

    res = await client.delete(f"/loads/{dropped['id']}")

    assert res.status_code == 204
    assert (await client.get(f"/loads/{dropped['id']}")).status_code == 404
    truck_after = (await client.get(f"/trucks/{truck['id']}", headers=alice_auth)).json()
    assert [item["id"] for item in truck_after["loads"]] == [kept["id"]]


async def test_delete_missing_load_is_404(client):
    assert (await client.delete("/loads/9999")).status_code == 404


async def test_collection_put_and_delete_are_405(client):
    assert (await client.put("/loads", json=LOAD)).status_code == 405
    assert (await client.delete("/loads")).status_code == 405


# ─── non-finite numbers ──────────────────────────────────────────

@pytest.mark.parametrize("raw", [
    '{"vendor": "a", "item": "b", "quantity": NaN, "weight": 1}',
    '{"vendor": "a", "item": "b", "quantity": 1, "weight": Infinity}',
    '{"vendor": "a", "item": "b", "quantity": 1, "weight": -Infinity}',
    '{"vendor": "a", "item": "b", "quantity": 1, "weight": 1e999}',
])
async def test_non_finite_number_is_400_and_nothing_stored(client, raw):
    res = await client.post(
        "/loads", content=raw, headers={"Content-Type": "application/json"},
    )

    assert res.status_code == 400
    listing = await client.get("/loads")
    assert listing.status_code == 200
    assert listing.json()["totalEntities"] == 0


async def test_patch_with_overflowing_number_is_400(client, create_load):
    load = await create_load()
    res = await client.patch(
        f"/loads/{load['id']}", content='{"weight": 1e999}',
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert (await client.get(f"/loads/{load['id']}")).json()["weight"] == load["weight"]


# ─── storage failures ────────────────────────────────────────────

async def test_storage_failure_is_503_without_internal_detail(app, client, store):
    class BrokenStore:
        def __getattr__(self, name):
            return getattr(store, name)

        async def save(self, key, data):
            raise StorageError("id 7 belongs to kind Load", "save")

    app.state.store = BrokenStore()
    res = await client.post("/loads", json=LOAD)

    assert res.status_code == 503
    assert res.json() == {"Error": MESSAGES[503]}
