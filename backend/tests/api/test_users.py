"""User Routes — lazy profile creation and public listing."""

from fleet_api.core.errors import MESSAGES


async def test_me_requires_token(client):
    res = await client.get("/users/me")
    assert res.status_code == 401


async def test_me_creates_user_on_first_access(client, alice_auth, alice):
    res = await client.get("/users/me", headers=alice_auth)

    body = res.json()
    assert res.status_code == 200
    assert body["sub"] == alice.sub
    assert body["name"] == alice.name
    assert body["self"] == f"http://test/users/{body['id']}"


async def test_me_is_stable_across_requests(client, alice_auth):
    first = (await client.get("/users/me", headers=alice_auth)).json()
    second = (await client.get("/users/me", headers=alice_auth)).json()
    assert first == second


async def test_users_list_and_get(client, alice_auth, bob_auth):
    alice_user = (await client.get("/users/me", headers=alice_auth)).json()
    await client.get("/users/me", headers=bob_auth)

    listing = (await client.get("/users")).json()
    single = await client.get(f"/users/{alice_user['id']}")

    assert listing["totalEntities"] == 2
    assert len(listing["data"]) == 2
    assert single.json() == alice_user


async def test_unknown_user_is_404(client):
    res = await client.get("/users/9999")
    assert res.status_code == 404
    assert res.json() == {"Error": MESSAGES[404]["user"]}
