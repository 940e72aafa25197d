"""API test fixtures — FastAPI app wired to the test store and a fake verifier.

Invariants:
    - app.state is populated by hand: ASGITransport does not run the lifespan
    - "alice-token" and "bob-token" are the only bearer tokens that verify

Design Decisions:
    - Fake TokenVerifier at the app.state seam instead of signing real JWTs:
      token verification has its own tests in tests/infrastructure
"""

import pytest
from httpx import ASGITransport, AsyncClient

from fleet_api.core.errors import UnauthorizedError
from fleet_api.main import create_app


class FakeTokenVerifier:
    def __init__(self, principals):
        self._principals = principals

    def verify(self, token):
        try:
            return self._principals[token]
        except KeyError:
            raise UnauthorizedError()


@pytest.fixture
def app(store, db_manager, alice, bob):
    app = create_app()
    app.state.db_manager = db_manager
    app.state.store = store
    app.state.token_verifier = FakeTokenVerifier({
        "alice-token": alice,
        "bob-token": bob,
    })
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def alice_auth():
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob_auth():
    return {"Authorization": "Bearer bob-token"}


TRUCK_BODY = {
    "truck_vin": "1HGBH41JXMN109186",
    "trailer_vin": "1GRAA0621YB700001",
    "truck_model": "Kenworth T680",
    "trailer_type": "dry van",
    "trailer_capacity": 45000,
}

LOAD_BODY = {"vendor": "Acme Corp", "item": "pallets", "quantity": 20, "weight": 1800}


@pytest.fixture
def create_truck(client, alice_auth):
    async def _create(headers=None, **overrides) -> dict:
        res = await client.post(
            "/trucks", json={**TRUCK_BODY, **overrides}, headers=headers or alice_auth,
        )
        assert res.status_code == 201
        return res.json()
    return _create


@pytest.fixture
def create_load(client):
    async def _create(**overrides) -> dict:
        res = await client.post("/loads", json={**LOAD_BODY, **overrides})
        assert res.status_code == 201
        return res.json()
    return _create
