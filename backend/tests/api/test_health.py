"""Health & Readiness Probes."""


async def test_liveness(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(app, client):
    app.state.db_manager = None
    res = await client.get("/health/ready")
    assert res.status_code == 503
