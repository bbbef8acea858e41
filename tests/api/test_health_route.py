from vvframes import __version__


async def test_health_check(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json() == {
        "status": "healthy",
        "service": "vvframes-api",
        "version": __version__,
    }
