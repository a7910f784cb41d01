import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_healthz_reports_db_ok(client: AsyncClient):
    res = await client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "environment": "test", "db": "ok"}
