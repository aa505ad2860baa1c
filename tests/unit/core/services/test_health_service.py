import pytest

from notekeeper.core.services.health_service import HealthService


class FakeScalarResult:
    def __init__(self, scalar_value):
        self._scalar_value = scalar_value
    def scalar(self):
        return self._scalar_value


class FakeSession:
    def __init__(self, ok=True):
        self.ok = ok
        self.executed = []
    async def execute(self, stmt):
        self.executed.append(stmt)
        if self.ok:
            return FakeScalarResult(1)
        raise RuntimeError("db down")


@pytest.mark.asyncio
async def test_get_health_status_ok():
    svc = HealthService(FakeSession(ok=True))

    resp = await svc.get_health_status()
    assert resp.status == "healthy"
    assert resp.checks["database"]["connected"] is True


@pytest.mark.asyncio
async def test_get_health_status_db_down():
    svc = HealthService(FakeSession(ok=False))

    resp = await svc.get_health_status()
    assert resp.status == "unhealthy"
    assert resp.checks["database"] == {
        "connected": False,
        "status": "unhealthy",
        "error": "RuntimeError",
        "response_time_ms": 0.0,
    }


@pytest.mark.asyncio
async def test_check_database_health_against_sqlite(test_session):
    result = await HealthService(test_session).check_database_health()
    assert result["connected"] is True
    assert result["response_time_ms"] >= 0
