"""Health service implementation."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.settings = get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()

        overall_status = "healthy" if db_health["connected"] else "unhealthy"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=datetime.now(timezone.utc),
            version=self.settings.app_version,
            checks={"database": db_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        loop = asyncio.get_running_loop()
        try:
            # Measure response time
            start_time = loop.time()
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
            response_time = (loop.time() - start_time) * 1000

            return {
                "connected": True,
                "status": "healthy",
                "response_time_ms": round(response_time, 2),
            }
        except Exception as e:
            # the probe reports failures instead of raising
            return {
                "connected": False,
                "status": "unhealthy",
                "error": type(e).__name__,
                "response_time_ms": 0.0,
            }
