import logging
import time
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncEngine

from athar_service.core.database import check_connection
from athar_service.models.common import HealthResponse

logger = logging.getLogger(__name__)


class HealthService:
    def __init__(self, engine: AsyncEngine, version: str):
        self.engine = engine
        self.version = version
        self._started = time.monotonic()

    async def check(self) -> HealthResponse:
        database = "disconnected"
        try:
            await check_connection(self.engine)
            database = "connected"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")

        return HealthResponse(
            status="ok" if database == "connected" else "error",
            timestamp=datetime.now(timezone.utc),
            uptime=round(time.monotonic() - self._started, 3),
            database=database,
            version=self.version,
        )
