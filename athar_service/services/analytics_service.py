from __future__ import annotations

import asyncio
import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Set, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert

from athar_service.models.common import (
    AnalyticsSummary,
    ContentHits,
    ContentPopularity,
    DailyStat,
    EndpointStat,
)
from athar_service.models.db import DailyStats, EndpointHit

logger = logging.getLogger(__name__)

_CONTENT_PATTERNS = {
    "surah": re.compile(r"/surah/(\d+)"),
    "juz": re.compile(r"/juz/(\d+)"),
    "doa": re.compile(r"/doa/(\d+)"),
}
TOP_CONTENT_LIMIT = 10


def tally_content_hits(rows: Iterable[Tuple[str, int]], top: int = TOP_CONTENT_LIMIT) -> ContentPopularity:
    """Fold ``(endpoint, hit_count)`` rows into per-content hit totals.

    A path such as ``/juz/30/surah/78`` counts for both juz 30 and surah 78.
    """
    totals: Dict[str, Dict[int, int]] = {kind: {} for kind in _CONTENT_PATTERNS}
    for endpoint, hits in rows:
        for kind, pattern in _CONTENT_PATTERNS.items():
            match = pattern.search(endpoint)
            if match:
                content_id = int(match.group(1))
                totals[kind][content_id] = totals[kind].get(content_id, 0) + hits

    def ranked(kind: str) -> List[ContentHits]:
        entries = sorted(totals[kind].items(), key=lambda item: (-item[1], item[0]))
        return [ContentHits(id=content_id, hits=hits) for content_id, hits in entries[:top]]

    return ContentPopularity(
        top_surahs=ranked("surah"),
        top_juz=ranked("juz"),
        top_doa=ranked("doa"),
    )


class AnalyticsService:
    def __init__(self, session_factory):
        self._session_factory = session_factory
        self._pending: Set[asyncio.Task] = set()

    async def track_hit(self, endpoint: str, method: str) -> None:
        """Increment the endpoint counter and today's total. Never raises."""
        now = datetime.now(timezone.utc)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    hit_stmt = insert(EndpointHit).values(
                        endpoint=endpoint,
                        method=method,
                        hit_count=1,
                        last_hit=now,
                        created_at=now,
                    )
                    await session.execute(
                        hit_stmt.on_conflict_do_update(
                            index_elements=[EndpointHit.endpoint, EndpointHit.method],
                            set_={
                                "hit_count": EndpointHit.hit_count + 1,
                                "last_hit": now,
                            },
                        )
                    )

                    daily_stmt = insert(DailyStats).values(
                        date=now.date(),
                        total_hits=1,
                        created_at=now,
                    )
                    await session.execute(
                        daily_stmt.on_conflict_do_update(
                            index_elements=[DailyStats.date],
                            set_={"total_hits": DailyStats.total_hits + 1},
                        )
                    )
        except Exception as e:
            logger.error(f"Analytics tracking failed for {method} {endpoint}: {e}")

    def track_hit_in_background(self, endpoint: str, method: str) -> None:
        task = asyncio.create_task(self.track_hit(endpoint, method))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for hits still being written."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def get_total_hits(self) -> int:
        async with self._session_factory() as session:
            total = await session.scalar(select(func.sum(EndpointHit.hit_count)))
            return int(total or 0)

    async def get_popular_endpoints(self, limit: int = 10) -> List[EndpointStat]:
        async with self._session_factory() as session:
            result = await session.scalars(
                select(EndpointHit)
                .order_by(EndpointHit.hit_count.desc(), EndpointHit.endpoint)
                .limit(limit)
            )
            return [
                EndpointStat(
                    endpoint=row.endpoint,
                    method=row.method,
                    hit_count=row.hit_count,
                    last_hit=row.last_hit,
                )
                for row in result
            ]

    async def get_daily_stats(self, days: int = 7) -> List[DailyStat]:
        start: date = datetime.now(timezone.utc).date() - timedelta(days=days)
        async with self._session_factory() as session:
            result = await session.scalars(
                select(DailyStats)
                .where(DailyStats.date >= start)
                .order_by(DailyStats.date.desc())
            )
            return [DailyStat(date=row.date, total_hits=row.total_hits) for row in result]

    async def get_summary(self) -> AnalyticsSummary:
        return AnalyticsSummary(
            total_hits=await self.get_total_hits(),
            popular_endpoints=await self.get_popular_endpoints(5),
            last_7_days=await self.get_daily_stats(7),
        )

    async def get_content_popularity(self) -> ContentPopularity:
        async with self._session_factory() as session:
            rows = await session.execute(
                select(EndpointHit.endpoint, EndpointHit.hit_count)
            )
            return tally_content_hits((endpoint, hits) for endpoint, hits in rows)
