from typing import List

from fastapi import APIRouter, Depends, Query

from athar_service.api.envelope import success
from athar_service.core.dependencies import get_analytics_service
from athar_service.models.common import (
    AnalyticsSummary,
    ApiResponse,
    ContentPopularity,
    DailyStat,
    EndpointStat,
)
from athar_service.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/summary", response_model=ApiResponse[AnalyticsSummary])
async def get_summary(analytics: AnalyticsService = Depends(get_analytics_service)):
    return success(await analytics.get_summary(), "Analytics summary retrieved")


@router.get("/daily", response_model=ApiResponse[List[DailyStat]])
async def get_daily(
    days: int = Query(7, ge=1, le=90),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return success(await analytics.get_daily_stats(days), f"Daily stats for the last {days} days retrieved")


@router.get("/popular-endpoints", response_model=ApiResponse[List[EndpointStat]])
async def get_popular_endpoints(
    limit: int = Query(10, ge=1, le=50),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return success(await analytics.get_popular_endpoints(limit), "Popular endpoints retrieved")


@router.get("/content-popularity", response_model=ApiResponse[ContentPopularity])
async def get_content_popularity(analytics: AnalyticsService = Depends(get_analytics_service)):
    return success(await analytics.get_content_popularity(), "Content popularity retrieved")
