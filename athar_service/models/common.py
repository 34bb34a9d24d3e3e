from datetime import date, datetime
from typing import Any, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageMeta(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class Page(BaseModel, Generic[T]):
    items: List[T]
    meta: PageMeta


class ApiResponse(BaseModel, Generic[T]):
    status: Literal["success", "error"] = "success"
    message: str
    data: T


class PaginatedResponse(ApiResponse[List[T]], Generic[T]):
    meta: PageMeta


class ErrorInfo(BaseModel):
    code: str
    details: Any = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    data: Any = None
    error: ErrorInfo


class HealthResponse(BaseModel):
    status: Literal["ok", "error"]
    timestamp: datetime
    uptime: float
    database: Literal["connected", "disconnected"]
    version: str


# Analytics
class EndpointStat(BaseModel):
    endpoint: str
    method: str
    hit_count: int
    last_hit: Optional[datetime] = None


class DailyStat(BaseModel):
    date: date
    total_hits: int


class AnalyticsSummary(BaseModel):
    total_hits: int
    popular_endpoints: List[EndpointStat]
    last_7_days: List[DailyStat]


class ContentHits(BaseModel):
    id: int
    hits: int


class ContentPopularity(BaseModel):
    top_surahs: List[ContentHits]
    top_juz: List[ContentHits]
    top_doa: List[ContentHits]
