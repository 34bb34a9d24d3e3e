from fastapi import HTTPException, Request

from athar_service.services.analytics_service import AnalyticsService
from athar_service.services.doa_service import DoaService
from athar_service.services.health_service import HealthService
from athar_service.services.juz_service import JuzService
from athar_service.services.surah_service import SurahService


def _service(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(status_code=503, detail=f"{name} unavailable")
    return service


def get_surah_service(request: Request) -> SurahService:
    """Dependency to get the SurahService instance."""
    return _service(request, "surah_service")


def get_juz_service(request: Request) -> JuzService:
    """Dependency to get the JuzService instance."""
    return _service(request, "juz_service")


def get_doa_service(request: Request) -> DoaService:
    """Dependency to get the DoaService instance."""
    return _service(request, "doa_service")


def get_analytics_service(request: Request) -> AnalyticsService:
    """Dependency to get the AnalyticsService instance."""
    return _service(request, "analytics_service")


def get_health_service(request: Request) -> HealthService:
    return _service(request, "health_service")
