from fastapi import APIRouter, Depends

from athar_service.core.dependencies import get_health_service
from athar_service.models.common import HealthResponse
from athar_service.services.health_service import HealthService

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(health_service: HealthService = Depends(get_health_service)):
    """
    Health check endpoint; reports whether the database answers.
    """
    return await health_service.check()
