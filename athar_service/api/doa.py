from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from athar_service.api.envelope import paginated, success
from athar_service.core.dependencies import get_doa_service
from athar_service.models.common import ApiResponse, PaginatedResponse
from athar_service.models.doa_models import DoaDetail, DoaOut
from athar_service.services.doa_service import DoaService

router = APIRouter()


@router.get("/doa", response_model=PaginatedResponse[DoaOut])
async def list_doa(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    group: Optional[str] = Query(None, max_length=255),
    doa_service: DoaService = Depends(get_doa_service),
):
    result = await doa_service.list_doa(page=page, limit=limit, search=search, group=group)
    return paginated(result, "Doa list retrieved")


@router.get("/doa/groups", response_model=ApiResponse[List[str]])
async def list_doa_groups(doa_service: DoaService = Depends(get_doa_service)):
    return success(await doa_service.list_groups(), "Doa groups retrieved")


@router.get("/doa/{api_id}", response_model=ApiResponse[DoaDetail])
async def get_doa(
    api_id: int = Path(..., ge=1),
    doa_service: DoaService = Depends(get_doa_service),
):
    return success(await doa_service.get_doa(api_id), f"Doa {api_id} retrieved")
