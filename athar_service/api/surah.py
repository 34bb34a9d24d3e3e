from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from athar_service.api.envelope import paginated, success
from athar_service.core.dependencies import get_surah_service
from athar_service.data.juz_mapping import TOTAL_SURAHS
from athar_service.models.common import ApiResponse, PaginatedResponse
from athar_service.models.quran_models import SurahDetail, SurahListItem, SurahTafsirDetail
from athar_service.services.surah_service import SurahService

router = APIRouter()


@router.get("/surah", response_model=PaginatedResponse[SurahListItem])
async def list_surahs(
    page: int = Query(1, ge=1),
    limit: int = Query(TOTAL_SURAHS, ge=1, le=TOTAL_SURAHS),
    search: Optional[str] = Query(None, max_length=100),
    surah_service: SurahService = Depends(get_surah_service),
):
    result = await surah_service.list_surahs(page=page, limit=limit, search=search)
    return paginated(result, "Surah list retrieved")


@router.get("/surah/{number}", response_model=ApiResponse[SurahDetail])
async def get_surah(
    number: int = Path(..., ge=1, le=TOTAL_SURAHS),
    from_verse: Optional[int] = Query(None, ge=1),
    to_verse: Optional[int] = Query(None, ge=1),
    surah_service: SurahService = Depends(get_surah_service),
):
    detail = await surah_service.get_surah(number, from_verse=from_verse, to_verse=to_verse)
    return success(detail, f"Surah {number} retrieved")


@router.get("/surah/{number}/tafsir", response_model=ApiResponse[SurahTafsirDetail])
async def get_surah_tafsir(
    number: int = Path(..., ge=1, le=TOTAL_SURAHS),
    from_verse: Optional[int] = Query(None, ge=1),
    to_verse: Optional[int] = Query(None, ge=1),
    surah_service: SurahService = Depends(get_surah_service),
):
    detail = await surah_service.get_surah_tafsir(number, from_verse=from_verse, to_verse=to_verse)
    return success(detail, f"Tafsir for surah {number} retrieved")
