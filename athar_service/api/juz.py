from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from athar_service.api.envelope import success
from athar_service.core.dependencies import get_juz_service
from athar_service.data.juz_mapping import TOTAL_JUZ, TOTAL_SURAHS
from athar_service.models.common import ApiResponse
from athar_service.models.quran_models import JuzDetail, JuzSummary, SurahInJuz, SurahTafsirInJuz
from athar_service.services.juz_service import JuzService

router = APIRouter()


@router.get("/juz", response_model=ApiResponse[List[JuzSummary]])
async def list_juz(juz_service: JuzService = Depends(get_juz_service)):
    return success(await juz_service.list_juz(), "Juz list retrieved")


@router.get("/juz/{number}", response_model=ApiResponse[JuzDetail])
async def get_juz(
    number: int = Path(..., ge=1, le=TOTAL_JUZ),
    juz_service: JuzService = Depends(get_juz_service),
):
    return success(await juz_service.get_juz_detail(number), f"Juz {number} retrieved")


@router.get("/juz/{number}/surah/{surah_number}", response_model=ApiResponse[SurahInJuz])
async def get_surah_in_juz(
    number: int = Path(..., ge=1, le=TOTAL_JUZ),
    surah_number: int = Path(..., ge=1, le=TOTAL_SURAHS),
    from_verse: Optional[int] = Query(None, ge=1),
    to_verse: Optional[int] = Query(None, ge=1),
    juz_service: JuzService = Depends(get_juz_service),
):
    result = await juz_service.get_surah_in_juz(
        number, surah_number, from_verse=from_verse, to_verse=to_verse
    )
    return success(result, f"Surah {surah_number} in juz {number} retrieved")


@router.get(
    "/juz/{number}/surah/{surah_number}/tafsir",
    response_model=ApiResponse[SurahTafsirInJuz],
)
async def get_surah_tafsir_in_juz(
    number: int = Path(..., ge=1, le=TOTAL_JUZ),
    surah_number: int = Path(..., ge=1, le=TOTAL_SURAHS),
    from_verse: Optional[int] = Query(None, ge=1),
    to_verse: Optional[int] = Query(None, ge=1),
    juz_service: JuzService = Depends(get_juz_service),
):
    result = await juz_service.get_surah_tafsir_in_juz(
        number, surah_number, from_verse=from_verse, to_verse=to_verse
    )
    return success(result, f"Tafsir for surah {surah_number} in juz {number} retrieved")
