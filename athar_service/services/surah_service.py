import logging
from typing import Dict, List, Optional, Tuple

from athar_service.core.exceptions import NotFoundError
from athar_service.data.juz_mapping import TOTAL_SURAHS, verse_count
from athar_service.models.common import Page
from athar_service.models.quran_models import (
    SurahDetail,
    SurahInfo,
    SurahListItem,
    SurahRef,
    SurahTafsirDetail,
    TafsirOut,
    VerseOut,
)
from athar_service.services.juz_resolver import get_juz_list_by_surah
from athar_service.services.quran_repository import QuranRepository
from athar_service.utils.pagination import build_page_meta, page_offset

logger = logging.getLogger(__name__)


class SurahService:
    def __init__(self, repository: QuranRepository):
        self.repository = repository

    async def list_surahs(
        self,
        page: int = 1,
        limit: int = TOTAL_SURAHS,
        search: Optional[str] = None,
    ) -> Page[SurahListItem]:
        search = search.strip() if search else None
        total = await self.repository.count_surahs(search)
        surahs = await self.repository.list_surahs(
            offset=page_offset(page, limit), limit=limit, search=search
        )

        juz_by_surah: Dict[int, List[int]] = {}
        if surahs:
            pairs = await self.repository.get_surah_juz_pairs([s.number for s in surahs])
            for surah_number, juz in pairs:
                juz_by_surah.setdefault(surah_number, []).append(juz)

        items = []
        for surah in surahs:
            juz_list = juz_by_surah.get(surah.number)
            if not juz_list:
                # Surah row present without verses; fall back to the juz table
                # and its verse counts.
                juz_list = get_juz_list_by_surah(surah.number, verse_count(surah.number))
            item = SurahListItem.model_validate(surah)
            item.juz = juz_list
            items.append(item)

        return Page[SurahListItem](items=items, meta=build_page_meta(page, limit, total))

    async def get_surah(
        self,
        number: int,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
    ) -> SurahDetail:
        surah = await self._require_surah(number)
        verses = await self.repository.get_verses(
            number, from_verse=from_verse, to_verse=to_verse
        )
        prev_info, next_info = await self._neighbours(number)
        return SurahDetail(
            surah=SurahInfo.model_validate(surah),
            verses=[VerseOut.model_validate(v) for v in verses],
            prev_info=prev_info,
            next_info=next_info,
        )

    async def get_surah_tafsir(
        self,
        number: int,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
    ) -> SurahTafsirDetail:
        surah = await self._require_surah(number)
        tafsir = await self.repository.get_tafsir(
            number, from_verse=from_verse, to_verse=to_verse
        )
        prev_info, next_info = await self._neighbours(number)
        return SurahTafsirDetail(
            surah=SurahInfo.model_validate(surah),
            tafsir=[TafsirOut.model_validate(t) for t in tafsir],
            prev_info=prev_info,
            next_info=next_info,
        )

    async def _require_surah(self, number: int):
        surah = await self.repository.get_surah(number)
        if surah is None:
            raise NotFoundError(f"Surah {number} not found")
        return surah

    async def _neighbours(self, number: int) -> Tuple[Optional[SurahRef], Optional[SurahRef]]:
        prev_number = number - 1 if number > 1 else None
        next_number = number + 1 if number < TOTAL_SURAHS else None
        refs = await self.repository.get_surah_refs(
            n for n in (prev_number, next_number) if n is not None
        )
        prev_ref = refs.get(prev_number) if prev_number else None
        next_ref = refs.get(next_number) if next_number else None
        return (
            SurahRef.model_validate(prev_ref) if prev_ref is not None else None,
            SurahRef.model_validate(next_ref) if next_ref is not None else None,
        )
