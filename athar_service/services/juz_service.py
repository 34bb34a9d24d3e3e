"""
Juz listing, juz detail and surah-within-juz reading with navigation.

Boundaries come from the constant juz table; which surahs actually sit in a
juz, and their verse ranges, come from the verses stored with that juz tag.
"""

import logging
from typing import Dict, List, Optional, Tuple

from athar_service.core.exceptions import NotFoundError
from athar_service.data.juz_mapping import TOTAL_JUZ
from athar_service.models.quran_models import (
    JuzDetail,
    JuzNumberRef,
    JuzSummary,
    JuzSurahNav,
    JuzSurahSegment,
    SurahInfo,
    SurahInJuz,
    SurahRef,
    SurahTafsirInJuz,
    TafsirOut,
    VerseAddress,
    VerseOut,
    VerseSpan,
)
from athar_service.services.juz_resolver import get_adjacent_juz, get_juz_info, is_valid_juz
from athar_service.services.quran_repository import QuranRepository

logger = logging.getLogger(__name__)

# (juz, surah_number) of a navigation target
NavTarget = Tuple[int, int]


class JuzService:
    def __init__(self, repository: QuranRepository):
        self.repository = repository

    async def list_juz(self) -> List[JuzSummary]:
        counts = await self.repository.count_verses_by_juz()
        pairs = await self.repository.get_surah_juz_pairs()
        refs = {row.number: row for row in await self.repository.list_surah_refs()}

        surahs_by_juz: Dict[int, List[SurahRef]] = {}
        for surah_number, juz in pairs:
            ref = refs.get(surah_number)
            if ref is not None:
                surahs_by_juz.setdefault(juz, []).append(SurahRef.model_validate(ref))

        summaries = []
        for juz_number in range(1, TOTAL_JUZ + 1):
            juz_range = get_juz_info(juz_number)
            summaries.append(
                JuzSummary(
                    number=juz_number,
                    start=VerseAddress(**juz_range.start.to_payload()),
                    end=VerseAddress(**juz_range.end.to_payload()),
                    total_verses=counts.get(juz_number, 0),
                    surahs=surahs_by_juz.get(juz_number, []),
                )
            )
        return summaries

    async def get_juz_detail(self, juz: int) -> JuzDetail:
        juz_range = get_juz_info(juz)
        if juz_range is None:
            raise NotFoundError(f"Juz {juz} not found")

        ranges = await self.repository.get_juz_surah_ranges(juz)
        surahs = {
            surah.number: surah
            for surah in await self.repository.get_surahs_by_numbers(r[0] for r in ranges)
        }

        segments = []
        for surah_number, first_verse, last_verse, count in ranges:
            surah = surahs.get(surah_number)
            if surah is None:
                continue
            segments.append(
                JuzSurahSegment(
                    number=surah.number,
                    name=surah.name,
                    latin_name=surah.latin_name,
                    verse_count=surah.verse_count,
                    revelation_place=surah.revelation_place,
                    meaning=surah.meaning,
                    verses_in_juz=VerseSpan(start=first_verse, end=last_verse),
                    total_verses_in_juz=count,
                )
            )

        prev_juz, next_juz = get_adjacent_juz(juz)
        return JuzDetail(
            number=juz,
            start=VerseAddress(**juz_range.start.to_payload()),
            end=VerseAddress(**juz_range.end.to_payload()),
            total_verses=sum(r[3] for r in ranges),
            surahs=segments,
            prev_info=JuzNumberRef(number=prev_juz) if prev_juz else None,
            next_info=JuzNumberRef(number=next_juz) if next_juz else None,
        )

    async def get_surah_in_juz(
        self,
        juz: int,
        surah_number: int,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
    ) -> SurahInJuz:
        surah = await self._require_surah_in_juz(juz, surah_number)
        verses = await self.repository.get_verses(
            surah_number, juz=juz, from_verse=from_verse, to_verse=to_verse
        )
        prev_info, next_info = await self._navigation(juz, surah_number)
        return SurahInJuz(
            juz=juz,
            surah=SurahInfo.model_validate(surah),
            verses=[VerseOut.model_validate(v) for v in verses],
            prev_info=prev_info,
            next_info=next_info,
        )

    async def get_surah_tafsir_in_juz(
        self,
        juz: int,
        surah_number: int,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
    ) -> SurahTafsirInJuz:
        surah = await self._require_surah_in_juz(juz, surah_number)
        verses = await self.repository.get_verses(
            surah_number, juz=juz, from_verse=from_verse, to_verse=to_verse
        )
        tafsir = await self.repository.get_tafsir(
            surah_number, verse_numbers=[v.number for v in verses]
        )
        prev_info, next_info = await self._navigation(juz, surah_number)
        return SurahTafsirInJuz(
            juz=juz,
            surah=SurahInfo.model_validate(surah),
            tafsir=[TafsirOut.model_validate(t) for t in tafsir],
            prev_info=prev_info,
            next_info=next_info,
        )

    async def _require_surah_in_juz(self, juz: int, surah_number: int):
        """
        Return the surah row, or raise ``NotFoundError`` when the pair is unknown.

        The existence check ignores any verse sub-range: a valid pair whose
        sub-range selects nothing is still a valid resource.
        """
        if not is_valid_juz(juz):
            raise NotFoundError(f"Juz {juz} not found")

        surah = await self.repository.get_surah(surah_number)
        if surah is None:
            raise NotFoundError(f"Surah {surah_number} not found")

        if await self.repository.count_verses_in_juz(surah_number, juz) == 0:
            logger.info(
                "Surah requested outside its juz",
                extra={"juz": juz, "surah": surah_number},
            )
            raise NotFoundError(f"Surah {surah_number} is not part of juz {juz}")

        return surah

    async def _navigation(
        self, juz: int, surah_number: int
    ) -> Tuple[Optional[JuzSurahNav], Optional[JuzSurahNav]]:
        surahs_in_juz = await self.repository.get_surah_numbers_in_juz(juz)
        index = surahs_in_juz.index(surah_number)
        prev_juz, next_juz = get_adjacent_juz(juz)

        prev_target: Optional[NavTarget] = None
        if index > 0:
            prev_target = (juz, surahs_in_juz[index - 1])
        elif prev_juz is not None:
            candidates = await self.repository.get_surah_numbers_in_juz(prev_juz, descending=True)
            if candidates:
                prev_target = (prev_juz, candidates[0])

        next_target: Optional[NavTarget] = None
        if index < len(surahs_in_juz) - 1:
            next_target = (juz, surahs_in_juz[index + 1])
        elif next_juz is not None:
            candidates = await self.repository.get_surah_numbers_in_juz(next_juz)
            if candidates:
                next_target = (next_juz, candidates[0])

        targets = [t for t in (prev_target, next_target) if t is not None]
        refs = await self.repository.get_surah_refs(t[1] for t in targets)

        def to_nav(target: Optional[NavTarget]) -> Optional[JuzSurahNav]:
            if target is None or target[1] not in refs:
                return None
            return JuzSurahNav(juz=target[0], surah=SurahRef.model_validate(refs[target[1]]))

        return to_nav(prev_target), to_nav(next_target)
