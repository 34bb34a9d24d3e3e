"""
Pytest configuration and shared fixtures for athar_service tests.
"""
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from athar_service.data.juz_mapping import SURAH_VERSE_COUNTS, TOTAL_SURAHS
from athar_service.services.juz_resolver import get_juz_by_verse

# A few real names so search behaves like it would on seeded data.
KNOWN_SURAHS = {
    1: ("الفاتحة", "Al-Fatihah", "Pembukaan"),
    2: ("البقرة", "Al-Baqarah", "Sapi Betina"),
    3: ("اٰل عمران", "Ali 'Imran", "Keluarga Imran"),
    36: ("يٰسۤ", "Yasin", "Yasin"),
    112: ("الاخلاص", "Al-Ikhlas", "Ikhlas"),
    113: ("الفلق", "Al-Falaq", "Subuh"),
    114: ("الناس", "An-Nas", "Manusia"),
}


def make_surah(number: int) -> SimpleNamespace:
    name, latin_name, meaning = KNOWN_SURAHS.get(
        number, (f"سورة {number}", f"Surah-{number}", f"Meaning {number}")
    )
    return SimpleNamespace(
        number=number,
        name=name,
        latin_name=latin_name,
        verse_count=SURAH_VERSE_COUNTS[number - 1],
        revelation_place="Mekah",
        meaning=meaning,
        description=f"Description of surah {number}",
        audio_full=None,
    )


def make_verse(surah_number: int, number: int) -> SimpleNamespace:
    return SimpleNamespace(
        surah_number=surah_number,
        number=number,
        juz=get_juz_by_verse(surah_number, number),
        arabic=f"arabic {surah_number}:{number}",
        latin=f"latin {surah_number}:{number}",
        translation=f"translation {surah_number}:{number}",
        audio=None,
    )


class FakeQuranRepository:
    """In-memory stand-in for ``QuranRepository`` with the same query surface."""

    def __init__(
        self,
        surah_numbers: Iterable[int] = range(1, TOTAL_SURAHS + 1),
        surahs_with_verses: Optional[Iterable[int]] = None,
    ):
        self.surahs: Dict[int, SimpleNamespace] = {n: make_surah(n) for n in surah_numbers}
        with_verses = self.surahs.keys() if surahs_with_verses is None else surahs_with_verses
        self.verses: List[SimpleNamespace] = [
            make_verse(n, v)
            for n in sorted(with_verses)
            for v in range(1, SURAH_VERSE_COUNTS[n - 1] + 1)
        ]
        self.tafsir: List[SimpleNamespace] = [
            SimpleNamespace(
                surah_number=v.surah_number,
                verse_number=v.number,
                text=f"tafsir {v.surah_number}:{v.number}",
            )
            for v in self.verses
        ]

    def _matches_search(self, surah, search: Optional[str]) -> bool:
        if not search:
            return True
        needle = search.lower()
        return needle in surah.latin_name.lower() or needle in surah.meaning.lower()

    async def get_surah(self, number: int):
        return self.surahs.get(number)

    async def get_surah_refs(self, numbers: Iterable[int]):
        return {n: self.surahs[n] for n in set(numbers) if n in self.surahs}

    async def get_surahs_by_numbers(self, numbers: Iterable[int]):
        return [self.surahs[n] for n in sorted(set(numbers)) if n in self.surahs]

    async def list_surah_refs(self):
        return [self.surahs[n] for n in sorted(self.surahs)]

    async def list_surahs(self, *, offset: int, limit: int, search: Optional[str] = None):
        matching = [self.surahs[n] for n in sorted(self.surahs) if self._matches_search(self.surahs[n], search)]
        return matching[offset:offset + limit]

    async def count_surahs(self, search: Optional[str] = None) -> int:
        return sum(1 for s in self.surahs.values() if self._matches_search(s, search))

    async def get_verses(self, surah_number, *, juz=None, from_verse=None, to_verse=None):
        return [
            v
            for v in self.verses
            if v.surah_number == surah_number
            and (juz is None or v.juz == juz)
            and (from_verse is None or v.number >= from_verse)
            and (to_verse is None or v.number <= to_verse)
        ]

    async def count_verses_in_juz(self, surah_number: int, juz: int) -> int:
        return sum(1 for v in self.verses if v.surah_number == surah_number and v.juz == juz)

    async def get_surah_numbers_in_juz(self, juz: int, *, descending: bool = False):
        numbers = sorted({v.surah_number for v in self.verses if v.juz == juz})
        return list(reversed(numbers)) if descending else numbers

    async def get_juz_surah_ranges(self, juz: int):
        ranges = {}
        for v in self.verses:
            if v.juz != juz:
                continue
            low, high, count = ranges.get(v.surah_number, (v.number, v.number, 0))
            ranges[v.surah_number] = (min(low, v.number), max(high, v.number), count + 1)
        return [(n, *ranges[n]) for n in sorted(ranges)]

    async def count_verses_by_juz(self):
        counts: Dict[int, int] = {}
        for v in self.verses:
            counts[v.juz] = counts.get(v.juz, 0) + 1
        return counts

    async def get_surah_juz_pairs(self, surah_numbers: Optional[Sequence[int]] = None):
        wanted = None if surah_numbers is None else set(surah_numbers)
        pairs = {
            (v.surah_number, v.juz)
            for v in self.verses
            if wanted is None or v.surah_number in wanted
        }
        return sorted(pairs)

    async def get_tafsir(self, surah_number, *, from_verse=None, to_verse=None, verse_numbers=None):
        wanted = None if verse_numbers is None else set(verse_numbers)
        return [
            t
            for t in self.tafsir
            if t.surah_number == surah_number
            and (from_verse is None or t.verse_number >= from_verse)
            and (to_verse is None or t.verse_number <= to_verse)
            and (wanted is None or t.verse_number in wanted)
        ]


@pytest.fixture(scope="session")
def quran_repository():
    """Full corpus: every surah with every verse and its tafsir."""
    return FakeQuranRepository()


@pytest.fixture
def make_repository():
    """Factory for partial corpora, e.g. surahs stored without their verses."""
    return FakeQuranRepository
