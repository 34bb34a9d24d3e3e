"""
Static structure of the Quran used for juz navigation.

The corpus is addressed two ways: by surah + verse number, and by the
fixed division into 30 juz. Juz boundaries often fall inside a surah, so
every lookup between the two schemes goes through ``JUZ_RANGES``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

TOTAL_SURAHS = 114
TOTAL_JUZ = 30


@dataclass(frozen=True, order=True)
class VerseRef:
    """A (surah, verse) address. Ordering is canonical reading order."""

    surah: int
    verse: int

    def to_payload(self) -> dict:
        return {"surah": self.surah, "verse": self.verse}


@dataclass(frozen=True)
class JuzRange:
    juz: int
    start: VerseRef
    end: VerseRef

    def contains(self, ref: VerseRef) -> bool:
        return self.start <= ref <= self.end

    def to_payload(self) -> dict:
        return {
            "number": self.juz,
            "start": self.start.to_payload(),
            "end": self.end.to_payload(),
        }


def _juz(number: int, start: Tuple[int, int], end: Tuple[int, int]) -> JuzRange:
    return JuzRange(number, VerseRef(*start), VerseRef(*end))


# Inclusive boundaries of the 30 juz, in reading order.
JUZ_RANGES: Tuple[JuzRange, ...] = (
    _juz(1, (1, 1), (2, 141)),       # Al-Fatihah 1 - Al-Baqarah 141
    _juz(2, (2, 142), (2, 252)),     # Al-Baqarah 142 - 252
    _juz(3, (2, 253), (3, 92)),      # Al-Baqarah 253 - Ali 'Imran 92
    _juz(4, (3, 93), (4, 23)),       # Ali 'Imran 93 - An-Nisa 23
    _juz(5, (4, 24), (4, 147)),      # An-Nisa 24 - 147
    _juz(6, (4, 148), (5, 81)),      # An-Nisa 148 - Al-Ma'idah 81
    _juz(7, (5, 82), (6, 110)),      # Al-Ma'idah 82 - Al-An'am 110
    _juz(8, (6, 111), (7, 87)),      # Al-An'am 111 - Al-A'raf 87
    _juz(9, (7, 88), (8, 40)),       # Al-A'raf 88 - Al-Anfal 40
    _juz(10, (8, 41), (9, 92)),      # Al-Anfal 41 - At-Tawbah 92
    _juz(11, (9, 93), (11, 5)),      # At-Tawbah 93 - Hud 5
    _juz(12, (11, 6), (12, 52)),     # Hud 6 - Yusuf 52
    _juz(13, (12, 53), (14, 52)),    # Yusuf 53 - Ibrahim 52
    _juz(14, (15, 1), (16, 128)),    # Al-Hijr 1 - An-Nahl 128
    _juz(15, (17, 1), (18, 74)),     # Al-Isra 1 - Al-Kahf 74
    _juz(16, (18, 75), (20, 135)),   # Al-Kahf 75 - Ta-Ha 135
    _juz(17, (21, 1), (22, 78)),     # Al-Anbiya 1 - Al-Hajj 78
    _juz(18, (23, 1), (25, 20)),     # Al-Mu'minun 1 - Al-Furqan 20
    _juz(19, (25, 21), (27, 55)),    # Al-Furqan 21 - An-Naml 55
    _juz(20, (27, 56), (29, 45)),    # An-Naml 56 - Al-'Ankabut 45
    _juz(21, (29, 46), (33, 30)),    # Al-'Ankabut 46 - Al-Ahzab 30
    _juz(22, (33, 31), (36, 27)),    # Al-Ahzab 31 - Ya-Sin 27
    _juz(23, (36, 28), (39, 31)),    # Ya-Sin 28 - Az-Zumar 31
    _juz(24, (39, 32), (41, 46)),    # Az-Zumar 32 - Fussilat 46
    _juz(25, (41, 47), (45, 37)),    # Fussilat 47 - Al-Jathiyah 37
    _juz(26, (46, 1), (51, 30)),     # Al-Ahqaf 1 - Adh-Dhariyat 30
    _juz(27, (51, 31), (57, 29)),    # Adh-Dhariyat 31 - Al-Hadid 29
    _juz(28, (58, 1), (66, 12)),     # Al-Mujadila 1 - At-Tahrim 12
    _juz(29, (67, 1), (77, 50)),     # Al-Mulk 1 - Al-Mursalat 50
    _juz(30, (78, 1), (114, 6)),     # An-Naba 1 - An-Nas 6 (Juz 'Amma)
)

# Number of verses in each surah; index 0 is surah 1.
SURAH_VERSE_COUNTS: Tuple[int, ...] = (
    7, 286, 200, 176, 120, 165, 206, 75, 129, 109,
    123, 111, 43, 52, 99, 128, 111, 110, 98, 135,
    112, 78, 118, 64, 77, 227, 93, 88, 69, 60,
    34, 30, 73, 54, 45, 83, 182, 88, 75, 85,
    54, 53, 89, 59, 37, 35, 38, 29, 18, 45,
    60, 49, 62, 55, 78, 96, 29, 22, 24, 13,
    14, 11, 11, 18, 12, 12, 30, 52, 52, 44,
    28, 28, 20, 56, 40, 31, 50, 40, 46, 42,
    29, 19, 36, 25, 22, 17, 19, 26, 30, 20,
    15, 21, 11, 8, 8, 19, 5, 8, 8, 11,
    11, 8, 3, 9, 5, 4, 7, 3, 6, 3,
    5, 4, 5, 6,
)

TOTAL_VERSES = sum(SURAH_VERSE_COUNTS)


def verse_count(surah: int) -> int:
    if not 1 <= surah <= TOTAL_SURAHS:
        raise ValueError(f"Surah number out of range: {surah}")
    return SURAH_VERSE_COUNTS[surah - 1]
