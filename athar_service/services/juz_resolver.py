"""
Mapping between surah/verse addresses and the 30 juz.

Every function here is pure: it reads only the constant tables in
``athar_service.data.juz_mapping`` and is safe to call from any number of
concurrent requests.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from athar_service.data.juz_mapping import (
    JUZ_RANGES,
    TOTAL_JUZ,
    TOTAL_SURAHS,
    JuzRange,
    VerseRef,
    SURAH_VERSE_COUNTS,
)

logger = logging.getLogger(__name__)


class JuzMappingError(Exception):
    """A verse address could not be placed in any juz.

    The juz table covers the whole corpus, so this only happens when an
    out-of-domain address reaches the resolver. Treat it as a data-integrity
    bug, never as a user error.
    """

    def __init__(self, surah: int, verse: int):
        self.surah = surah
        self.verse = verse
        super().__init__(f"No juz contains verse {surah}:{verse}")


def is_valid_surah(surah: int) -> bool:
    return 1 <= surah <= TOTAL_SURAHS


def is_valid_juz(juz: int) -> bool:
    return 1 <= juz <= TOTAL_JUZ


def is_valid_verse(surah: int, verse: int) -> bool:
    return is_valid_surah(surah) and 1 <= verse <= SURAH_VERSE_COUNTS[surah - 1]


def get_juz_by_verse(surah: int, verse: int) -> int:
    """Return the juz whose inclusive range contains ``surah:verse``.

    Addresses outside the corpus raise, including ones such as ``1:8`` that
    sort inside a range.
    """
    if is_valid_verse(surah, verse):
        ref = VerseRef(surah, verse)
        for juz_range in JUZ_RANGES:
            if juz_range.contains(ref):
                return juz_range.juz

    logger.error(
        "Verse address outside the corpus",
        extra={"surah": surah, "verse": verse},
    )
    raise JuzMappingError(surah, verse)


def get_juz_list_by_surah(surah: int, total_verses: int) -> List[int]:
    """
    Return every juz a surah spans, ascending.

    Juz are contiguous in reading order and so are a surah's verses, hence
    the answer is the integer range between the juz of the first and the
    last verse.
    """
    first = get_juz_by_verse(surah, 1)
    last = get_juz_by_verse(surah, total_verses)
    return list(range(first, last + 1))


def get_juz_info(juz: int) -> Optional[JuzRange]:
    if not is_valid_juz(juz):
        return None
    return JUZ_RANGES[juz - 1]


def get_adjacent_juz(juz: int) -> Tuple[Optional[int], Optional[int]]:
    """Return ``(previous, next)`` juz numbers, ``None`` past either end."""
    prev_juz = juz - 1 if juz > 1 else None
    next_juz = juz + 1 if juz < TOTAL_JUZ else None
    return prev_juz, next_juz
