import pytest

from athar_service.data.juz_mapping import (
    JUZ_RANGES,
    SURAH_VERSE_COUNTS,
    TOTAL_JUZ,
    TOTAL_SURAHS,
    TOTAL_VERSES,
    VerseRef,
    verse_count,
)
from athar_service.services.juz_resolver import (
    JuzMappingError,
    get_adjacent_juz,
    get_juz_by_verse,
    get_juz_info,
    get_juz_list_by_surah,
    is_valid_juz,
    is_valid_surah,
    is_valid_verse,
)


def all_verses():
    for surah, count in enumerate(SURAH_VERSE_COUNTS, start=1):
        for verse in range(1, count + 1):
            yield surah, verse


def previous_verse(surah: int, verse: int):
    if verse > 1:
        return surah, verse - 1
    return surah - 1, SURAH_VERSE_COUNTS[surah - 2]


def test_corpus_shape():
    assert len(SURAH_VERSE_COUNTS) == TOTAL_SURAHS
    assert TOTAL_VERSES == 6236
    assert len(JUZ_RANGES) == TOTAL_JUZ
    assert [r.juz for r in JUZ_RANGES] == list(range(1, TOTAL_JUZ + 1))


def test_juz_table_is_contiguous_and_spans_the_corpus():
    assert JUZ_RANGES[0].start == VerseRef(1, 1)
    assert JUZ_RANGES[-1].end == VerseRef(114, 6)
    for current, following in zip(JUZ_RANGES, JUZ_RANGES[1:]):
        assert following.start == VerseRef(*_next_verse(current.end.surah, current.end.verse))


def _next_verse(surah: int, verse: int):
    if verse < SURAH_VERSE_COUNTS[surah - 1]:
        return surah, verse + 1
    return surah + 1, 1


def test_every_verse_maps_to_exactly_one_juz():
    seen = {juz: [] for juz in range(1, TOTAL_JUZ + 1)}
    for surah, verse in all_verses():
        juz = get_juz_by_verse(surah, verse)
        assert 1 <= juz <= TOTAL_JUZ
        seen[juz].append((surah, verse))

    rebuilt = [address for juz in range(1, TOTAL_JUZ + 1) for address in seen[juz]]
    assert rebuilt == list(all_verses())


def test_juz_is_monotonic_in_reading_order():
    last = 0
    for surah, verse in all_verses():
        juz = get_juz_by_verse(surah, verse)
        assert juz >= last
        last = juz


@pytest.mark.parametrize("juz_range", JUZ_RANGES, ids=lambda r: f"juz-{r.juz}")
def test_boundaries_are_exact(juz_range):
    start = juz_range.start
    assert get_juz_by_verse(start.surah, start.verse) == juz_range.juz
    assert get_juz_by_verse(juz_range.end.surah, juz_range.end.verse) == juz_range.juz
    if juz_range.juz > 1:
        assert get_juz_by_verse(*previous_verse(start.surah, start.verse)) == juz_range.juz - 1


def test_known_addresses():
    assert get_juz_by_verse(1, 1) == 1
    assert get_juz_by_verse(2, 141) == 1
    assert get_juz_by_verse(2, 142) == 2
    assert get_juz_by_verse(18, 74) == 15
    assert get_juz_by_verse(18, 75) == 16
    assert get_juz_by_verse(36, 27) == 22
    assert get_juz_by_verse(36, 28) == 23
    assert get_juz_by_verse(114, 6) == 30


@pytest.mark.parametrize(
    "surah, verse",
    [(0, 1), (115, 1), (114, 7), (1, 8), (2, 0), (-1, -1)],
)
def test_out_of_domain_address_raises(surah, verse):
    with pytest.raises(JuzMappingError) as exc_info:
        get_juz_by_verse(surah, verse)
    assert exc_info.value.surah == surah
    assert exc_info.value.verse == verse


def test_single_juz_surah():
    assert get_juz_list_by_surah(1, 7) == [1]
    assert get_juz_list_by_surah(114, 6) == [30]


def test_surah_spanning_several_juz():
    assert get_juz_list_by_surah(2, 286) == [1, 2, 3]
    assert get_juz_list_by_surah(18, 110) == [15, 16]


def test_juz_list_matches_per_verse_mapping_for_every_surah():
    for surah, count in enumerate(SURAH_VERSE_COUNTS, start=1):
        expected = sorted({get_juz_by_verse(surah, v) for v in range(1, count + 1)})
        assert get_juz_list_by_surah(surah, count) == expected


def test_get_juz_info():
    info = get_juz_info(30)
    assert info.start == VerseRef(78, 1)
    assert info.to_payload() == {
        "number": 30,
        "start": {"surah": 78, "verse": 1},
        "end": {"surah": 114, "verse": 6},
    }
    assert get_juz_info(0) is None
    assert get_juz_info(31) is None


def test_adjacent_juz_terminals():
    assert get_adjacent_juz(1) == (None, 2)
    assert get_adjacent_juz(15) == (14, 16)
    assert get_adjacent_juz(30) == (29, None)


def test_validation_helpers():
    assert is_valid_surah(1) and is_valid_surah(114)
    assert not is_valid_surah(0) and not is_valid_surah(115)
    assert is_valid_juz(1) and is_valid_juz(30)
    assert not is_valid_juz(0) and not is_valid_juz(31)
    assert is_valid_verse(2, 286)
    assert not is_valid_verse(2, 287)
    assert not is_valid_verse(115, 1)


def test_verse_count_rejects_unknown_surah():
    assert verse_count(2) == 286
    with pytest.raises(ValueError):
        verse_count(115)
