import pytest

from athar_service.core.exceptions import NotFoundError
from athar_service.services.surah_service import SurahService


@pytest.fixture
def surah_service(quran_repository):
    return SurahService(quran_repository)


@pytest.mark.asyncio
async def test_list_defaults_to_every_surah(surah_service):
    page = await surah_service.list_surahs()

    assert len(page.items) == 114
    assert page.meta.total_items == 114
    assert page.meta.total_pages == 1
    assert page.meta.has_next_page is False
    assert page.meta.has_prev_page is False
    assert page.items[0].juz == [1]
    assert page.items[1].juz == [1, 2, 3]
    assert page.items[-1].juz == [30]


@pytest.mark.asyncio
async def test_list_paginates(surah_service):
    page = await surah_service.list_surahs(page=2, limit=10)

    assert [s.number for s in page.items] == list(range(11, 21))
    assert page.meta.current_page == 2
    assert page.meta.total_pages == 12
    assert page.meta.has_next_page is True
    assert page.meta.has_prev_page is True


@pytest.mark.asyncio
async def test_list_searches_latin_name_and_meaning(surah_service):
    by_name = await surah_service.list_surahs(search="baqarah")
    by_meaning = await surah_service.list_surahs(search="  manusia ")

    assert [s.number for s in by_name.items] == [2]
    assert [s.number for s in by_meaning.items] == [114]
    assert by_meaning.meta.total_items == 1


@pytest.mark.asyncio
async def test_list_page_past_the_end_is_empty(surah_service):
    page = await surah_service.list_surahs(page=3, limit=100)

    assert page.items == []
    assert page.meta.total_pages == 2
    assert page.meta.has_next_page is False


@pytest.mark.asyncio
async def test_list_falls_back_to_juz_table_without_stored_verses(make_repository):
    service = SurahService(make_repository(surah_numbers=[2, 3], surahs_with_verses=[3]))

    page = await service.list_surahs()

    juz_by_surah = {s.number: s.juz for s in page.items}
    assert juz_by_surah == {2: [1, 2, 3], 3: [3, 4]}


@pytest.mark.asyncio
async def test_list_fallback_ignores_a_stored_verse_count_the_table_disagrees_with(make_repository):
    repository = make_repository(surah_numbers=[1, 2], surahs_with_verses=[1])
    repository.surahs[2].verse_count = 287

    page = await SurahService(repository).list_surahs()

    juz_by_surah = {s.number: s.juz for s in page.items}
    assert juz_by_surah == {1: [1], 2: [1, 2, 3]}
    assert page.items[1].verse_count == 287


@pytest.mark.asyncio
async def test_get_surah_with_verse_range_and_neighbours(surah_service):
    detail = await surah_service.get_surah(2, from_verse=255, to_verse=257)

    assert detail.surah.latin_name == "Al-Baqarah"
    assert detail.surah.verse_count == 286
    assert [v.number for v in detail.verses] == [255, 256, 257]
    assert detail.verses[0].juz == 3
    assert detail.prev_info.number == 1
    assert detail.next_info.number == 3


@pytest.mark.asyncio
async def test_first_and_last_surah_have_one_neighbour(surah_service):
    first = await surah_service.get_surah(1)
    last = await surah_service.get_surah(114)

    assert first.prev_info is None
    assert first.next_info.latin_name == "Al-Baqarah"
    assert len(first.verses) == 7
    assert last.prev_info.latin_name == "Al-Falaq"
    assert last.next_info is None


@pytest.mark.asyncio
async def test_unknown_surah_is_not_found(make_repository):
    service = SurahService(make_repository(surah_numbers=[1]))

    with pytest.raises(NotFoundError):
        await service.get_surah(2)
    with pytest.raises(NotFoundError):
        await service.get_surah_tafsir(2)


@pytest.mark.asyncio
async def test_inverted_range_selects_nothing(surah_service):
    detail = await surah_service.get_surah(2, from_verse=10, to_verse=5)
    tafsir = await surah_service.get_surah_tafsir(2, from_verse=10, to_verse=5)

    assert detail.verses == []
    assert tafsir.tafsir == []


@pytest.mark.asyncio
async def test_surah_tafsir_honours_range(surah_service):
    detail = await surah_service.get_surah_tafsir(112, to_verse=2)

    assert [t.verse_number for t in detail.tafsir] == [1, 2]
    assert detail.surah.number == 112
    assert detail.next_info.number == 113
