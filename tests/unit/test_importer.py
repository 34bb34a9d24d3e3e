import httpx
import pytest

from athar_service.services.importer import (
    ContentImporter,
    doa_row,
    surah_row,
    tafsir_rows,
    verse_rows,
)
from athar_service.services.juz_resolver import JuzMappingError


def surah_payload(number: int, verse_numbers):
    return {
        "nomor": number,
        "nama": f"سورة {number}",
        "namaLatin": f"Surah-{number}",
        "jumlahAyat": len(verse_numbers),
        "tempatTurun": "Mekah",
        "arti": f"Arti {number}",
        "deskripsi": None,
        "audioFull": {"01": f"https://cdn.example/{number}.mp3"},
        "ayat": [
            {
                "nomorAyat": v,
                "teksArab": f"ar {v}",
                "teksLatin": f"lat {v}",
                "teksIndonesia": f"id {v}",
                "audio": {},
            }
            for v in verse_numbers
        ],
    }


def doa_payload(api_id: int, name=None):
    return {
        "id": api_id,
        "grup": "Doa Harian",
        "nama": name or f"Doa {api_id}",
        "ar": "ar",
        "tr": "tr",
        "idn": "arti",
        "tentang": f"tentang {api_id}",
        "tag": ["harian"],
    }


class StubEquranClient:
    def __init__(self, surahs=None, tafsir=None, doa=None, failing=()):
        self.surahs = surahs or {}
        self.tafsir = tafsir or {}
        self.doa = doa or {}
        self.failing = set(failing)
        self.requested = []

    async def _lookup(self, kind, table, key):
        self.requested.append((kind, key))
        if (kind, key) in self.failing:
            raise httpx.ConnectError("connection refused")
        return table.get(key)

    async def get_surah(self, number):
        return await self._lookup("surah", self.surahs, number)

    async def get_tafsir(self, number):
        return await self._lookup("tafsir", self.tafsir, number)

    async def get_doa(self, api_id):
        return await self._lookup("doa", self.doa, api_id)


class InMemoryImportStore:
    def __init__(self):
        self.surahs = {}
        self.verses = {}
        self.tafsir = {}
        self.doa = {}

    async def surah_exists(self, number):
        return number in self.surahs

    async def add_surah(self, row):
        self.surahs[row["number"]] = row

    async def existing_verse_numbers(self, surah_number):
        return {v for (s, v) in self.verses if s == surah_number}

    async def add_verses(self, rows):
        for row in rows:
            self.verses[(row["surah_number"], row["number"])] = row

    async def existing_tafsir_numbers(self, surah_number):
        return {v for (s, v) in self.tafsir if s == surah_number}

    async def add_tafsir(self, rows):
        for row in rows:
            self.tafsir[(row["surah_number"], row["verse_number"])] = row

    async def doa_exists(self, api_id, name, description):
        return api_id in self.doa or any(
            d["name"] == name and d["description"] == description for d in self.doa.values()
        )

    async def add_doa(self, row):
        self.doa[row["api_id"]] = row


def test_surah_row_maps_provider_fields():
    row = surah_row(surah_payload(1, range(1, 8)))

    assert row == {
        "number": 1,
        "name": "سورة 1",
        "latin_name": "Surah-1",
        "verse_count": 7,
        "revelation_place": "Mekah",
        "meaning": "Arti 1",
        "description": "",
        "audio_full": {"01": "https://cdn.example/1.mp3"},
    }


def test_verse_rows_are_tagged_with_their_juz():
    payload = surah_payload(2, [141, 142, 253])

    rows = verse_rows(2, payload["ayat"])

    assert [(r["number"], r["juz"]) for r in rows] == [(141, 1), (142, 2), (253, 3)]
    assert rows[0]["translation"] == "id 141"
    assert rows[0]["audio"] is None


def test_verse_rows_reject_addresses_outside_the_corpus():
    with pytest.raises(JuzMappingError):
        verse_rows(1, [{"nomorAyat": 8}])


def test_tafsir_and_doa_rows():
    assert tafsir_rows(3, [{"ayat": 1, "teks": "penjelasan"}, {"ayat": 2, "teks": None}]) == [
        {"surah_number": 3, "verse_number": 1, "text": "penjelasan"},
        {"surah_number": 3, "verse_number": 2, "text": ""},
    ]
    row = doa_row(doa_payload(5))
    assert row["api_id"] == 5
    assert row["group"] == "Doa Harian"
    assert row["meaning"] == "arti"
    assert row["tags"] == ["harian"]


@pytest.mark.asyncio
async def test_import_surahs_seeds_then_skips_on_rerun():
    client = StubEquranClient(surahs={1: surah_payload(1, range(1, 8)), 2: surah_payload(2, range(1, 4))})
    store = InMemoryImportStore()
    importer = ContentImporter(client, store, delay_ms=0)

    surahs, verses = await importer.import_surahs(1, 3)

    assert (surahs.seeded, surahs.skipped, surahs.not_found) == (2, 0, 1)
    assert verses.seeded == 10
    assert store.verses[(1, 7)]["juz"] == 1

    surahs, verses = await importer.import_surahs(1, 2)
    assert (surahs.seeded, surahs.skipped) == (0, 2)
    assert (verses.seeded, verses.skipped) == (0, 10)


@pytest.mark.asyncio
async def test_import_surahs_fills_missing_verses_of_existing_surah():
    client = StubEquranClient(surahs={1: surah_payload(1, range(1, 8))})
    store = InMemoryImportStore()
    store.surahs[1] = surah_row(client.surahs[1])
    store.verses[(1, 1)] = {"surah_number": 1, "number": 1}

    surahs, verses = await ContentImporter(client, store, delay_ms=0).import_surahs(1, 1)

    assert surahs.skipped == 1
    assert (verses.seeded, verses.skipped) == (6, 1)


@pytest.mark.asyncio
async def test_fetch_errors_are_recorded_and_import_continues():
    client = StubEquranClient(
        surahs={2: surah_payload(2, [1])},
        failing=[("surah", 1)],
    )
    store = InMemoryImportStore()

    surahs, _ = await ContentImporter(client, store, delay_ms=0).import_surahs(1, 2)

    assert surahs.seeded == 1
    assert len(surahs.errors) == 1
    assert "surah 1" in surahs.errors[0]


@pytest.mark.asyncio
async def test_import_tafsir_skips_entries_without_a_stored_verse():
    client = StubEquranClient(
        tafsir={1: {"tafsir": [{"ayat": 1, "teks": "a"}, {"ayat": 2, "teks": "b"}, {"ayat": 3, "teks": "c"}]}}
    )
    store = InMemoryImportStore()
    store.verses[(1, 1)] = {}
    store.verses[(1, 2)] = {}
    store.tafsir[(1, 1)] = {"surah_number": 1, "verse_number": 1, "text": "a"}

    report = await ContentImporter(client, store, delay_ms=0).import_tafsir(1, 1)

    assert report.seeded == 1
    assert report.skipped == 2
    assert store.tafsir[(1, 2)]["text"] == "b"
    assert (1, 3) not in store.tafsir


@pytest.mark.asyncio
async def test_import_doa_stops_after_ten_consecutive_misses():
    doa = {1: doa_payload(1), 2: doa_payload(2), 4: doa_payload(4)}
    client = StubEquranClient(doa=doa)
    store = InMemoryImportStore()

    report = await ContentImporter(client, store, delay_ms=0).import_doa(1, 227)

    assert report.seeded == 3
    assert report.not_found == 11
    # id 3 missed once, then ids 5..14 are the ten in a row.
    assert client.requested[-1] == ("doa", 14)


@pytest.mark.asyncio
async def test_import_doa_skips_duplicates_by_id_and_by_content():
    client = StubEquranClient(doa={1: doa_payload(1), 2: doa_payload(2)})
    store = InMemoryImportStore()
    store.doa[1] = doa_row(doa_payload(1))
    store.doa[99] = doa_row(doa_payload(2)) | {"api_id": 99}

    report = await ContentImporter(client, store, delay_ms=0).import_doa(1, 2)

    assert report.seeded == 0
    assert report.skipped == 2
