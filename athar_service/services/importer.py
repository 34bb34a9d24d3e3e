"""
One-shot content import from equran.id into the local database.

Rows that already exist are skipped, so every job can be re-run safely. A
failed fetch or insert is recorded on the report and the job moves on to the
next item; there is no retry. A verse address the juz table cannot place is a
data-integrity problem and aborts the job.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set, Tuple

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from athar_service.core.database import session_scope
from athar_service.data.juz_mapping import TOTAL_SURAHS, verse_count
from athar_service.models.db import Doa, Surah, Tafsir, Verse
from athar_service.services.equran_client import EquranClient
from athar_service.services.juz_resolver import get_juz_by_verse

logger = logging.getLogger(__name__)

# The doa catalogue has gaps; this many misses in a row means we ran off the end.
DOA_CONSECUTIVE_MISS_LIMIT = 10


@dataclass
class ImportReport:
    label: str
    seeded: int = 0
    skipped: int = 0
    not_found: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.seeded + self.skipped + self.not_found + len(self.errors)

    def summary(self) -> str:
        return (
            f"{self.label}: seeded={self.seeded} skipped={self.skipped} "
            f"not_found={self.not_found} errors={len(self.errors)}"
        )


# --- payload mapping --------------------------------------------------------

def surah_row(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "number": payload["nomor"],
        "name": payload.get("nama") or "",
        "latin_name": payload.get("namaLatin") or "",
        "verse_count": payload["jumlahAyat"],
        "revelation_place": payload.get("tempatTurun") or "",
        "meaning": payload.get("arti") or "",
        "description": payload.get("deskripsi") or "",
        "audio_full": payload.get("audioFull") or None,
    }


def verse_rows(surah_number: int, ayat: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Map provider verses to rows, tagging each with its juz."""
    rows = []
    for item in ayat:
        number = item["nomorAyat"]
        rows.append(
            {
                "surah_number": surah_number,
                "number": number,
                "juz": get_juz_by_verse(surah_number, number),
                "arabic": item.get("teksArab") or "",
                "latin": item.get("teksLatin") or "",
                "translation": item.get("teksIndonesia") or "",
                "audio": item.get("audio") or None,
            }
        )
    return rows


def tafsir_rows(surah_number: int, entries: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "surah_number": surah_number,
            "verse_number": entry["ayat"],
            "text": entry.get("teks") or "",
        }
        for entry in entries
    ]


def doa_row(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "api_id": payload["id"],
        "group": payload.get("grup") or "",
        "name": payload.get("nama") or "",
        "arabic": payload.get("ar") or "",
        "latin": payload.get("tr") or "",
        "meaning": payload.get("idn") or "",
        "description": payload.get("tentang") or "",
        "tags": list(payload.get("tag") or []),
    }


# --- storage ----------------------------------------------------------------

class SqlImportStore:
    """Existence checks and inserts used by ``ContentImporter``."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def surah_exists(self, number: int) -> bool:
        async with self._session_factory() as session:
            found = await session.scalar(select(Surah.number).where(Surah.number == number))
            return found is not None

    async def add_surah(self, row: Dict[str, Any]) -> None:
        async with session_scope(self._session_factory) as session:
            session.add(Surah(**row))

    async def existing_verse_numbers(self, surah_number: int) -> Set[int]:
        async with self._session_factory() as session:
            result = await session.scalars(
                select(Verse.number).where(Verse.surah_number == surah_number)
            )
            return set(result)

    async def add_verses(self, rows: List[Dict[str, Any]]) -> None:
        async with session_scope(self._session_factory) as session:
            session.add_all(Verse(**row) for row in rows)

    async def existing_tafsir_numbers(self, surah_number: int) -> Set[int]:
        async with self._session_factory() as session:
            result = await session.scalars(
                select(Tafsir.verse_number).where(Tafsir.surah_number == surah_number)
            )
            return set(result)

    async def add_tafsir(self, rows: List[Dict[str, Any]]) -> None:
        async with session_scope(self._session_factory) as session:
            session.add_all(Tafsir(**row) for row in rows)

    async def doa_exists(self, api_id: int, name: str, description: str) -> bool:
        async with self._session_factory() as session:
            found = await session.scalar(
                select(Doa.api_id).where(
                    (Doa.api_id == api_id)
                    | ((Doa.name == name) & (Doa.description == description))
                ).limit(1)
            )
            return found is not None

    async def add_doa(self, row: Dict[str, Any]) -> None:
        async with session_scope(self._session_factory) as session:
            session.add(Doa(**row))


# --- jobs -------------------------------------------------------------------

class ContentImporter:
    def __init__(self, client: EquranClient, store, delay_ms: int = 200):
        self.client = client
        self.store = store
        self.delay_ms = delay_ms

    async def _pause(self) -> None:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)

    async def import_surahs(
        self,
        start: int = 1,
        end: int = TOTAL_SURAHS,
    ) -> Tuple[ImportReport, ImportReport]:
        """Import surahs and their verses; returns ``(surah_report, verse_report)``."""
        surahs = ImportReport("surah")
        verses = ImportReport("verse")

        for number in range(start, end + 1):
            if number > start:
                await self._pause()

            try:
                payload = await self.client.get_surah(number)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Fetching surah {number} failed: {e}")
                surahs.errors.append(f"surah {number}: {e}")
                continue

            if payload is None:
                surahs.not_found += 1
                logger.warning(f"Surah {number} not found upstream")
                continue

            row = surah_row(payload)
            if row["verse_count"] != verse_count(row["number"]):
                logger.warning(
                    f"Surah {row['number']} reports {row['verse_count']} verses, "
                    f"expected {verse_count(row['number'])}"
                )

            try:
                if await self.store.surah_exists(row["number"]):
                    surahs.skipped += 1
                else:
                    await self.store.add_surah(row)
                    surahs.seeded += 1
                    logger.info(f"Seeded surah {row['number']} {row['latin_name']}")
                # Verses are filled in even for an existing surah.
                await self._import_verses(row["number"], payload.get("ayat") or [], verses)
            except SQLAlchemyError as e:
                logger.error(f"Storing surah {number} failed: {e}")
                surahs.errors.append(f"surah {number}: {e}")

        return surahs, verses

    async def _import_verses(
        self,
        surah_number: int,
        ayat: List[Dict[str, Any]],
        report: ImportReport,
    ) -> None:
        existing = await self.store.existing_verse_numbers(surah_number)
        rows = verse_rows(surah_number, (a for a in ayat if a["nomorAyat"] not in existing))
        report.skipped += len(ayat) - len(rows)
        if rows:
            await self.store.add_verses(rows)
            report.seeded += len(rows)

    async def import_tafsir(
        self,
        start: int = 1,
        end: int = TOTAL_SURAHS,
    ) -> ImportReport:
        report = ImportReport("tafsir")

        for number in range(start, end + 1):
            if number > start:
                await self._pause()

            try:
                payload = await self.client.get_tafsir(number)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Fetching tafsir {number} failed: {e}")
                report.errors.append(f"tafsir {number}: {e}")
                continue

            if payload is None:
                report.not_found += 1
                continue

            entries = payload.get("tafsir") or []
            if not entries:
                logger.warning(f"No tafsir entries for surah {number}")
                continue

            try:
                verse_numbers = await self.store.existing_verse_numbers(number)
                done = await self.store.existing_tafsir_numbers(number)
                fresh = []
                for row in tafsir_rows(number, entries):
                    if row["verse_number"] in done:
                        report.skipped += 1
                    elif row["verse_number"] not in verse_numbers:
                        # Tafsir rows reference verses; import surahs first.
                        report.skipped += 1
                        logger.warning(
                            f"Tafsir for {number}:{row['verse_number']} has no stored verse"
                        )
                    else:
                        fresh.append(row)
                if fresh:
                    await self.store.add_tafsir(fresh)
                    report.seeded += len(fresh)
            except SQLAlchemyError as e:
                logger.error(f"Storing tafsir {number} failed: {e}")
                report.errors.append(f"tafsir {number}: {e}")

        return report

    async def import_doa(self, start: int = 1, max_id: int = 227) -> ImportReport:
        report = ImportReport("doa")
        misses = 0

        for api_id in range(start, max_id + 1):
            if api_id > start:
                await self._pause()

            try:
                payload = await self.client.get_doa(api_id)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Fetching doa {api_id} failed: {e}")
                report.errors.append(f"doa {api_id}: {e}")
                continue

            if payload is None:
                report.not_found += 1
                misses += 1
                if misses >= DOA_CONSECUTIVE_MISS_LIMIT:
                    logger.info(f"Stopping doa import after {misses} consecutive missing ids")
                    break
                continue
            misses = 0

            row = doa_row(payload)
            try:
                if await self.store.doa_exists(row["api_id"], row["name"], row["description"]):
                    report.skipped += 1
                    continue
                await self.store.add_doa(row)
                report.seeded += 1
            except SQLAlchemyError as e:
                logger.error(f"Storing doa {api_id} failed: {e}")
                report.errors.append(f"doa {api_id}: {e}")

        return report


def create_importer(
    http_client,
    session_factory,
    *,
    base_url: str,
    delay_ms: int,
) -> ContentImporter:
    return ContentImporter(
        EquranClient(http_client, base_url),
        SqlImportStore(session_factory),
        delay_ms=delay_ms,
    )
