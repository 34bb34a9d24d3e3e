from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from athar_service.models.db import Surah, Tafsir, Verse


def _with_verse_bounds(
    stmt: Select,
    column,
    from_verse: Optional[int],
    to_verse: Optional[int],
) -> Select:
    if from_verse is not None:
        stmt = stmt.where(column >= from_verse)
    if to_verse is not None:
        stmt = stmt.where(column <= to_verse)
    return stmt


def _surah_search_clause(search: str):
    pattern = f"%{search}%"
    return or_(Surah.latin_name.ilike(pattern), Surah.meaning.ilike(pattern))


class QuranRepository:
    """Read queries over surahs, verses and tafsir.

    Every method opens its own short-lived session. Storage errors are not
    caught here; they reach the caller unchanged.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # --- surahs ---------------------------------------------------------

    async def get_surah(self, number: int) -> Optional[Surah]:
        async with self._session_factory() as session:
            result = await session.scalars(select(Surah).where(Surah.number == number))
            return result.first()

    async def get_surah_refs(self, numbers: Iterable[int]) -> Dict[int, Surah]:
        """Return lightweight surah rows keyed by number.

        Only ``number``, ``name`` and ``latin_name`` are guaranteed to be
        populated on the returned objects.
        """
        wanted = sorted(set(numbers))
        if not wanted:
            return {}
        async with self._session_factory() as session:
            rows = await session.execute(
                select(Surah.number, Surah.name, Surah.latin_name)
                .where(Surah.number.in_(wanted))
                .order_by(Surah.number)
            )
            return {row.number: row for row in rows}

    async def get_surahs_by_numbers(self, numbers: Iterable[int]) -> List[Surah]:
        wanted = sorted(set(numbers))
        if not wanted:
            return []
        async with self._session_factory() as session:
            result = await session.scalars(
                select(Surah).where(Surah.number.in_(wanted)).order_by(Surah.number)
            )
            return list(result)

    async def list_surah_refs(self) -> List:
        async with self._session_factory() as session:
            rows = await session.execute(
                select(Surah.number, Surah.name, Surah.latin_name).order_by(Surah.number)
            )
            return list(rows)

    async def list_surahs(
        self,
        *,
        offset: int,
        limit: int,
        search: Optional[str] = None,
    ) -> List[Surah]:
        stmt = select(Surah).order_by(Surah.number).offset(offset).limit(limit)
        if search:
            stmt = stmt.where(_surah_search_clause(search))
        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            return list(result)

    async def count_surahs(self, search: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(Surah)
        if search:
            stmt = stmt.where(_surah_search_clause(search))
        async with self._session_factory() as session:
            return int(await session.scalar(stmt) or 0)

    # --- verses ---------------------------------------------------------

    async def get_verses(
        self,
        surah_number: int,
        *,
        juz: Optional[int] = None,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
    ) -> List[Verse]:
        stmt = select(Verse).where(Verse.surah_number == surah_number)
        if juz is not None:
            stmt = stmt.where(Verse.juz == juz)
        stmt = _with_verse_bounds(stmt, Verse.number, from_verse, to_verse)
        async with self._session_factory() as session:
            result = await session.scalars(stmt.order_by(Verse.number))
            return list(result)

    async def count_verses_in_juz(self, surah_number: int, juz: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Verse)
            .where(Verse.surah_number == surah_number, Verse.juz == juz)
        )
        async with self._session_factory() as session:
            return int(await session.scalar(stmt) or 0)

    async def get_surah_numbers_in_juz(
        self,
        juz: int,
        *,
        descending: bool = False,
    ) -> List[int]:
        """Distinct surahs that have stored verses tagged with ``juz``."""
        order = Verse.surah_number.desc() if descending else Verse.surah_number.asc()
        stmt = (
            select(Verse.surah_number)
            .where(Verse.juz == juz)
            .group_by(Verse.surah_number)
            .order_by(order)
        )
        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            return list(result)

    async def get_juz_surah_ranges(self, juz: int) -> List[Tuple[int, int, int, int]]:
        """Per-surah ``(surah_number, min_verse, max_verse, count)`` inside ``juz``."""
        stmt = (
            select(
                Verse.surah_number,
                func.min(Verse.number),
                func.max(Verse.number),
                func.count(Verse.id),
            )
            .where(Verse.juz == juz)
            .group_by(Verse.surah_number)
            .order_by(Verse.surah_number)
        )
        async with self._session_factory() as session:
            rows = await session.execute(stmt)
            return [tuple(row) for row in rows]

    async def count_verses_by_juz(self) -> Dict[int, int]:
        stmt = select(Verse.juz, func.count(Verse.id)).group_by(Verse.juz)
        async with self._session_factory() as session:
            rows = await session.execute(stmt)
            return {juz: count for juz, count in rows}

    async def get_surah_juz_pairs(
        self,
        surah_numbers: Optional[Sequence[int]] = None,
    ) -> List[Tuple[int, int]]:
        """Distinct ``(surah_number, juz)`` pairs present in storage, ordered."""
        stmt = select(Verse.surah_number, Verse.juz).group_by(Verse.surah_number, Verse.juz)
        if surah_numbers is not None:
            stmt = stmt.where(Verse.surah_number.in_(list(surah_numbers)))
        stmt = stmt.order_by(Verse.surah_number, Verse.juz)
        async with self._session_factory() as session:
            rows = await session.execute(stmt)
            return [(surah, juz) for surah, juz in rows]

    # --- tafsir ---------------------------------------------------------

    async def get_tafsir(
        self,
        surah_number: int,
        *,
        from_verse: Optional[int] = None,
        to_verse: Optional[int] = None,
        verse_numbers: Optional[Sequence[int]] = None,
    ) -> List[Tafsir]:
        stmt = select(Tafsir).where(Tafsir.surah_number == surah_number)
        stmt = _with_verse_bounds(stmt, Tafsir.verse_number, from_verse, to_verse)
        if verse_numbers is not None:
            if not verse_numbers:
                return []
            stmt = stmt.where(Tafsir.verse_number.in_(list(verse_numbers)))
        async with self._session_factory() as session:
            result = await session.scalars(stmt.order_by(Tafsir.verse_number))
            return list(result)
