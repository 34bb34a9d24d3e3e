from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, or_, select

from athar_service.core.exceptions import NotFoundError
from athar_service.models.common import Page
from athar_service.models.db import Doa
from athar_service.models.doa_models import DoaDetail, DoaOut, DoaRef
from athar_service.utils.pagination import build_page_meta, page_offset

logger = logging.getLogger(__name__)


def _filters(search: Optional[str], group: Optional[str]) -> list:
    clauses = []
    if search:
        pattern = f"%{search}%"
        clauses.append(
            or_(
                Doa.name.ilike(pattern),
                Doa.meaning.ilike(pattern),
                Doa.latin.ilike(pattern),
            )
        )
    if group:
        clauses.append(Doa.group == group)
    return clauses


class DoaService:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def list_doa(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        group: Optional[str] = None,
    ) -> Page[DoaOut]:
        clauses = _filters(search.strip() if search else None, group)

        async with self._session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(Doa).where(*clauses)
            )
            result = await session.scalars(
                select(Doa)
                .where(*clauses)
                .order_by(Doa.api_id)
                .offset(page_offset(page, limit))
                .limit(limit)
            )
            items = [DoaOut.model_validate(doa) for doa in result]

        return Page[DoaOut](items=items, meta=build_page_meta(page, limit, int(total or 0)))

    async def get_doa(self, api_id: int) -> DoaDetail:
        async with self._session_factory() as session:
            doa = (await session.scalars(select(Doa).where(Doa.api_id == api_id))).first()
            if doa is None:
                raise NotFoundError(f"Doa {api_id} not found")

            prev_row = (
                await session.execute(
                    select(Doa.api_id, Doa.name)
                    .where(Doa.api_id < api_id)
                    .order_by(Doa.api_id.desc())
                    .limit(1)
                )
            ).first()
            next_row = (
                await session.execute(
                    select(Doa.api_id, Doa.name)
                    .where(Doa.api_id > api_id)
                    .order_by(Doa.api_id.asc())
                    .limit(1)
                )
            ).first()

        detail = DoaDetail.model_validate(doa)
        detail.prev_info = DoaRef.model_validate(prev_row) if prev_row else None
        detail.next_info = DoaRef.model_validate(next_row) if next_row else None
        return detail

    async def list_groups(self) -> List[str]:
        async with self._session_factory() as session:
            result = await session.scalars(
                select(Doa.group).distinct().order_by(Doa.group)
            )
            return list(result)
