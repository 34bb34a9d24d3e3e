import math

from athar_service.models.common import PageMeta


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_page_meta(page: int, limit: int, total: int) -> PageMeta:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return PageMeta(
        current_page=page,
        total_pages=total_pages,
        total_items=total,
        items_per_page=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
