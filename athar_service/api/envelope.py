from typing import Any

from athar_service.models.common import Page


def success(data: Any, message: str) -> dict:
    return {"status": "success", "message": message, "data": data}


def paginated(page: Page, message: str) -> dict:
    return {"status": "success", "message": message, "data": page.items, "meta": page.meta}
