import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class EquranClient:
    """Thin reader for the equran.id content API used by the import jobs.

    Each getter returns the ``data`` object of the response, or ``None`` when
    the provider reports the item as missing. Transport errors and other HTTP
    failures propagate to the caller.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def _get_json(self, path: str) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"
        response = await self.http_client.get(url)
        if response.status_code == 404:
            logger.info(f"equran.id has no item at {url}")
            return None
        response.raise_for_status()
        return response.json()

    async def get_surah(self, number: int) -> Optional[Dict[str, Any]]:
        payload = await self._get_json(f"v2/surat/{number}")
        if not payload or payload.get("code") != 200 or not payload.get("data"):
            return None
        return payload["data"]

    async def get_tafsir(self, number: int) -> Optional[Dict[str, Any]]:
        payload = await self._get_json(f"v2/tafsir/{number}")
        if not payload or payload.get("code") != 200 or not payload.get("data"):
            return None
        return payload["data"]

    async def get_doa(self, api_id: int) -> Optional[Dict[str, Any]]:
        payload = await self._get_json(f"doa/{api_id}")
        if not payload or payload.get("status") == "error" or not payload.get("data"):
            return None
        return payload["data"]
