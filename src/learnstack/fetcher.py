from __future__ import annotations

import logging

import httpx

from .config import CatalogConfig
from .errors import FetchError

logger = logging.getLogger(__name__)


class CatalogFetcher:
    """Single-shot reader for a published spreadsheet endpoint. No caching, no retry."""

    def __init__(self, config: CatalogConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        response = await client.get(url, headers={"Cache-Control": "no-store"})
        response.raise_for_status()
        return response

    async def fetch_text(self, url: str) -> str:
        try:
            if self._client is not None:
                response = await self._get(self._client, url)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds, follow_redirects=True) as client:
                    response = await self._get(client, url)
        except httpx.HTTPStatusError as exc:
            raise FetchError(url, status=exc.response.status_code, cause=exc) from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, cause=exc) from exc
        logger.debug("Fetched %s (%s bytes)", url, len(response.content))
        return response.text
