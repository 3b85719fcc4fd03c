"""Thin async client for the BoardGameGeek XML API 2.

Each call is a single bounded request: no retry, no caching. A transport
error or a non-2xx answer (BGG answers 429 / 5xx under load) surfaces
immediately as :class:`UpstreamFetchFailed`; retrying is the caller's
decision.
"""

from __future__ import annotations

import logging

import httpx

from gamehaven.config import settings
from gamehaven.errors import UpstreamFetchFailed

logger = logging.getLogger(__name__)

USER_AGENT = "GameHaven/2.0 (BGG Import)"


class BggClient:
    def __init__(
        self,
        base_url: str,
        *,
        api_token: str = "",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_token = api_token
        self._transport = transport

    @classmethod
    def from_settings(cls) -> BggClient:
        return cls(
            settings.bgg_api_base,
            api_token=settings.bgg_api_token,
            timeout=settings.http_timeout_seconds,
        )

    async def fetch_thing(self, bgg_id: str) -> str:
        """Return the raw ``thing`` document (with statistics) for *bgg_id*."""
        return await self._get("thing", {"id": bgg_id, "stats": 1})

    async def search(self, query: str) -> str:
        """Return the raw ``search`` document for board games matching *query*."""
        return await self._get("search", {"query": query, "type": "boardgame"})

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/xml, text/xml"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    async def _get(self, endpoint: str, params: dict[str, str | int]) -> str:
        url = f"{self.base_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("BGG %s request failed: %s", endpoint, exc)
            raise UpstreamFetchFailed(f"BGG request failed: {exc}") from exc

        if not response.is_success:
            logger.warning("BGG %s answered HTTP %s", endpoint, response.status_code)
            raise UpstreamFetchFailed(f"BGG answered HTTP {response.status_code}")

        return response.text
