"""Image proxy — re-serve hotlinked BGG images from our own origin.

The allow-list is the only thing standing between this endpoint and an
open relay, so it is an exact, immutable hostname set handed to the
proxy at construction. Subdomains and lookalikes of an allowed host are
rejected, and redirects are never followed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from gamehaven.config import settings
from gamehaven.errors import HostNotAllowed, InvalidUrl, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"
CACHE_CONTROL = "public, max-age=86400"
ALLOWED_SCHEMES = frozenset({"http", "https"})

# Geekdo's CDN only answers to literal parentheses in its filter paths
_ENCODED_PARENS = (
    (re.compile("%2528", re.IGNORECASE), "("),
    (re.compile("%2529", re.IGNORECASE), ")"),
    (re.compile("%28", re.IGNORECASE), "("),
    (re.compile("%29", re.IGNORECASE), ")"),
)


@dataclass(frozen=True)
class ProxiedImage:
    content: bytes
    content_type: str

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Cache-Control": CACHE_CONTROL,
            "X-Content-Type-Options": "nosniff",
        }


class ImageProxy:
    def __init__(
        self,
        allowed_hosts: Iterable[str],
        *,
        user_agent: str = "GameHaven/2.0 (Image Proxy)",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.allowed_hosts = frozenset(host.strip().lower() for host in allowed_hosts if host.strip())
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> ImageProxy:
        return cls(
            settings.image_proxy_allowed_hosts,
            user_agent=settings.image_proxy_user_agent,
            timeout=settings.http_timeout_seconds,
        )

    def validate(self, requested_url: str | None) -> str:
        """Return the normalised target URL or raise before any network I/O."""
        if not requested_url or not requested_url.strip():
            raise InvalidUrl("URL parameter required")

        target = requested_url.strip()
        for pattern, literal in _ENCODED_PARENS:
            target = pattern.sub(literal, target)

        try:
            parts = urlsplit(target)
            hostname = parts.hostname
            # Non-numeric or out-of-range ports raise here
            parts.port
        except ValueError as exc:
            raise InvalidUrl("Invalid URL") from exc

        if parts.scheme.lower() not in ALLOWED_SCHEMES or not hostname:
            raise InvalidUrl("Invalid URL")

        if hostname.lower() not in self.allowed_hosts:
            logger.warning("Image proxy refused host %s", hostname)
            raise HostNotAllowed("Host not allowed")

        return target

    async def fetch(self, requested_url: str | None) -> ProxiedImage:
        target = self.validate(requested_url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                headers={"User-Agent": self.user_agent, "Accept": "image/*"},
                transport=self._transport,
            ) as client:
                response = await client.get(target)
        except httpx.InvalidURL as exc:
            raise InvalidUrl("Invalid URL") from exc
        except httpx.HTTPError as exc:
            logger.warning("Image fetch failed for %s: %s", target, exc)
            raise UpstreamError("Failed to fetch image", status_code=502) from exc

        if not response.is_success:
            # A redirect could lead off the allow-list; report it as a bad gateway
            status = 502 if response.is_redirect else response.status_code
            logger.info("Image host answered HTTP %s for %s", response.status_code, target)
            raise UpstreamError("Failed to fetch image", status_code=status)

        return ProxiedImage(
            content=response.content,
            content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
        )
