"""Error kinds surfaced by the import pipeline, image proxy and guest services.

Every error carries the HTTP status the routers answer with. The XML
extractor and the normaliser never raise; only the orchestrating layers do.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for catalog errors."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidUrl(CatalogError):
    """Raised when a URL is missing, unparsable or not a recognised BGG page."""

    status_code = 400


# ── Import ───────────────────────────────────────────────────────────────


class ImportFailure(CatalogError):
    """Base exception for BGG import errors."""


class UpstreamFetchFailed(ImportFailure):
    """Raised when the BGG XML API is unreachable or answers non-2xx."""

    status_code = 500


class PersistenceError(ImportFailure):
    """Raised when the store rejects the write."""

    status_code = 500


# ── Image proxy ──────────────────────────────────────────────────────────


class ProxyFailure(CatalogError):
    """Base exception for image proxy errors."""


class HostNotAllowed(ProxyFailure):
    """Raised when the requested host is not on the allow-list."""

    status_code = 403


class UpstreamError(ProxyFailure):
    """Raised when the image host fails; ``status_code`` is the relayed status."""

    status_code = 502


# ── Guest interactions ───────────────────────────────────────────────────


class GuestActionError(CatalogError):
    """Base exception for rating / wishlist errors."""


class GameNotFound(GuestActionError):
    status_code = 404


class DuplicateRating(GuestActionError):
    status_code = 409
