"""Pattern-based field extraction from BGG XML API documents.

The BGG ``thing`` document is loosely specified and frequently partial,
so fields are pulled out with targeted regular expressions instead of a
full XML parse. Every extractor degrades to a documented default and
never raises; callers only see :func:`extract` and :func:`parse_thing`,
so a stricter parser can replace the patterns without touching them.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_TITLE = "Unknown Game"
DEFAULT_MIN_PLAYERS = 1
DEFAULT_MAX_PLAYERS = 4
DEFAULT_PLAYING_TIME = 45
DEFAULT_WEIGHT = 2.5
DESCRIPTION_MAX_CHARS = 2000
SEARCH_RESULT_LIMIT = 10

# Attribute values are matched up to the same quote character that opened
# them, so "Tzolk'in" survives inside double quotes.
_PRIMARY_NAME_RE = re.compile(
    r"""<name\b[^>]*\btype=["']primary["'][^>]*\bvalue=(["'])(.*?)\1""",
    re.IGNORECASE,
)
_DESCRIPTION_RE = re.compile(r"<description>(.*?)</description>", re.IGNORECASE | re.DOTALL)
_IMAGE_RE = re.compile(r"<image>\s*([^<]*?)\s*</image>", re.IGNORECASE)
_SEARCH_ITEM_RE = re.compile(
    r"""<item\b[^>]*\btype=["']boardgame["'][^>]*\bid=["'](\d+)["'][^>]*>\s*"""
    r"""<name\b[^>]*\btype=["']primary["'][^>]*\bvalue=(["'])(.*?)\2""",
    re.IGNORECASE,
)


def _attr_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(rf"""<{tag}\b[^>]*\bvalue=(["'])(.*?)\1""", re.IGNORECASE)


_VALUE_PATTERNS: dict[str, re.Pattern[str]] = {
    tag: _attr_pattern(tag)
    for tag in ("minplayers", "maxplayers", "playingtime", "averageweight", "minage", "yearpublished")
}


@dataclass(frozen=True)
class ThingFields:
    """Raw (not yet bucketed) fields of one BGG ``thing``."""

    title: str = DEFAULT_TITLE
    description: str | None = None
    image_url: str | None = None
    min_players: int = DEFAULT_MIN_PLAYERS
    max_players: int = DEFAULT_MAX_PLAYERS
    playing_time: int = DEFAULT_PLAYING_TIME
    weight: float = DEFAULT_WEIGHT
    min_age: int | None = None
    year_published: int | None = None


# ── Primitive readers ────────────────────────────────────────────────────


def _attr_value(document: str, tag: str) -> str | None:
    match = _VALUE_PATTERNS[tag].search(document)
    return match.group(2).strip() if match else None


def _positive_int(raw: str | None) -> int | None:
    """Parse an integer attribute; BGG uses 0 for "unknown"."""
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _positive_float(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # NaN fails the comparison as well
    return value if value > 0 else None


# ── Field extractors ─────────────────────────────────────────────────────


def extract_title(document: str) -> str:
    match = _PRIMARY_NAME_RE.search(document)
    if not match:
        return DEFAULT_TITLE
    title = html.unescape(match.group(2)).strip()
    return title or DEFAULT_TITLE


def extract_description(document: str) -> str | None:
    """Return the description with ``&#10;`` decoded, capped at 2000 chars."""
    match = _DESCRIPTION_RE.search(document)
    if not match:
        return None
    return match.group(1).replace("&#10;", "\n")[:DESCRIPTION_MAX_CHARS]


def extract_image_url(document: str) -> str | None:
    match = _IMAGE_RE.search(document)
    if not match or not match.group(1):
        return None
    return match.group(1)


def extract_min_players(document: str) -> int:
    return _positive_int(_attr_value(document, "minplayers")) or DEFAULT_MIN_PLAYERS


def extract_max_players(document: str) -> int:
    return _positive_int(_attr_value(document, "maxplayers")) or DEFAULT_MAX_PLAYERS


def extract_playing_time(document: str) -> int:
    return _positive_int(_attr_value(document, "playingtime")) or DEFAULT_PLAYING_TIME


def extract_weight(document: str) -> float:
    """Average community weight; 0 means nobody voted."""
    return _positive_float(_attr_value(document, "averageweight")) or DEFAULT_WEIGHT


def extract_min_age(document: str) -> int | None:
    return _positive_int(_attr_value(document, "minage"))


def extract_year_published(document: str) -> int | None:
    return _positive_int(_attr_value(document, "yearpublished"))


_EXTRACTORS: dict[str, Callable[[str], Any]] = {
    "title": extract_title,
    "description": extract_description,
    "image_url": extract_image_url,
    "min_players": extract_min_players,
    "max_players": extract_max_players,
    "playing_time": extract_playing_time,
    "weight": extract_weight,
    "min_age": extract_min_age,
    "year_published": extract_year_published,
}

FIELDS: tuple[str, ...] = tuple(_EXTRACTORS)


def extract(document: str | None, field: str) -> Any:
    """Extract a single named field from *document*, or its default.

    Raises ``KeyError`` only for a field name this module does not know;
    document content never causes an error.
    """
    return _EXTRACTORS[field](document or "")


def parse_thing(document: str | None) -> ThingFields:
    """Run every extractor over a ``thing`` document."""
    return ThingFields(**{name: extract(document, name) for name in FIELDS})


def parse_search_results(document: str | None, limit: int = SEARCH_RESULT_LIMIT) -> list[tuple[str, str]]:
    """Return ``(bgg_id, name)`` pairs from a BGG ``search`` document."""
    results: list[tuple[str, str]] = []
    for match in _SEARCH_ITEM_RE.finditer(document or ""):
        results.append((match.group(1), html.unescape(match.group(3))))
        if len(results) >= limit:
            break
    return results
