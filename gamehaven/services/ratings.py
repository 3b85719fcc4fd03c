"""Guest star ratings.

Guests are anonymous; a rating is keyed by the browser-generated guest
identifier. The client IP is only ever stored as a truncated SHA-256 hash,
and together with the device fingerprint it catches the same device
rating a game twice under a fresh identifier.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gamehaven.database import Game, GameRating
from gamehaven.errors import DuplicateRating, GameNotFound
from gamehaven.models.guest import GuestRating, RatingSaved, RatingSummary

logger = logging.getLogger(__name__)

IP_HASH_CHARS = 32
_TENTH = Decimal("0.1")


def hash_ip(ip: str | None) -> str | None:
    if not ip:
        return None
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()[:IP_HASH_CHARS]


def client_ip(headers: Mapping[str, str], peer: str | None = None) -> str | None:
    """Best-effort client address: first X-Forwarded-For hop, X-Real-IP, then the socket peer."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return peer


def _ensure_game(db: Session, game_id: str) -> None:
    if db.get(Game, game_id) is None:
        raise GameNotFound("Game not found")


def rate(
    db: Session,
    game_id: str,
    rating: int,
    guest_identifier: str,
    device_fingerprint: str | None = None,
    client_address: str | None = None,
) -> RatingSaved:
    """Create or update the guest's rating for a game."""
    _ensure_game(db, game_id)
    ip_hash = hash_ip(client_address)

    if device_fingerprint and ip_hash:
        clash = (
            db.query(GameRating.id)
            .filter(
                GameRating.game_id == game_id,
                GameRating.ip_address == ip_hash,
                GameRating.device_fingerprint == device_fingerprint,
                GameRating.guest_identifier != guest_identifier,
            )
            .first()
        )
        if clash is not None:
            logger.info("Rejected duplicate rating for game %s from a known device", game_id)
            raise DuplicateRating("You have already rated this game from this device")

    row = db.query(GameRating).filter_by(game_id=game_id, guest_identifier=guest_identifier).first()
    if row is None:
        # Device evidence is captured once; re-rating only changes the score
        row = GameRating(
            game_id=game_id,
            guest_identifier=guest_identifier,
            ip_address=ip_hash,
            device_fingerprint=device_fingerprint,
        )
        db.add(row)
    row.rating = rating

    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race against the same guest on another request
        db.rollback()
        raise DuplicateRating("Rating already recorded") from exc
    db.refresh(row)
    return RatingSaved(id=row.id, rating=row.rating)


def ratings_for_guest(db: Session, guest_identifier: str) -> list[GuestRating]:
    rows = db.query(GameRating).filter(GameRating.guest_identifier == guest_identifier).all()
    return [GuestRating(game_id=row.game_id, rating=row.rating) for row in rows]


def _one_decimal(average: float) -> float:
    """Round half away from zero, as SQL ``ROUND(numeric, 1)`` does."""
    return float(Decimal(str(average)).quantize(_TENTH, rounding=ROUND_HALF_UP))


def summary(db: Session) -> list[RatingSummary]:
    """Per-game rating count and average, rounded to one decimal."""
    rows = (
        db.query(GameRating.game_id, func.count(GameRating.id), func.avg(GameRating.rating))
        .group_by(GameRating.game_id)
        .all()
    )
    return [
        RatingSummary(game_id=game_id, rating_count=count, average_rating=_one_decimal(average))
        for game_id, count, average in rows
    ]


def remove(db: Session, game_id: str, guest_identifier: str) -> bool:
    """Delete the guest's rating; returns whether one existed."""
    deleted = (
        db.query(GameRating)
        .filter(GameRating.game_id == game_id, GameRating.guest_identifier == guest_identifier)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
