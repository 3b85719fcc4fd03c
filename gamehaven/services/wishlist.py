"""Guest wishlist votes ("we'd like to play this at the next game night")."""

from __future__ import annotations

import logging
import re

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gamehaven.database import Game, WishlistVote
from gamehaven.errors import GameNotFound
from gamehaven.models.guest import GuestVote, WishlistSummary

logger = logging.getLogger(__name__)

GUEST_NAME_MAX_CHARS = 50
_TAG_RE = re.compile(r"<[^>]*>")


def sanitize_name(name: str | None) -> str | None:
    """Trim, strip HTML tags and cap the display name; blank becomes ``None``."""
    if name is None:
        return None
    cleaned = _TAG_RE.sub("", name).strip()[:GUEST_NAME_MAX_CHARS].strip()
    return cleaned or None


def add_vote(
    db: Session,
    game_id: str,
    guest_identifier: str,
    guest_name: str | None = None,
) -> tuple[bool, GuestVote]:
    """Record a vote. Returns ``(created, vote)``; an existing vote only gets its name refreshed."""
    if db.get(Game, game_id) is None:
        raise GameNotFound("Game not found")

    name = sanitize_name(guest_name)
    vote = db.query(WishlistVote).filter_by(game_id=game_id, guest_identifier=guest_identifier).first()
    created = vote is None
    if created:
        vote = WishlistVote(game_id=game_id, guest_identifier=guest_identifier, guest_name=name)
        db.add(vote)
    elif name:
        vote.guest_name = name

    try:
        db.commit()
    except IntegrityError:
        # Concurrent first vote from the same guest; theirs won
        db.rollback()
        vote = db.query(WishlistVote).filter_by(game_id=game_id, guest_identifier=guest_identifier).one()
        created = False

    logger.debug("Wishlist vote for %s (created=%s)", game_id, created)
    return created, GuestVote(game_id=vote.game_id, guest_name=vote.guest_name)


def votes_for_guest(db: Session, guest_identifier: str) -> list[GuestVote]:
    rows = db.query(WishlistVote).filter(WishlistVote.guest_identifier == guest_identifier).all()
    return [GuestVote(game_id=row.game_id, guest_name=row.guest_name) for row in rows]


def summary(db: Session) -> list[WishlistSummary]:
    rows = (
        db.query(WishlistVote.game_id, func.count(WishlistVote.id), func.count(WishlistVote.guest_name))
        .group_by(WishlistVote.game_id)
        .all()
    )
    return [
        WishlistSummary(game_id=game_id, vote_count=votes, named_votes=named)
        for game_id, votes, named in rows
    ]


def remove_vote(db: Session, game_id: str, guest_identifier: str) -> bool:
    deleted = (
        db.query(WishlistVote)
        .filter(WishlistVote.game_id == game_id, WishlistVote.guest_identifier == guest_identifier)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
