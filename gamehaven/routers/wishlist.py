"""Guest wishlist endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from gamehaven.database import get_db
from gamehaven.models.guest import (
    ActionResponse,
    GuestVotesResponse,
    WishlistSummary,
    WishlistVoteCreate,
)
from gamehaven.services import wishlist

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])

DB = Annotated[Session, Depends(get_db)]
GuestIdentifier = Annotated[str, Query(alias="guestIdentifier", min_length=1, max_length=100)]


@router.get("/summary", response_model=list[WishlistSummary])
async def wishlist_summary(db: DB):
    return wishlist.summary(db)


@router.get("", response_model=GuestVotesResponse)
async def guest_votes(db: DB, guest_identifier: GuestIdentifier):
    return GuestVotesResponse(votes=wishlist.votes_for_guest(db, guest_identifier))


@router.post("", response_model=ActionResponse, status_code=201)
async def vote(body: WishlistVoteCreate, response: Response, db: DB):
    """Vote for a game; voting again only updates the display name."""
    created, _ = wishlist.add_vote(db, body.game_id, body.guest_identifier, body.guest_name)
    if not created:
        response.status_code = 200
        return ActionResponse(message="Already voted")
    return ActionResponse(message="Vote recorded")


@router.delete("/{game_id}", response_model=ActionResponse)
async def remove_vote(game_id: str, db: DB, guest_identifier: GuestIdentifier):
    removed = wishlist.remove_vote(db, game_id, guest_identifier)
    return ActionResponse(message="Vote removed" if removed else "No vote to remove")
