"""Guest rating endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gamehaven.database import get_db
from gamehaven.models.guest import (
    ActionResponse,
    GuestRatingsResponse,
    RatingCreate,
    RatingDelete,
    RatingSaveResponse,
    RatingSummary,
)
from gamehaven.services import ratings

router = APIRouter(prefix="/api/ratings", tags=["ratings"])

DB = Annotated[Session, Depends(get_db)]


@router.get("/summary", response_model=list[RatingSummary])
async def rating_summary(db: DB):
    return ratings.summary(db)


@router.get("", response_model=GuestRatingsResponse)
async def guest_ratings(
    db: DB,
    guest_identifier: Annotated[str, Query(alias="guestIdentifier", min_length=1, max_length=100)],
):
    """Ratings the calling guest has left."""
    return GuestRatingsResponse(ratings=ratings.ratings_for_guest(db, guest_identifier))


@router.post("", response_model=RatingSaveResponse)
async def rate_game(body: RatingCreate, request: Request, db: DB):
    peer = request.client.host if request.client else None
    saved = ratings.rate(
        db,
        body.game_id,
        body.rating,
        body.guest_identifier,
        device_fingerprint=body.device_fingerprint,
        client_address=ratings.client_ip(request.headers, peer),
    )
    return RatingSaveResponse(rating=saved)


@router.delete("", response_model=ActionResponse)
async def delete_rating(body: RatingDelete, db: DB):
    removed = ratings.remove(db, body.game_id, body.guest_identifier)
    return ActionResponse(message="Rating removed" if removed else "No rating to remove")
