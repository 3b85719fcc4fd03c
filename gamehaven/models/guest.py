"""Guest interaction models — ratings and wishlist votes.

Request bodies accept the camelCase keys the frontend sends; responses
answer with snake_case column names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RatingCreate(_CamelModel):
    game_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    guest_identifier: str = Field(min_length=1, max_length=100)
    device_fingerprint: str | None = Field(default=None, max_length=256)


class RatingDelete(_CamelModel):
    game_id: str = Field(min_length=1)
    guest_identifier: str = Field(min_length=1, max_length=100)


class GuestRating(BaseModel):
    game_id: str
    rating: int


class RatingSaved(BaseModel):
    id: str
    rating: int


class RatingSaveResponse(BaseModel):
    success: bool = True
    rating: RatingSaved


class GuestRatingsResponse(BaseModel):
    ratings: list[GuestRating]


class RatingSummary(BaseModel):
    game_id: str
    rating_count: int
    average_rating: float


class WishlistVoteCreate(_CamelModel):
    game_id: str = Field(min_length=1)
    guest_identifier: str = Field(min_length=1, max_length=100)
    guest_name: str | None = Field(default=None, max_length=100)


class GuestVote(BaseModel):
    game_id: str
    guest_name: str | None = None


class GuestVotesResponse(BaseModel):
    votes: list[GuestVote]


class WishlistSummary(BaseModel):
    game_id: str
    vote_count: int
    named_votes: int


class ActionResponse(BaseModel):
    success: bool = True
    message: str | None = None
