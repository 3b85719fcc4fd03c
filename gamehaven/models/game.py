"""Game catalog models — the canonical representation of an imported game."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DifficultyLevel = Literal["1 - Light", "2 - Medium Light", "3 - Medium", "4 - Medium Heavy", "5 - Heavy"]
GameType = Literal["Board Game", "Card Game", "Dice Game", "Party Game", "War Game", "Miniatures", "RPG", "Other"]
PlayTime = Literal[
    "0-15 Minutes",
    "15-30 Minutes",
    "30-45 Minutes",
    "45-60 Minutes",
    "60+ Minutes",
    "2+ Hours",
    "3+ Hours",
]

DIFFICULTY_OPTIONS: tuple[DifficultyLevel, ...] = (
    "1 - Light",
    "2 - Medium Light",
    "3 - Medium",
    "4 - Medium Heavy",
    "5 - Heavy",
)

PLAY_TIME_OPTIONS: tuple[PlayTime, ...] = (
    "0-15 Minutes",
    "15-30 Minutes",
    "30-45 Minutes",
    "45-60 Minutes",
    "60+ Minutes",
    "2+ Hours",
    "3+ Hours",
)


class GameRecord(BaseModel):
    """A catalog game as returned to the frontend."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    title: str
    description: str | None = None
    image_url: str | None = None
    additional_images: list[str] = Field(default_factory=list)
    difficulty: DifficultyLevel = "3 - Medium"
    game_type: GameType = "Board Game"
    play_time: PlayTime = "45-60 Minutes"
    min_players: int = 1
    max_players: int = 4
    suggested_age: str = "10+"
    bgg_id: str | None = None
    bgg_url: str | None = None
    is_for_sale: bool = False
    is_coming_soon: bool = False
    is_expansion: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ImportRequest(BaseModel):
    """Request body for a single BGG import."""

    url: str = Field(min_length=1)
    upsert: bool | None = None  # falls back to BGG_IMPORT_UPSERT


class ImportResponse(BaseModel):
    success: bool = True
    game: GameRecord


class BulkImportRequest(BaseModel):
    """BGG game URLs (or bare numeric ids) to import in one go."""

    urls: list[str] = Field(min_length=1, max_length=50)


class BulkImportResponse(BaseModel):
    success: bool = True
    imported: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


class LookupRequest(BaseModel):
    query: str = Field(min_length=1, max_length=100)


class LookupResult(BaseModel):
    """Lightweight BGG search hit."""

    bgg_id: str
    name: str


class LookupResponse(BaseModel):
    success: bool = True
    results: list[LookupResult]
