"""Public catalog reads."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gamehaven.database import Game, get_db
from gamehaven.errors import GameNotFound
from gamehaven.models.game import DifficultyLevel, GameRecord, PlayTime

router = APIRouter(prefix="/api/games", tags=["games"])

DB = Annotated[Session, Depends(get_db)]


@router.get("", response_model=list[GameRecord])
async def list_games(
    db: DB,
    difficulty: DifficultyLevel | None = None,
    play_time: PlayTime | None = None,
    for_sale: bool | None = None,
    coming_soon: bool | None = None,
):
    """List catalog games alphabetically, optionally filtered."""
    query = db.query(Game)
    if difficulty is not None:
        query = query.filter(Game.difficulty == difficulty)
    if play_time is not None:
        query = query.filter(Game.play_time == play_time)
    if for_sale is not None:
        query = query.filter(Game.is_for_sale == for_sale)
    if coming_soon is not None:
        query = query.filter(Game.is_coming_soon == coming_soon)
    return [GameRecord.model_validate(game) for game in query.order_by(Game.title.asc()).all()]


@router.get("/{game_id}", response_model=GameRecord)
async def get_game(game_id: str, db: DB):
    game = db.get(Game, game_id)
    if game is None:
        raise GameNotFound("Game not found")
    return GameRecord.model_validate(game)
