"""SQLite/PostgreSQL database engine, ORM tables and session helpers.

Uses SQLAlchemy 2.x with a synchronous driver; route handlers receive a
request-scoped session through :func:`get_db`.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from gamehaven.config import settings

if settings.database_url.startswith("sqlite:///"):
    # Ensure data directory exists
    _db_path = settings.database_url.replace("sqlite:///", "")
    Path(_db_path).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(settings.database_url, echo=settings.debug)
SessionLocal = sessionmaker(bind=engine)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


class Game(Base):
    """A catalog entry — created by the BGG importer, edited by admins."""

    __tablename__ = "games"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    additional_images = Column(JSON, nullable=False, default=list)
    difficulty = Column(String(32), nullable=False, default="3 - Medium")
    game_type = Column(String(32), nullable=False, default="Board Game")
    play_time = Column(String(32), nullable=False, default="45-60 Minutes")
    min_players = Column(Integer, nullable=False, default=1)
    max_players = Column(Integer, nullable=False, default=4)
    suggested_age = Column(String(8), nullable=False, default="10+")
    # Indexed, not unique: the insert-only import path may store duplicates.
    bgg_id = Column(String(32), nullable=True, index=True)
    bgg_url = Column(Text, nullable=True)
    is_for_sale = Column(Boolean, nullable=False, default=False)
    is_coming_soon = Column(Boolean, nullable=False, default=False)
    is_expansion = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class GameRating(Base):
    """A 1–5 star rating left by a guest."""

    __tablename__ = "game_ratings"
    __table_args__ = (UniqueConstraint("game_id", "guest_identifier"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_identifier = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)
    ip_address = Column(String(64), nullable=True)  # sha256 prefix, never the raw address
    device_fingerprint = Column(String(256), nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class WishlistVote(Base):
    """A guest's "I'd like to play this" vote."""

    __tablename__ = "game_wishlist"
    __table_args__ = (UniqueConstraint("game_id", "guest_identifier"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_identifier = Column(String(100), nullable=False)
    guest_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=_utcnow)


def init_db() -> None:
    """Create all tables if they do not exist."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Session:  # type: ignore[type-arg]
    """FastAPI dependency that yields a DB session."""
    db = SessionLocal()
    try:
        yield db  # type: ignore[misc]
    finally:
        db.close()
