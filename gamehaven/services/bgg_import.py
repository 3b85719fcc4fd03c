"""BGG import — turn a BoardGameGeek URL into a persisted catalog game.

Pipeline: URL → numeric id → ``thing`` document → field extraction →
bucketing → one transactional write. Errors surface immediately; the
importer never retries.

By default every import inserts a new row, so importing the same game
twice stores it twice. Upsert mode overwrites the imported fields of the
oldest row sharing the ``bgg_id`` instead.
"""

from __future__ import annotations

import asyncio
import logging
import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gamehaven.database import Game
from gamehaven.errors import CatalogError, InvalidUrl, PersistenceError
from gamehaven.models.game import BulkImportResponse, GameRecord, LookupResult
from gamehaven.services.bgg_client import BggClient
from gamehaven.services.bgg_extractor import parse_search_results, parse_thing
from gamehaven.services.normalizer import age_bucket, difficulty_bucket, play_time_bucket

logger = logging.getLogger(__name__)

IMPORTED_GAME_TYPE = "Board Game"
BGG_GAME_URL = "https://boardgamegeek.com/boardgame/{bgg_id}"

_BGG_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?boardgamegeek\.com/(?:boardgame|boardgameexpansion)/(\d+)(?:[/?#]|$)",
    re.IGNORECASE,
)
_BARE_ID_RE = re.compile(r"^\d+$")

# Fields refreshed from BGG on upsert; curated ones (gallery, sale flags) stay.
_IMPORTED_FIELDS = (
    "title",
    "description",
    "image_url",
    "difficulty",
    "game_type",
    "play_time",
    "min_players",
    "max_players",
    "suggested_age",
    "bgg_id",
    "bgg_url",
)


def parse_bgg_id(url: str) -> str:
    """Extract the numeric game id from a BGG game page URL."""
    match = _BGG_URL_RE.match(url.strip())
    if not match:
        raise InvalidUrl("Not a BoardGameGeek game URL")
    return match.group(1)


def build_record(bgg_id: str, bgg_url: str, document: str) -> GameRecord:
    """Assemble a catalog record from a raw ``thing`` document."""
    fields = parse_thing(document)
    return GameRecord(
        title=fields.title,
        description=fields.description,
        image_url=fields.image_url,
        additional_images=[],
        difficulty=difficulty_bucket(fields.weight),
        game_type=IMPORTED_GAME_TYPE,
        play_time=play_time_bucket(fields.playing_time),
        min_players=fields.min_players,
        max_players=fields.max_players,
        suggested_age=age_bucket(fields.min_age),
        bgg_id=bgg_id,
        bgg_url=bgg_url,
    )


class BggImporter:
    def __init__(
        self,
        db: Session,
        client: BggClient,
        *,
        upsert: bool = False,
        bulk_delay: float = 0.0,
    ) -> None:
        self.db = db
        self.client = client
        self.upsert = upsert
        self.bulk_delay = bulk_delay

    async def import_from_url(self, url: str) -> GameRecord:
        """Import one game; raises an ``ImportFailure`` or ``InvalidUrl``."""
        bgg_id = parse_bgg_id(url)
        document = await self.client.fetch_thing(bgg_id)
        record = build_record(bgg_id, url.strip(), document)
        game = self._save(record)
        logger.info("Imported BGG %s as game %s (%s)", bgg_id, game.id, game.title)
        return GameRecord.model_validate(game)

    async def lookup(self, query: str) -> list[LookupResult]:
        """Search BGG by name."""
        document = await self.client.search(query)
        return [LookupResult(bgg_id=bgg_id, name=name) for bgg_id, name in parse_search_results(document)]

    async def bulk_import(self, entries: list[str]) -> BulkImportResponse:
        """Import several games, skipping ids already in the catalog.

        Entries may be BGG URLs or bare numeric ids. One failing entry is
        recorded in ``errors`` and does not stop the batch.
        """
        result = BulkImportResponse()
        for position, entry in enumerate(entries):
            entry = entry.strip()
            url = BGG_GAME_URL.format(bgg_id=entry) if _BARE_ID_RE.match(entry) else entry
            try:
                bgg_id = parse_bgg_id(url)
                if self._exists(bgg_id):
                    result.skipped += 1
                    continue
                await self.import_from_url(url)
                result.imported += 1
            except CatalogError as exc:
                result.errors.append(f"{entry}: {exc.message}")
                continue

            # Be gentle with BGG between upstream calls
            if self.bulk_delay and position < len(entries) - 1:
                await asyncio.sleep(self.bulk_delay)

        logger.info(
            "Bulk import finished: %d imported, %d skipped, %d errors",
            result.imported,
            result.skipped,
            len(result.errors),
        )
        return result

    def _exists(self, bgg_id: str) -> bool:
        return self.db.query(Game.id).filter(Game.bgg_id == bgg_id).first() is not None

    def _save(self, record: GameRecord) -> Game:
        try:
            game = None
            if self.upsert:
                game = (
                    self.db.query(Game)
                    .filter(Game.bgg_id == record.bgg_id)
                    .order_by(Game.created_at.asc())
                    .first()
                )

            if game is None:
                game = Game(**record.model_dump(include=set(_IMPORTED_FIELDS) | {"additional_images"}))
                self.db.add(game)
            else:
                for field in _IMPORTED_FIELDS:
                    setattr(game, field, getattr(record, field))

            self.db.commit()
            self.db.refresh(game)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to store BGG %s", record.bgg_id)
            raise PersistenceError("Failed to save imported game") from exc
        return game
