"""BoardGameGeek import and lookup endpoints."""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gamehaven.config import settings
from gamehaven.database import get_db
from gamehaven.models.game import (
    BulkImportRequest,
    BulkImportResponse,
    ImportRequest,
    ImportResponse,
    LookupRequest,
    LookupResponse,
)
from gamehaven.services.bgg_client import BggClient
from gamehaven.services.bgg_import import BggImporter


router = APIRouter(prefix="/api/bgg", tags=["bgg"])

_bearer = HTTPBearer(auto_error=False)


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> None:
    """Gate admin routes behind ``ADMIN_TOKEN``; open when no token is configured."""
    if not settings.admin_token:
        return
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication required", headers={"WWW-Authenticate": "Bearer"})
    if not hmac.compare_digest(credentials.credentials, settings.admin_token):
        raise HTTPException(status_code=403, detail="Admin access required")


def get_bgg_client() -> BggClient:
    return BggClient.from_settings()


def get_importer(
    db: Annotated[Session, Depends(get_db)],
    client: Annotated[BggClient, Depends(get_bgg_client)],
) -> BggImporter:
    return BggImporter(
        db,
        client,
        upsert=settings.bgg_import_upsert,
        bulk_delay=settings.bgg_bulk_delay_seconds,
    )


Importer = Annotated[BggImporter, Depends(get_importer)]
Admin = Depends(require_admin)


@router.post("/import", response_model=ImportResponse, dependencies=[Admin])
async def import_game(body: ImportRequest, importer: Importer):
    """Import one game from its BoardGameGeek page URL."""
    if body.upsert is not None:
        importer.upsert = body.upsert
    game = await importer.import_from_url(body.url)
    return ImportResponse(game=game)


@router.post("/lookup", response_model=LookupResponse)
async def lookup(body: LookupRequest, importer: Importer):
    """Search BoardGameGeek by title."""
    return LookupResponse(results=await importer.lookup(body.query.strip()))


@router.post("/bulk-import", response_model=BulkImportResponse, dependencies=[Admin])
async def bulk_import(body: BulkImportRequest, importer: Importer):
    """Import up to 50 games, skipping ones already in the catalog."""
    return await importer.bulk_import(body.urls)
