"""FastAPI application — Game Haven catalog backend.

Start with::

    uvicorn gamehaven.main:app --reload --port 8000

Or::

    python -m gamehaven.main
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gamehaven.config import settings
from gamehaven.database import init_db
from gamehaven.errors import CatalogError
from gamehaven.routers import bgg, games, image_proxy, ratings, wishlist

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "2.0.0"

# (router, enabled)
ROUTERS = (
    (games.router, True),
    (bgg.router, True),
    (image_proxy.router, True),
    (ratings.router, settings.feature_ratings),
    (wishlist.router, settings.feature_wishlist),
)

app = FastAPI(
    title=f"{settings.site_name} API",
    description=(
        "Board game library catalog: BoardGameGeek import, image proxy, "
        "guest ratings and wishlist voting."
    ),
    version=APP_VERSION,
)

# ── CORS — allow the local frontend dev server ──────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for _router, _enabled in ROUTERS:
    if _enabled:
        app.include_router(_router)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(CatalogError)
async def _catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = f"No route for {request.method} {request.url.path}"
    return _error(exc.status_code, message, headers=getattr(exc, "headers", None))


@app.on_event("startup")
async def _startup() -> None:
    init_db()
    logger.info("Database initialised — server ready")


@app.get("/health")
async def health():
    """Simple health-check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/api")
async def info():
    """Site name, version and enabled guest features."""
    return {
        "name": settings.site_name,
        "version": APP_VERSION,
        "features": {
            "ratings": settings.feature_ratings,
            "wishlist": settings.feature_wishlist,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gamehaven.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
