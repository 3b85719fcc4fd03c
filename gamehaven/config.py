"""Centralised backend configuration loaded from environment / .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings — values are sourced from env vars or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Site ─────────────────────────────────────────────────────────────
    site_name: str = "Game Haven"
    feature_ratings: bool = True
    feature_wishlist: bool = True

    # ── BoardGameGeek ────────────────────────────────────────────────────
    bgg_api_base: str = "https://boardgamegeek.com/xmlapi2"
    bgg_api_token: str = Field(default="", description="Optional BGG XML API bearer token")
    bgg_import_upsert: bool = Field(
        default=False,
        description="Overwrite an existing game with the same bgg_id instead of inserting a duplicate",
    )
    bgg_bulk_delay_seconds: float = 0.5
    http_timeout_seconds: float = 15.0

    # ── Image proxy ──────────────────────────────────────────────────────
    image_proxy_allowed_hosts: list[str] = Field(default_factory=lambda: ["cf.geekdo-images.com"])
    image_proxy_user_agent: str = "GameHaven/2.0 (Image Proxy)"

    # ── Admin ────────────────────────────────────────────────────────────
    admin_token: str = Field(default="", description="Bearer token guarding admin routes; empty disables the guard")

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(
        default=f"sqlite:///{_PROJECT_ROOT / 'data' / 'gamehaven.db'}",
        description="SQLAlchemy connection URL for the catalog store",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"])
    debug: bool = False


settings = Settings()
