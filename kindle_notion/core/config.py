#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
The settings object is frozen: build it once with get_settings() and hand
it to whatever needs it.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from kindle_notion._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "Kindle Notion"
    app_version: str = _pkg_version
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Notion ─────────────────────────────────────────────────────────────

    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_base_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout: float = 30.0

    # ── Auth / session ─────────────────────────────────────────────────────

    admin_user: str = "kindle"
    admin_pass: str = "changeme"
    session_secret: str = "secret"
    session_algorithm: str = "HS256"
    session_cookie: str = "ks"
    session_max_age: int = 7 * 24 * 3600   # 7 days
    session_cookie_secure: bool = True

    # ── Reader ─────────────────────────────────────────────────────────────

    font_cookie: str = "fs"
    font_cookie_max_age: int = 365 * 24 * 3600
    listing_page_size: int = 20
    document_page_size: int = 100

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
