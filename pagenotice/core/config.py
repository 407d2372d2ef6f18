#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Extension configuration.

All values can be overridden via ``PAGENOTICE_*`` environment variables or a
.env file.  The resolver never reads these ambiently: build a ``Settings``
(or call ``get_settings()``) and pass it in.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="PAGENOTICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ── Notices ────────────────────────────────────────────────────────────

    # When set, "{position}-notice-{page}" messages are never looked up.
    disable_per_page_notices: bool = False
    style_module: str = Field(default="ext.pageNotice", min_length=1)
    notice_format: Literal["wikitext", "markdown"] = "wikitext"

    # ── Links / assets ─────────────────────────────────────────────────────

    base_url: str = ""

    # ── Messages ───────────────────────────────────────────────────────────

    messages_file: Optional[Path] = None


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
