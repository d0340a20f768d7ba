#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Export and publishing settings"""

    # ========== Publishing API ==========
    api_base_url: str = "https://news-api.apple.com"
    api_key: str = ""
    api_secret: str = ""
    api_channel: str = ""
    api_timeout: int = 30

    # Queue pushes through a scheduler instead of publishing inline
    api_async: bool = False

    # Automatic sync on content save; skip list holds taxonomy term IDs
    api_autosync: bool = False
    api_autosync_skip: List[int] = []

    # ========== Export ==========
    # Component alert policy: none | warn | fail
    component_alerts: Literal["none", "warn", "fail"] = "none"
    html_support: bool = True
    aside_component_class: str = ""
    in_article_position: int = 3
    use_remote_images: bool = True
    full_bleed_images: bool = False

    # Section links are published as <section_url_base>/<section id>
    section_url_base: str = "https://news-api.apple.com/sections"

    # ========== Themes ==========
    active_theme: str = "Default"

    # ========== Directories ==========
    themes_dir: Path = BASE_DIR / "data" / "themes"
    temp_dir: Path = BASE_DIR / "data" / "temp"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    @field_validator("api_autosync_skip", mode="before")
    @classmethod
    def _decode_skip_terms(cls, value: Any) -> Any:
        # Stored as a JSON string by the host; anything that isn't a list means "no terms"
        if isinstance(value, str):
            try:
                value = json.loads(value) if value.strip() else []
            except ValueError:
                return []
        if not isinstance(value, (list, tuple)):
            return []
        return value

    def is_api_configuration_valid(self) -> bool:
        """Check that the credentials and target channel are all present."""
        return all([self.api_key, self.api_secret, self.api_channel])

    def section_url(self, section_id: str) -> str:
        """Build the absolute link for a section ID."""
        return f"{self.section_url_base.rstrip('/')}/{section_id}"

    def to_public_dict(self) -> Dict[str, Any]:
        """
        Non-sensitive settings in a client-friendly format.

        Credentials are never included.
        """
        return {
            "apiAsync": self.api_async,
            "apiAutosync": self.api_autosync,
            "componentAlerts": self.component_alerts,
            "fullBleedImages": self.full_bleed_images,
            "htmlSupport": self.html_support,
            "inArticlePosition": self.in_article_position,
            "useRemoteImages": self.use_remote_images,
            "activeTheme": self.active_theme,
        }


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings instance, loaded once from the environment."""
    return Settings()
