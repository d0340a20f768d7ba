#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Theme Store - Named style/layout values used to resolve spec placeholders.

A Theme falls back to DEFAULT_THEME_VALUES for any key it does not set.
The ThemeStore keeps every known theme, the active one, and an optional
section → theme mapping used to pick the theme for a single export run.

Usage:
    store = ThemeStore()
    store.add(Theme("Dark", {"body_color": "#ffffff"}))
    store.map_section("news", "Dark")

    theme = store.get_used(["news"])
    theme.get_value("body_color")   # "#ffffff"
    theme.get_value("body_font")    # default value
"""

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .defaults import DEFAULT_THEME_VALUES

logger = logging.getLogger(__name__)

DEFAULT_THEME_NAME = "Default"


class ThemeFile(BaseModel):
    """On-disk theme format"""
    name: str
    values: Dict[str, Any] = Field(default_factory=dict)


class Theme:
    """
    Named mapping of style key → value.

    Themes are read-only once loaded; get_value returns copies of nested
    structures so callers cannot alter the theme through them.
    """

    def __init__(self, name: str = DEFAULT_THEME_NAME, values: Optional[Dict[str, Any]] = None):
        self.name = name
        self._values: Dict[str, Any] = deepcopy(values or {})

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get a theme value.

        Lookup order: this theme, then the built-in defaults, then `default`.
        """
        if key in self._values and self._values[key] is not None:
            return deepcopy(self._values[key])
        if key in DEFAULT_THEME_VALUES:
            return deepcopy(DEFAULT_THEME_VALUES[key])
        return default

    def has_value(self, key: str) -> bool:
        """True when the value resolves to something non-empty."""
        return self.get_value(key) not in (None, "", [], {})

    def get_json_template(self, component: str, spec_name: str) -> Optional[Any]:
        """Customized template for (component, spec), if the theme defines one."""
        templates = self.get_value("json_templates") or {}
        override = templates.get(component, {}).get(spec_name)
        return deepcopy(override) if override is not None else None

    def all_values(self) -> Dict[str, Any]:
        """Defaults merged with this theme's values."""
        values = deepcopy(DEFAULT_THEME_VALUES)
        values.update(deepcopy(self._values))
        return values

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "values": deepcopy(self._values)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Theme":
        parsed = ThemeFile(**data)
        return cls(parsed.name, parsed.values)

    @classmethod
    def from_file(cls, path: Path) -> "Theme":
        """Load a theme from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def __repr__(self) -> str:
        return f"Theme(name={self.name!r}, values={len(self._values)})"


class ThemeStore:
    """
    Registry of named themes.

    Provides:
    - Theme registration and lookup
    - The active (default) theme
    - Section → theme mapping for per-article selection
    """

    def __init__(
        self,
        themes: Optional[Iterable[Theme]] = None,
        active: Optional[str] = None,
    ):
        self._themes: Dict[str, Theme] = {}
        self._section_themes: Dict[str, str] = {}

        for theme in themes or [Theme()]:
            self.add(theme)

        self._active = active or next(iter(self._themes))
        if self._active not in self._themes:
            raise ValueError(f"Unknown theme: '{self._active}'. Available themes: {self.names}")

    @property
    def names(self) -> List[str]:
        return list(self._themes.keys())

    @property
    def active(self) -> Theme:
        return self._themes[self._active]

    def add(self, theme: Theme) -> None:
        """Register a theme; a theme with the same name is replaced."""
        self._themes[theme.name] = theme

    def get(self, name: str) -> Theme:
        """
        Get theme by name.

        Raises:
            ValueError: If theme not found
        """
        if name not in self._themes:
            raise ValueError(f"Unknown theme: '{name}'. Available themes: {self.names}")
        return self._themes[name]

    def set_active(self, name: str) -> None:
        self.get(name)
        self._active = name

    def map_section(self, section_id: str, theme_name: str) -> None:
        """Use `theme_name` for content published in `section_id`."""
        self.get(theme_name)
        self._section_themes[section_id] = theme_name

    def get_used(self, sections: Optional[Iterable[str]] = None) -> Theme:
        """
        Theme for an export run.

        The first section with a mapped theme wins; otherwise the active theme.
        """
        for section in sections or []:
            name = self._section_themes.get(section)
            if name:
                logger.debug(f"Using theme '{name}' for section '{section}'")
                return self._themes[name]
        return self.active

    def load_directory(self, directory: Path) -> int:
        """
        Load every *.json theme in a directory.

        Returns:
            Number of themes loaded
        """
        directory = Path(directory)
        if not directory.is_dir():
            return 0

        count = 0
        for path in sorted(directory.glob("*.json")):
            self.add(Theme.from_file(path))
            count += 1
        logger.info(f"Loaded {count} theme(s) from {directory}")
        return count

    @classmethod
    def from_settings(cls, settings) -> "ThemeStore":
        """
        Store with the default theme plus every theme in settings.themes_dir.

        The active theme is settings.active_theme when it was loaded.
        """
        store = cls()
        store.load_directory(settings.themes_dir)
        if settings.active_theme in store.names:
            store.set_active(settings.active_theme)
        else:
            logger.warning(
                f"Active theme '{settings.active_theme}' not found, using '{store.active.name}'"
            )
        return store
