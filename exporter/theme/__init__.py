"""
Theme values and theme selection.
"""

from .defaults import DEFAULT_THEME_VALUES
from .theme import Theme, ThemeStore, ThemeFile, DEFAULT_THEME_NAME

__all__ = [
    "DEFAULT_THEME_VALUES",
    "DEFAULT_THEME_NAME",
    "Theme",
    "ThemeFile",
    "ThemeStore",
]
