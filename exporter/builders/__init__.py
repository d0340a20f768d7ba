"""
Per-run registries and document-level builders.
"""

from .base import NamedRegistry
from .text_styles import TextStyles
from .component_layouts import ComponentLayouts, ANCHOR_LAYOUT_LEFT, ANCHOR_LAYOUT_RIGHT
from .component_styles import ComponentStyles
from .metadata import ArticleInfo, build_article_metadata

__all__ = [
    "NamedRegistry",
    "TextStyles",
    "ComponentLayouts",
    "ComponentStyles",
    "ArticleInfo",
    "build_article_metadata",
    "ANCHOR_LAYOUT_LEFT",
    "ANCHOR_LAYOUT_RIGHT",
]
