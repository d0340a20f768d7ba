"""
Component Layouts - Named layouts referenced from component JSON.
"""

import logging
from typing import Any, Dict, Mapping

from ..theme import Theme
from .base import NamedRegistry

logger = logging.getLogger(__name__)

ANCHOR_LAYOUT_LEFT = "anchor-layout-left"
ANCHOR_LAYOUT_RIGHT = "anchor-layout-right"


class ComponentLayouts(NamedRegistry):
    """Registry serialized as the document's componentLayouts."""

    document_key = "componentLayouts"

    def register_layout(self, name: str, values: Mapping[str, Any]) -> bool:
        return self.register(name, dict(values))

    def register_anchor_layout(self, left: bool, theme: Theme) -> str:
        """
        Register the default layout for an anchored component.

        Left-anchored components start at the first column, right-anchored
        ones end at the last column.

        Returns:
            The layout name
        """
        columns = int(theme.get_value("layout_columns"))
        span = min(int(theme.get_value("anchor_column_span")), columns)

        name = ANCHOR_LAYOUT_LEFT if left else ANCHOR_LAYOUT_RIGHT
        layout: Dict[str, Any] = {
            "columnStart": 0 if left else columns - span,
            "columnSpan": span,
            "margin": {"bottom": 20},
        }
        self.register_layout(name, layout)
        return name
