"""
Heading component - h1 through h6.
"""

import re
from typing import Optional

from config.constants import DARK_MODE_CONDITIONS
from config.settings import Settings

from ..content import ContentNode
from .base import Component

HEADING_PATTERN = re.compile(r"^h([1-6])$")


class Heading(Component):
    """Section heading with a per-level text style."""

    name = "heading"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        if HEADING_PATTERN.match(node.tag) and node.has_visible_text():
            return node
        return None

    def register_specs(self):
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "#heading_level#",
                "text": "#text#",
                "format": "html",
            },
        )
        self.register_spec(
            "heading-layout",
            "Layout",
            {
                "columnStart": "#body_column_start#",
                "columnSpan": "#body_column_span#",
                "margin": {"top": 18, "bottom": 12},
            },
        )
        for level in range(1, 7):
            self.register_spec(
                f"default-heading-{level}",
                f"Level {level} Style",
                {
                    "fontName": f"#header{level}_font#",
                    "fontSize": f"#header{level}_size#",
                    "lineHeight": f"#header{level}_line_height#",
                    "textColor": f"#header{level}_color#",
                    "textAlignment": "left",
                    "conditional": [
                        {
                            "textColor": f"#header{level}_color_dark#",
                            "conditions": dict(DARK_MODE_CONDITIONS),
                        }
                    ],
                },
            )

    def build(self, node):
        level = int(HEADING_PATTERN.match(node.tag).group(1))

        self.register_json(
            "json",
            {
                "#heading_level#": f"heading{level}",
                "#text#": node.inner_html().strip(),
            },
        )
        self.register_style(f"default-heading-{level}", f"default-heading-{level}")
        self.register_layout("heading-layout", "heading-layout")
