"""
Divider component - horizontal rules.
"""

from typing import Optional

from config.settings import Settings

from ..content import ContentNode
from .base import Component


class Divider(Component):
    name = "divider"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        return node if node.tag == "hr" else None

    def register_specs(self):
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "divider",
                "stroke": {
                    "color": "#divider_border_color#",
                    "style": "#divider_border_style#",
                    "width": "#divider_border_width#",
                },
            },
        )
        self.register_spec(
            "divider-layout",
            "Layout",
            {
                "columnStart": "#body_column_start#",
                "columnSpan": "#body_column_span#",
                "margin": {"top": 25, "bottom": 25},
            },
        )

    def build(self, node):
        self.register_json("json")
        self.register_layout("divider-layout", "divider-layout")
