"""
Aside component - content marked with the configured aside class.

The aside is anchored beside the body flow and supplies its own layout.
Its children are matched from a claimed copy of the aside node, so the
aside is never matched again while descending into it.
"""

from typing import Any, Dict, Optional

from config.constants import DARK_MODE_CONDITIONS
from config.settings import Settings

from ..content import ContentNode
from .base import AnchorPosition, Component


class Aside(Component):
    """Anchored side content with its own sub-components."""

    name = "aside"
    can_be_parent = True

    def __init__(self, node, context, parent=None):
        super().__init__(node, context, parent)
        self.needs_layout_if_anchored = False

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        marker = settings.aside_component_class
        if marker and not node.claimed and node.has_class(marker):
            return node
        return None

    def register_specs(self):
        theme = self.context.theme

        self.register_spec(
            "json",
            "JSON",
            {
                "role": "aside",
                "layout": "aside-layout",
                "components": "#components#",
            },
        )

        dark_background: Dict[str, Any] = {}
        if theme.get_value("aside_background_color_dark"):
            dark_background = {"backgroundColor": "#aside_background_color_dark#"}

        dark_border: Dict[str, Any] = {}
        if theme.get_value("aside_border_color_dark"):
            dark_border = {
                "border": {
                    "all": {
                        "width": "#aside_border_width#",
                        "style": "#aside_border_style#",
                        "color": "#aside_border_color_dark#",
                    },
                },
            }

        with_border: Dict[str, Any] = {
            "backgroundColor": "#aside_background_color#",
            "border": {
                "all": {
                    "color": "#aside_border_color#",
                    "style": "#aside_border_style#",
                    "width": "#aside_border_width#",
                },
            },
        }
        without_border: Dict[str, Any] = {
            "backgroundColor": "#aside_background_color#",
        }
        if dark_background or dark_border:
            conditions = {"conditions": dict(DARK_MODE_CONDITIONS)}
            with_border["conditional"] = [{**dark_background, **dark_border, **conditions}]
            without_border["conditional"] = [{**dark_background, **conditions}]

        self.register_spec("aside-with-border-json", "Aside With Border JSON", with_border)
        self.register_spec("aside-without-border-json", "Aside Without Border JSON", without_border)

        layout = {
            "columnSpan": 3,
            "padding": "#aside_padding#",
            "margin": 20,
        }
        self.register_spec(
            "aside-layout-left",
            "Aside Layout - Left Aligned",
            {"columnStart": 0, **layout},
        )
        self.register_spec(
            "aside-layout-right",
            "Aside Layout - Right Aligned",
            {"columnStart": 3, **layout},
        )

    def build(self, node):
        theme = self.context.theme

        self.register_json(
            "json",
            {"#components#": self.build_children(node.claim())},
        )

        if theme.get_value("aside_border_style") != "none":
            self.register_component_style("default-aside", "aside-with-border-json")
        else:
            self.register_component_style("default-aside", "aside-without-border-json")

        left = theme.get_value("aside_alignment") == "left"
        layout_name = "aside-layout-left" if left else "aside-layout-right"
        self.register_layout(layout_name, layout_name)
        self.anchor_position = AnchorPosition.LEFT if left else AnchorPosition.RIGHT
