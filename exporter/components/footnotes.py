"""
Footnotes component - the footnotes list block.

Each list item becomes a numbered body fragment that keeps the item's
id, so in-text footnote links still resolve.
"""

from typing import Optional

from config.constants import FOOTNOTES_CLASS
from config.settings import Settings

from ..content import ContentNode
from .base import Component


class Footnotes(Component):
    name = "footnotes"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        if node.tag == "ol" and node.has_class(FOOTNOTES_CLASS):
            return node
        return None

    def register_specs(self):
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "container",
                "layout": "body-layout",
                "components": "#components#",
            },
        )
        self.register_spec(
            "footnote-json",
            "Individual Footnote JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "html",
                "identifier": "#identifier#",
            },
        )
        self.register_spec(
            "body-layout",
            "Layout",
            {
                "columnStart": "#body_column_start#",
                "columnSpan": "#body_column_span#",
                "margin": {"top": 12, "bottom": 12},
            },
        )

    def build(self, node):
        items = [child for child in node.element_children if child.tag == "li"]

        components = []
        for number, item in enumerate(items, start=1):
            components.append(
                self.render_spec(
                    "footnote-json",
                    {
                        "#text#": f"{number}. {item.inner_html().strip()}",
                        "#identifier#": item.get("id"),
                    },
                )
            )

        self.register_json("json", {"#components#": components})
        self.register_layout("body-layout", "body-layout", property_name="")
