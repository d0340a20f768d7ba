"""
Body component - paragraphs, lists, preformatted text and tables.

Also the fallback for loose text and inline elements, and the owner of
the per-tag 'default-text-styles' used when HTML support is enabled.
"""

from typing import Optional

from config.settings import Settings

from ..content import ContentNode
from .base import Component

BODY_TAGS = frozenset({"p", "ul", "ol", "pre", "table", "dl"})


class Body(Component):
    """Block of HTML body text."""

    name = "body"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        if node.tag not in BODY_TAGS:
            return None
        if node.tag == "p" and not node.has_visible_text():
            return None
        return node

    def register_specs(self):
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "html",
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
        self.register_spec(
            "default-body",
            "Default Body Style",
            {
                "fontName": "#body_font#",
                "fontSize": "#body_size#",
                "lineHeight": "#body_line_height#",
                "tracking": "#body_tracking#",
                "textColor": "#body_color#",
                "linkStyle": {"textColor": "#body_link_color#"},
                "paragraphSpacingBefore": 18,
                "paragraphSpacingAfter": 18,
                "conditional": [
                    {
                        "textColor": "#body_color_dark#",
                        "conditions": {
                            "minSpecVersion": "1.14",
                            "preferredColorScheme": "dark",
                        },
                    }
                ],
            },
        )

        monospaced = {
            "fontName": "#monospaced_font#",
            "fontSize": "#monospaced_size#",
            "lineHeight": "#monospaced_line_height#",
            "textColor": "#monospaced_color#",
        }
        self.register_spec(
            "default-text-styles",
            "Default Text Styles",
            {
                "default-tag-code": dict(monospaced),
                "default-tag-pre": dict(monospaced, textAlignment="left", paragraphSpacingAfter=18),
                "default-tag-samp": dict(monospaced),
            },
        )

    def build(self, node):
        # Bare text reaches the body as a synthetic <p>; keep real blocks intact
        self.register_json("json", {"#text#": node.outer_html()})
        self.register_style("default-body", "default-body")
        self.register_layout("body-layout", "body-layout")
