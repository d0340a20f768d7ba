"""
Quote component - blockquotes and pull quotes.
"""

from typing import Any, Dict, Optional

from config.constants import DARK_MODE_CONDITIONS, PULLQUOTE_CLASS
from config.settings import Settings

from ..content import ContentNode
from .base import Component


class Quote(Component):
    """Blockquote, or a pull quote when marked with the pullquote class."""

    name = "quote"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        if node.tag == "blockquote" and node.has_visible_text():
            return node
        if node.tag == "figure" and node.has_class(PULLQUOTE_CLASS):
            quotes = node.find_all("blockquote")
            if quotes and quotes[0].has_visible_text():
                return node
        return None

    def register_specs(self):
        theme = self.context.theme

        self.register_spec(
            "blockquote-json",
            "Blockquote JSON",
            {
                "role": "quote",
                "text": "#text#",
                "format": "html",
            },
        )
        self.register_spec(
            "pullquote-json",
            "Pull Quote JSON",
            {
                "role": "pullquote",
                "text": "#text#",
                "format": "html",
            },
        )
        self.register_spec(
            "blockquote-layout",
            "Blockquote Layout",
            {
                "columnStart": "#body_column_start#",
                "columnSpan": "#body_column_span#",
                "margin": {"top": 12, "bottom": 12},
                "contentInset": True,
            },
        )
        self.register_spec(
            "default-blockquote",
            "Blockquote Style",
            {
                "fontName": "#blockquote_font#",
                "fontSize": "#blockquote_size#",
                "lineHeight": "#blockquote_line_height#",
                "textColor": "#blockquote_color#",
                "conditional": [
                    dict(textColor="#blockquote_color_dark#", conditions=dict(DARK_MODE_CONDITIONS)),
                ],
            },
        )
        self.register_spec(
            "default-pullquote",
            "Pull Quote Style",
            {
                "fontName": "#pullquote_font#",
                "fontSize": "#pullquote_size#",
                "lineHeight": "#pullquote_line_height#",
                "textColor": "#pullquote_color#",
                "textTransform": "#pullquote_transform#",
                "conditional": [
                    dict(textColor="#pullquote_color_dark#", conditions=dict(DARK_MODE_CONDITIONS)),
                ],
            },
        )

        dark_background: Dict[str, Any] = {}
        if theme.get_value("blockquote_background_color_dark"):
            dark_background = {"backgroundColor": "#blockquote_background_color_dark#"}

        dark_border: Dict[str, Any] = {}
        if theme.get_value("blockquote_border_color_dark"):
            dark_border = {
                "border": {
                    "all": {
                        "width": "#blockquote_border_width#",
                        "style": "#blockquote_border_style#",
                        "color": "#blockquote_border_color_dark#",
                    },
                    "top": False,
                    "right": False,
                    "bottom": False,
                },
            }

        with_border: Dict[str, Any] = {
            "backgroundColor": "#blockquote_background_color#",
            "border": {
                "all": {
                    "width": "#blockquote_border_width#",
                    "style": "#blockquote_border_style#",
                    "color": "#blockquote_border_color#",
                },
                "top": False,
                "right": False,
                "bottom": False,
            },
        }
        without_border: Dict[str, Any] = {
            "backgroundColor": "#blockquote_background_color#",
        }
        conditions = {"conditions": dict(DARK_MODE_CONDITIONS)}
        if dark_background or dark_border:
            with_border["conditional"] = [{**dark_background, **dark_border, **conditions}]
        if dark_background:
            without_border["conditional"] = [{**dark_background, **conditions}]

        self.register_spec("blockquote-with-border-json", "Blockquote With Border", with_border)
        self.register_spec("blockquote-without-border-json", "Blockquote Without Border", without_border)

    def build(self, node):
        theme = self.context.theme
        if node.tag == "figure":
            quote, is_pullquote = node.find_all("blockquote")[0], True
        else:
            quote, is_pullquote = node, node.has_class(PULLQUOTE_CLASS)
        text = quote.inner_html().strip()

        if is_pullquote:
            self.register_json("pullquote-json", {"#text#": text})
            self.register_style("default-pullquote", "default-pullquote")
        else:
            self.register_json("blockquote-json", {"#text#": text})
            self.register_style("default-blockquote", "default-blockquote")
            if theme.get_value("blockquote_border_style") != "none":
                self.register_component_style(
                    "default-blockquote-with-border", "blockquote-with-border-json"
                )
            else:
                self.register_component_style(
                    "default-blockquote-without-border", "blockquote-without-border-json"
                )

        self.register_layout("blockquote-layout", "blockquote-layout")
