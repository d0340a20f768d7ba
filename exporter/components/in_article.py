"""
In-article module.

Starts out empty and is defined through the theme's custom JSON
templates. When non-empty it is inserted after the block at the
configured position.
"""

from .base import Component


class InArticle(Component):
    name = "in_article"

    def register_specs(self):
        self.register_spec("json", "JSON", {})
        self.register_spec("layout", "Layout", {})

    def build(self, node):
        self.register_json("json")
        if self.json:
            self.register_full_width_layout("in-article-layout", "layout")

    @property
    def is_empty(self) -> bool:
        return not self.json
