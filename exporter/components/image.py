"""
Image component - standalone images, figures and wrapped images.

Remote images keep their absolute URL. Otherwise the image is referenced
as a bundle and its absolute URL is added to the run's bundle list.
"""

import posixpath
from typing import Optional
from urllib.parse import unquote, urlparse

from config.constants import BUNDLE_SCHEME
from config.settings import Settings

from ..content import ContentNode
from .base import Component

WRAPPER_TAGS = frozenset({"p", "a"})


def bundle_filename(url: str) -> str:
    """File name a bundled image is stored under."""
    path = unquote(urlparse(url).path)
    return posixpath.basename(path.rstrip("/"))


def _single_image(node: ContentNode) -> Optional[ContentNode]:
    children = node.element_children
    if len(children) != 1 or node.has_visible_text():
        return None
    child = children[0]
    if child.tag == "img":
        return child
    if child.tag in WRAPPER_TAGS:
        return _single_image(child)
    return None


class Image(Component):
    """Photo with an optional caption."""

    name = "image"

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        if node.tag == "img":
            return node if node.get("src") else None
        if node.tag == "figure" and node.find_all("img"):
            return node
        if node.tag in WRAPPER_TAGS:
            image = _single_image(node)
            if image is not None and image.get("src"):
                return image
        return None

    def register_specs(self):
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "photo",
                "URL": "#url#",
                "caption": "#caption#",
            },
        )
        self.register_spec(
            "non-anchored-image",
            "Non Anchored Layout",
            {
                "columnStart": "#body_column_start#",
                "columnSpan": "#body_column_span#",
                "margin": {"top": 25, "bottom": 25},
            },
        )
        self.register_spec(
            "full-bleed-image",
            "Full Bleed Layout",
            {
                "ignoreDocumentMargin": True,
                "margin": {"top": 25, "bottom": 25},
            },
        )

    def build(self, node):
        image = node if node.tag == "img" else node.find_all("img")[0]
        src = image.get("src", "")
        caption = None
        if node.tag == "figure":
            captions = node.find_all("figcaption")
            if captions and captions[0].has_visible_text():
                caption = captions[0].text_content().strip()

        self.register_json(
            "json",
            {
                "#url#": self._image_url(src),
                "#caption#": caption,
            },
        )

        if self.context.settings.full_bleed_images:
            self.register_full_width_layout("full-bleed-image", "full-bleed-image")
        else:
            self.register_layout("non-anchored-image", "non-anchored-image")

    def _image_url(self, src: str) -> str:
        if self.context.settings.use_remote_images:
            return src
        self.context.add_bundle(src)
        return f"{BUNDLE_SCHEME}{bundle_filename(src)}"
