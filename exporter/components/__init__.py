"""
Components - node → article JSON transformers.

DEFAULT_COMPONENTS lists the variants in matching order; the first
variant whose node_matches() accepts a node builds it.
"""

from .base import AnchorPosition, Component, ComponentState
from .factory import ComponentFactory
from .aside import Aside
from .body import Body
from .divider import Divider
from .footnotes import Footnotes
from .heading import Heading
from .image import Image
from .in_article import InArticle
from .quote import Quote

DEFAULT_COMPONENTS = (
    Aside,
    Footnotes,
    Image,
    Quote,
    Heading,
    Divider,
    Body,
)

__all__ = [
    "AnchorPosition",
    "Component",
    "ComponentState",
    "ComponentFactory",
    "Aside",
    "Body",
    "Divider",
    "Footnotes",
    "Heading",
    "Image",
    "InArticle",
    "Quote",
    "DEFAULT_COMPONENTS",
]
