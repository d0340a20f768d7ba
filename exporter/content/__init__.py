"""
Content tree model and HTML parsing.
"""

from .node import ContentNode, parse_html, TEXT_TAG, ROOT_TAG

__all__ = [
    "ContentNode",
    "parse_html",
    "TEXT_TAG",
    "ROOT_TAG",
]
