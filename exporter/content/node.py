#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Content Node - Immutable view over the HTML-like content tree.

Components match against ContentNode instances and never mutate them.
When a component needs to walk its own matched node again it works on a
copy (see ContentNode.claim) so the caller's tree stays untouched.

Usage:
    from exporter.content import parse_html

    root = parse_html('<p class="intro">Hello <b>world</b></p>')
    para = root.element_children[0]
    para.has_class("intro")   # True
    para.inner_html()         # 'Hello <b>world</b>'
"""

import html
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from lxml import html as lxml_html


TEXT_TAG = "#text"
ROOT_TAG = "#root"

# Elements serialized without a closing tag
VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

_DOCUMENT_PATTERN = re.compile(r"<\s*(html|body)[\s>]", re.IGNORECASE)


@dataclass(frozen=True)
class ContentNode:
    """
    A node of the content tree.

    Text is carried by child nodes tagged '#text'; element nodes keep
    their attributes and ordered children.
    """
    tag: str
    # Read-only view; left out of the hash, still compared by equality
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: Tuple["ContentNode", ...] = ()
    text: str = ""
    # Set on copies already matched by an enclosing component
    claimed: bool = False

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def element(
        cls,
        tag: str,
        attributes: Optional[Mapping[str, str]] = None,
        children: Tuple["ContentNode", ...] = (),
    ) -> "ContentNode":
        return cls(tag=tag.lower(), attributes=dict(attributes or {}), children=tuple(children))

    @classmethod
    def text_node(cls, text: str) -> "ContentNode":
        return cls(tag=TEXT_TAG, text=text)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_TAG

    @property
    def classes(self) -> List[str]:
        """Class names from the class attribute, in order."""
        return self.attributes.get("class", "").split()

    def has_class(self, name: str) -> bool:
        return bool(name) and name in self.classes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Attribute value or default."""
        return self.attributes.get(name, default)

    @property
    def element_children(self) -> List["ContentNode"]:
        return [child for child in self.children if not child.is_text]

    def has_visible_text(self) -> bool:
        return bool(self.text_content().strip())

    def iter(self) -> Iterator["ContentNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, tag: str) -> List["ContentNode"]:
        """All descendant elements (excluding self) with the given tag."""
        return [node for node in self.iter() if node is not self and node.tag == tag]

    def text_content(self) -> str:
        if self.is_text:
            return self.text
        return "".join(child.text_content() for child in self.children)

    def inner_html(self) -> str:
        return "".join(child.outer_html() for child in self.children)

    def outer_html(self) -> str:
        if self.is_text:
            return html.escape(self.text, quote=False)
        if self.tag == ROOT_TAG:
            return self.inner_html()

        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"'
            for name, value in self.attributes.items()
        )
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"

    def claim(self) -> "ContentNode":
        """Copy of this node marked as already matched."""
        return replace(self, claimed=True)

    def without_attribute(self, name: str) -> "ContentNode":
        """Copy of this node with one attribute removed."""
        attributes: Dict[str, str] = {k: v for k, v in self.attributes.items() if k != name}
        return replace(self, attributes=attributes)


def _convert(element) -> Optional[ContentNode]:
    # Comments and processing instructions carry a callable tag
    if not isinstance(element.tag, str):
        return None

    children: List[ContentNode] = []
    if element.text:
        children.append(ContentNode.text_node(element.text))
    for child in element:
        converted = _convert(child)
        if converted is not None:
            children.append(converted)
        if child.tail:
            children.append(ContentNode.text_node(child.tail))

    return ContentNode.element(
        element.tag,
        {str(k): str(v) for k, v in element.attrib.items()},
        tuple(children),
    )


def parse_html(markup: str) -> ContentNode:
    """
    Parse an HTML string into a ContentNode tree.

    Both fragments and full documents are accepted; for documents the
    children of <body> become the children of the returned root.

    Args:
        markup: HTML source

    Returns:
        Root node tagged '#root'
    """
    children: List[ContentNode] = []
    if not markup or not markup.strip():
        return ContentNode(tag=ROOT_TAG)

    if _DOCUMENT_PATTERN.search(markup):
        document = lxml_html.document_fromstring(markup)
        body = document.find("body")
        fragments = [body] if body is not None else []
        for container in fragments:
            if container.text:
                children.append(ContentNode.text_node(container.text))
            for element in container:
                converted = _convert(element)
                if converted is not None:
                    children.append(converted)
                if element.tail:
                    children.append(ContentNode.text_node(element.tail))
        return ContentNode(tag=ROOT_TAG, children=tuple(children))

    for fragment in lxml_html.fragments_fromstring(markup):
        if isinstance(fragment, str):
            children.append(ContentNode.text_node(fragment))
            continue
        converted = _convert(fragment)
        if converted is not None:
            children.append(converted)
        if fragment.tail:
            children.append(ContentNode.text_node(fragment.tail))

    return ContentNode(tag=ROOT_TAG, children=tuple(children))
