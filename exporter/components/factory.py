#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Component Factory - Ordered, first-match-wins node → component dispatch.

Variants are consulted in registration order. When no variant claims a
node the factory falls back as follows:

- text node with visible text → body component
- unsupported tag (script, iframe, ...) → component error, node dropped
- inline element with visible text → body component
- element with children → descend, children processed in order
- anything else → dropped
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Type

from config.constants import INLINE_TAGS, UNSUPPORTED_TAGS

from ..content import ContentNode
from .base import Component

if TYPE_CHECKING:
    from ..context import ExportContext

logger = logging.getLogger(__name__)


class ComponentFactory:
    """
    Matches content nodes to component classes for one export run.

    Usage:
        factory = ComponentFactory(context, [Aside, Image, Body], fallback=Body)
        components = factory.components_from_node(root)
    """

    def __init__(
        self,
        context: "ExportContext",
        components: Sequence[Type[Component]],
        fallback: Optional[Type[Component]] = None,
    ):
        self.context = context
        self._components: List[Type[Component]] = list(components)
        self.fallback = fallback
        context.factory = self

    @property
    def components(self) -> List[Type[Component]]:
        return list(self._components)

    def register(self, component_class: Type[Component]) -> None:
        """Append a variant; it is consulted after the existing ones."""
        if component_class not in self._components:
            self._components.append(component_class)

    def match(self, node: ContentNode) -> Optional[Tuple[Type[Component], ContentNode]]:
        """First variant that claims `node`, with the node it will build from."""
        for component_class in self._components:
            matched = component_class.node_matches(node, self.context.settings)
            if matched is not None:
                return component_class, matched
        return None

    def match_and_build(
        self,
        node: ContentNode,
        parent: Optional[Component] = None,
    ) -> Optional[Component]:
        """Build the first matching component, or None if nothing matches."""
        found = self.match(node)
        if found is None:
            return None
        component_class, matched = found
        return self.build(component_class, matched, parent)

    def build(
        self,
        component_class: Type[Component],
        node: ContentNode,
        parent: Optional[Component] = None,
    ) -> Component:
        component = component_class(node, self.context, parent)
        component.build_component()
        return component

    def components_from_node(
        self,
        node: ContentNode,
        parent: Optional[Component] = None,
    ) -> List[Component]:
        """Build components for every child of `node`, in document order."""
        result: List[Component] = []
        for child in node.children:
            result.extend(self._components_for(child, parent))
        return result

    def _components_for(self, node: ContentNode, parent: Optional[Component]) -> List[Component]:
        if node.is_text:
            if node.has_visible_text() and self.fallback is not None:
                return [self.build(self.fallback, ContentNode.element("p", children=(node,)), parent)]
            return []

        component = self.match_and_build(node, parent)
        if component is not None:
            return [component]

        if node.tag in UNSUPPORTED_TAGS:
            self.context.record_error(node.tag)
            return []

        if node.tag in INLINE_TAGS and node.has_visible_text() and self.fallback is not None:
            return [self.build(self.fallback, ContentNode.element("p", children=(node,)), parent)]

        if node.children:
            return self.components_from_node(node, parent)

        logger.debug(f"Dropping empty node <{node.tag}>")
        return []
