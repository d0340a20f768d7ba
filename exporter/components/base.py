#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Component - Base class for every content → article JSON transformer.

Lifecycle:
    UNBUILT --build_component()--> BUILT --to_array()--> SERIALIZED

A component is constructed for one matched node, registers its specs,
builds its JSON fragment exactly once and serializes it on demand.

Subclasses implement:
- node_matches(): classmethod predicate over a ContentNode
- register_specs(): declare the templates the component uses
- build(): fill self.json from the matched node

Usage:
    class Divider(Component):
        name = "divider"

        @classmethod
        def node_matches(cls, node, settings):
            return node if node.tag == "hr" else None

        def register_specs(self):
            self.register_spec("json", "JSON", {"role": "divider"})

        def build(self, node):
            self.register_json("json", {})
"""

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from config.settings import Settings

from ..content import ContentNode
from ..errors import ComponentStateError
from ..specs import ComponentSpec

if TYPE_CHECKING:
    from ..context import ExportContext

logger = logging.getLogger(__name__)


class AnchorPosition(str, Enum):
    """How a component floats relative to the body flow."""
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class ComponentState(Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"
    SERIALIZED = "serialized"


class Component(ABC):
    """
    Abstract base class for components.

    Class attributes:
        name: Component type, used for spec lookup and error reporting
        can_be_parent: Whether the component builds sub-components
    """

    name: str = "component"
    can_be_parent: bool = False

    def __init__(
        self,
        node: ContentNode,
        context: "ExportContext",
        parent: Optional["Component"] = None,
    ):
        self.node = node
        self.context = context
        self.parent = parent
        self.json: Dict[str, Any] = {}
        self.components: List["Component"] = []
        self.anchor_position = AnchorPosition.NONE
        # When anchored without its own layout, the assembler applies one
        self.needs_layout_if_anchored = True
        self.state = ComponentState.UNBUILT
        self.register_specs()

    # -------------------------------------------------------------------------
    # Matching
    # -------------------------------------------------------------------------

    @classmethod
    def node_matches(cls, node: ContentNode, settings: Settings) -> Optional[ContentNode]:
        """
        Check whether this component handles `node`.

        Returns:
            The node to build from (may differ from `node`), or None
        """
        return None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @abstractmethod
    def register_specs(self) -> None:
        """Declare every spec the component uses."""
        pass

    @abstractmethod
    def build(self, node: ContentNode) -> None:
        """Populate self.json from the matched node."""
        pass

    def build_component(self) -> "Component":
        """
        Run build() once.

        Raises:
            ComponentStateError: If the component was already built
        """
        if self.state is not ComponentState.UNBUILT:
            raise ComponentStateError(f"Component '{self.name}' was already built")
        self.build(self.node)
        self.state = ComponentState.BUILT
        return self

    def to_array(self) -> Dict[str, Any]:
        """
        Serialized JSON fragment.

        Raises:
            ComponentStateError: If the component has not been built
        """
        if self.state is ComponentState.UNBUILT:
            raise ComponentStateError(f"Component '{self.name}' has not been built")
        self.state = ComponentState.SERIALIZED
        return deepcopy(self.json)

    @property
    def is_anchored(self) -> bool:
        return self.anchor_position is not AnchorPosition.NONE

    @property
    def identifier(self) -> Optional[str]:
        return self.json.get("identifier")

    # -------------------------------------------------------------------------
    # Spec helpers
    # -------------------------------------------------------------------------

    def register_spec(self, spec_name: str, label: str, template: Any) -> ComponentSpec:
        """Declare a default spec; one already in the run's registry is kept."""
        return self.context.specs.register_default(self.name, spec_name, label, template)

    def get_spec(self, spec_name: str) -> ComponentSpec:
        return self.context.specs.get(self.name, spec_name)

    def render_spec(self, spec_name: str, values: Optional[Mapping[str, Any]] = None) -> Any:
        """Resolve a spec against `values` and the run's theme."""
        return self.get_spec(spec_name).substitute_values(values, self.context.theme)

    def register_json(self, spec_name: str, values: Optional[Mapping[str, Any]] = None) -> None:
        """Resolve a spec and make it this component's JSON."""
        resolved = self.render_spec(spec_name, values)
        self.json = resolved if isinstance(resolved, dict) else {}

    def register_style(
        self,
        style_name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        property_name: str = "textStyle",
    ) -> None:
        """Resolve a text style spec, register it globally and reference it."""
        self.context.text_styles.register_style(style_name, self.render_spec(spec_name, values))
        self.json[property_name] = style_name

    def register_layout(
        self,
        layout_name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        property_name: str = "layout",
    ) -> None:
        """Resolve a layout spec, register it by name and reference it."""
        self.context.layouts.register_layout(layout_name, self.render_spec(spec_name, values))
        if property_name:
            self.json[property_name] = layout_name

    def register_full_width_layout(
        self,
        layout_name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        property_name: str = "layout",
    ) -> None:
        """Like register_layout, spanning every column of the article."""
        layout = self.render_spec(spec_name, values)
        layout = dict(layout) if isinstance(layout, dict) else {}
        layout["columnStart"] = 0
        layout["columnSpan"] = self.context.theme.get_value("layout_columns")
        self.context.layouts.register_layout(layout_name, layout)
        if property_name:
            self.json[property_name] = layout_name

    def register_component_style(
        self,
        style_name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        property_name: str = "style",
    ) -> None:
        """Resolve a component style spec, register it and reference it."""
        self.context.component_styles.register_component_style(
            style_name, self.render_spec(spec_name, values)
        )
        self.json[property_name] = style_name

    # -------------------------------------------------------------------------
    # Sub-components
    # -------------------------------------------------------------------------

    def build_children(self, node: ContentNode) -> List[Dict[str, Any]]:
        """
        Build sub-components for `node` and return their fragments.

        Raises:
            ComponentStateError: If the component does not accept children
        """
        if not self.can_be_parent:
            raise ComponentStateError(f"Component '{self.name}' cannot have sub-components")
        if self.context.factory is None:
            raise ComponentStateError("No component factory attached to the export context")

        self.components = self.context.factory.components_from_node(node, parent=self)
        return [component.to_array() for component in self.components]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value}, anchor={self.anchor_position.value})"
