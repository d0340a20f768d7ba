"""
Component Styles - Named background/border styles referenced by components.
"""

from typing import Any, Mapping

from .base import NamedRegistry


class ComponentStyles(NamedRegistry):
    """Registry serialized as the document's componentStyles."""

    document_key = "componentStyles"

    def register_component_style(self, name: str, values: Mapping[str, Any]) -> bool:
        return self.register(name, dict(values))
