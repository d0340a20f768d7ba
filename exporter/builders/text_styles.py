#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text Styles - Top-level text styles shared by components.

Components reference text styles by name; each name is stored once per
export run (first registration wins). With HTML support enabled, the
per-tag styles declared by the body component's 'default-text-styles'
spec are registered up front.
"""

import logging
from typing import Any, Mapping, Optional

from ..specs import ComponentSpec
from ..theme import Theme
from .base import NamedRegistry

logger = logging.getLogger(__name__)


class TextStyles(NamedRegistry):
    """Registry serialized as the document's componentTextStyles."""

    document_key = "componentTextStyles"

    def register_style(self, name: str, values: Mapping[str, Any]) -> bool:
        """Register a text style; later registrations of `name` are no-ops."""
        stored = self.register(name, dict(values))
        if not stored:
            logger.debug(f"Text style '{name}' already registered")
        return stored

    def add_html_styles(self, spec: Optional[ComponentSpec], theme: Theme) -> int:
        """
        Register the per-tag HTML text styles.

        Args:
            spec: The 'default-text-styles' spec (None if not available)
            theme: Theme used to resolve the spec

        Returns:
            Number of styles newly registered
        """
        if spec is None:
            return 0

        computed = spec.substitute_values({}, theme)
        if not isinstance(computed, dict):
            return 0

        count = 0
        for name, values in computed.items():
            if self.register_style(name, values):
                count += 1
        return count
