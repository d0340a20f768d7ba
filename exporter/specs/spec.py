#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Component Spec - JSON/layout templates with placeholder substitution.

A spec is a JSON-like tree whose scalar values may be placeholder tokens
of the form '#key#'. substitute_values() walks the tree and replaces each
token with, in order:

1. the value passed in `values` (keys with or without the '#' markers)
2. the theme value for `key` (which itself falls back to theme defaults)

Tokens that resolve to None are dropped together with their key.

Conditional variants:
    A mapping may carry a 'conditional' list. Every entry holds a
    'conditions' rule set that is passed through untouched, plus fields
    that apply when the rule set is met. Each surviving entry is emitted
    as the resolved base fields overlaid with the entry's resolved fields
    and the original 'conditions'. Entries whose fields all resolve to
    empty values are dropped, and 'conditional' is omitted when none is
    left.

Usage:
    spec = ComponentSpec("body", "json", "JSON", {
        "role": "body",
        "text": "#text#",
        "textStyle": "#body_style#",
    })
    spec.substitute_values({"#text#": "<p>Hi</p>"}, theme)
"""

import logging
import re
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional

from ..theme import Theme

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"^#([A-Za-z0-9_\-]+)#$")
CONDITIONAL_KEY = "conditional"
CONDITIONS_KEY = "conditions"


def token_key(value: Any) -> Optional[str]:
    """Return the key of a '#key#' token, or None if value is not a token."""
    if not isinstance(value, str):
        return None
    match = TOKEN_PATTERN.match(value)
    return match.group(1) if match else None


def is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def prune_empty(value: Any) -> Any:
    """Recursively drop empty values from mappings and sequences."""
    if isinstance(value, dict):
        pruned = {k: prune_empty(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if not is_empty(v)}
    if isinstance(value, list):
        pruned = [prune_empty(v) for v in value]
        return [v for v in pruned if not is_empty(v)]
    return value


class _ValueSource:
    """Placeholder lookup: explicit values, then the theme."""

    def __init__(self, values: Optional[Mapping[str, Any]], theme: Theme):
        self.values: Dict[str, Any] = {
            key.strip("#"): value for key, value in (values or {}).items()
        }
        self.theme = theme

    def lookup(self, key: str) -> Any:
        if key in self.values:
            return self.values[key]
        value = self.theme.get_value(key)
        if value is None:
            logger.debug(f"Unresolved placeholder: #{key}#")
        return value


class ComponentSpec:
    """
    Named template owned by a component type.

    Attributes:
        component: Component type name (e.g. 'body')
        name: Spec name within the component (e.g. 'json')
        label: Human-readable label
        spec: The default template
    """

    def __init__(self, component: str, name: str, label: str, spec: Any):
        self.component = component
        self.name = name
        self.label = label
        self.spec = deepcopy(spec)

    def get_spec(self, theme: Optional[Theme] = None) -> Any:
        """
        Template in effect for this run.

        A theme's json_templates entry for (component, name) replaces
        the default template.
        """
        if theme is not None:
            override = theme.get_json_template(self.component, self.name)
            if override is not None:
                return override
        return deepcopy(self.spec)

    def substitute_values(
        self,
        values: Optional[Mapping[str, Any]] = None,
        theme: Optional[Theme] = None,
    ) -> Any:
        """
        Resolve every placeholder in the template.

        Args:
            values: Component-computed values, keyed 'key' or '#key#'
            theme: Theme used for fallback values (default theme if None)

        Returns:
            Resolved template (a new structure; the stored spec is untouched)
        """
        theme = theme or Theme()
        source = _ValueSource(values, theme)
        return self._resolve(self.get_spec(theme), source)

    def _resolve(self, node: Any, source: _ValueSource) -> Any:
        if isinstance(node, dict):
            return self._resolve_mapping(node, source)
        if isinstance(node, list):
            resolved = (self._resolve(item, source) for item in node)
            return [item for item in resolved if item is not None]

        key = token_key(node)
        if key is None:
            return node
        # Token values are inserted verbatim, including lists of sub-components
        return source.lookup(key)

    def _resolve_mapping(self, node: Dict[str, Any], source: _ValueSource) -> Dict[str, Any]:
        base: Dict[str, Any] = {}
        conditional = None

        for key, value in node.items():
            if key == CONDITIONAL_KEY and isinstance(value, list):
                conditional = value
                continue
            resolved = self._resolve(value, source)
            if resolved is not None:
                base[key] = resolved

        if conditional is None:
            return base

        entries = []
        for entry in conditional:
            if not isinstance(entry, dict):
                continue
            fields = prune_empty({
                k: self._resolve(v, source)
                for k, v in entry.items()
                if k != CONDITIONS_KEY
            })
            if not fields:
                continue

            merged = deepcopy(base)
            merged.update(fields)
            if CONDITIONS_KEY in entry:
                merged[CONDITIONS_KEY] = deepcopy(entry[CONDITIONS_KEY])
            entries.append(merged)

        if entries:
            base[CONDITIONAL_KEY] = entries
        return base

    def __repr__(self) -> str:
        return f"ComponentSpec({self.component!r}, {self.name!r})"
