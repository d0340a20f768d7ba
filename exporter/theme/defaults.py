#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Default theme values.

Every placeholder token used by the built-in component specs resolves
against these values when the active theme does not override them.
Dark-mode values default to "" so conditional variants stay disabled
until a theme sets them.
"""

from typing import Any, Dict


# =============================================================================
# LAYOUT
# =============================================================================

LAYOUT_DEFAULTS: Dict[str, Any] = {
    "layout_columns": 7,
    "layout_width": 1024,
    "layout_margin": 100,
    "layout_gutter": 20,
    "body_column_start": 0,
    "body_column_span": 7,
    "anchor_column_span": 3,
}

# =============================================================================
# TYPOGRAPHY
# =============================================================================

BODY_DEFAULTS: Dict[str, Any] = {
    "body_font": "AvenirNext-Regular",
    "body_size": 18,
    "body_line_height": 24,
    "body_tracking": 0,
    "body_color": "#4f4f4f",
    "body_color_dark": "",
    "body_link_color": "#428bca",
    "body_background_color": "#fafafa",
    "monospaced_font": "Menlo-Regular",
    "monospaced_size": 16,
    "monospaced_line_height": 20,
    "monospaced_color": "#4f4f4f",
}

HEADING_SIZES = {1: 48, 2: 32, 3: 24, 4: 21, 5: 18, 6: 16}

HEADING_DEFAULTS: Dict[str, Any] = {}
for _level, _size in HEADING_SIZES.items():
    HEADING_DEFAULTS[f"header{_level}_font"] = "AvenirNext-Bold"
    HEADING_DEFAULTS[f"header{_level}_size"] = _size
    HEADING_DEFAULTS[f"header{_level}_line_height"] = _size + 4
    HEADING_DEFAULTS[f"header{_level}_color"] = "#333333"
    HEADING_DEFAULTS[f"header{_level}_color_dark"] = ""

# =============================================================================
# BLOCKS
# =============================================================================

BLOCKQUOTE_DEFAULTS: Dict[str, Any] = {
    "blockquote_font": "AvenirNext-Regular",
    "blockquote_size": 18,
    "blockquote_line_height": 24,
    "blockquote_color": "#4f4f4f",
    "blockquote_color_dark": "",
    "blockquote_background_color": "#e1e1e1",
    "blockquote_background_color_dark": "",
    "blockquote_border_color": "#4f4f4f",
    "blockquote_border_color_dark": "",
    "blockquote_border_style": "solid",
    "blockquote_border_width": 3,
    "pullquote_font": "AvenirNext-Bold",
    "pullquote_size": 48,
    "pullquote_line_height": 48,
    "pullquote_color": "#53585f",
    "pullquote_color_dark": "",
    "pullquote_transform": "uppercase",
}

ASIDE_DEFAULTS: Dict[str, Any] = {
    "aside_alignment": "right",
    "aside_background_color": "#e1e1e1",
    "aside_background_color_dark": "",
    "aside_border_color": "#4f4f4f",
    "aside_border_color_dark": "",
    "aside_border_style": "solid",
    "aside_border_width": 3,
    "aside_padding": 20,
}

MEDIA_DEFAULTS: Dict[str, Any] = {
    "caption_font": "AvenirNext-Italic",
    "caption_size": 16,
    "caption_line_height": 24,
    "caption_color": "#4f4f4f",
    "caption_color_dark": "",
    "divider_border_color": "#e1e1e1",
    "divider_border_style": "solid",
    "divider_border_width": 1,
}

# =============================================================================
# COMBINED
# =============================================================================

DEFAULT_THEME_VALUES: Dict[str, Any] = {
    **LAYOUT_DEFAULTS,
    **BODY_DEFAULTS,
    **HEADING_DEFAULTS,
    **BLOCKQUOTE_DEFAULTS,
    **ASIDE_DEFAULTS,
    **MEDIA_DEFAULTS,
    # Customize JSON overrides: {component: {spec_name: template}}
    "json_templates": {},
}
