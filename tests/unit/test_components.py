#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for components

Tests cover:
- Node matching for each variant
- JSON fragments, styles and layouts produced by build
- Component lifecycle (build once, serialize after build)
"""

import pytest

from config.constants import DARK_MODE_CONDITIONS
from exporter.components import (
    DEFAULT_COMPONENTS,
    AnchorPosition,
    Aside,
    Body,
    ComponentFactory,
    ComponentState,
    Divider,
    Footnotes,
    Heading,
    Image,
    InArticle,
    Quote,
)
from exporter.content import ContentNode, parse_html
from exporter.context import ExportContext
from exporter.errors import ComponentStateError
from exporter.specs import SpecRegistry
from exporter.theme import DEFAULT_THEME_VALUES, Theme


def make_context(settings, theme=None):
    context = ExportContext(settings, theme or Theme())
    ComponentFactory(context, DEFAULT_COMPONENTS, fallback=Body)
    return context


def first_node(markup):
    return parse_html(markup).element_children[0]


def build(component_class, markup, context):
    node = component_class.node_matches(first_node(markup), context.settings)
    assert node is not None, f"{component_class.__name__} did not match {markup!r}"
    return component_class(node, context).build_component()


class TestSpecOverrides:
    """Specs registered before a component are not replaced by its defaults"""

    def test_registered_override_is_used(self, settings):
        specs = SpecRegistry()
        specs.register("body", "json", "JSON", {"role": "custom", "text": "#text#"})
        context = ExportContext(settings, Theme(), specs)
        ComponentFactory(context, DEFAULT_COMPONENTS, fallback=Body)

        fragment = build(Body, "<p>Hi</p>", context).to_array()

        assert fragment["role"] == "custom"
        assert fragment["text"] == "<p>Hi</p>"
        # Specs without an override still get their defaults
        assert specs.get("body", "body-layout") is not None


class TestLifecycle:
    """Test the UNBUILT → BUILT → SERIALIZED state machine"""

    def test_build_once(self, settings):
        context = make_context(settings)
        component = Body(first_node("<p>Hi</p>"), context)
        assert component.state is ComponentState.UNBUILT

        component.build_component()
        assert component.state is ComponentState.BUILT

        with pytest.raises(ComponentStateError):
            component.build_component()

    def test_to_array_before_build(self, settings):
        component = Body(first_node("<p>Hi</p>"), make_context(settings))
        with pytest.raises(ComponentStateError):
            component.to_array()

    def test_to_array_is_idempotent_copy(self, settings):
        component = build(Body, "<p>Hi</p>", make_context(settings))
        first = component.to_array()
        first["role"] = "changed"
        assert component.to_array()["role"] == "body"
        assert component.state is ComponentState.SERIALIZED

    def test_leaf_cannot_build_children(self, settings):
        component = build(Body, "<p>Hi</p>", make_context(settings))
        with pytest.raises(ComponentStateError):
            component.build_children(first_node("<div><p>x</p></div>"))


class TestBody:
    def test_paragraph(self, settings):
        context = make_context(settings)
        component = build(Body, "<p>Hi <b>there</b></p>", context)

        assert component.to_array() == {
            "role": "body",
            "text": "<p>Hi <b>there</b></p>",
            "format": "html",
            "textStyle": "default-body",
            "layout": "body-layout",
        }
        assert "default-body" in context.text_styles
        assert "body-layout" in context.layouts

    def test_body_text_style_from_theme(self, settings):
        context = make_context(settings, Theme("Custom", {"body_size": 21}))
        build(Body, "<p>Hi</p>", context)
        style = context.text_styles.get("default-body")
        assert style["fontSize"] == 21
        assert "conditional" not in style

    @pytest.mark.parametrize("markup", ["<ul><li>a</li></ul>", "<pre>code</pre>", "<table><tr><td>1</td></tr></table>"])
    def test_block_tags_match(self, settings, markup):
        assert Body.node_matches(first_node(markup), settings) is not None

    def test_empty_paragraph_does_not_match(self, settings):
        assert Body.node_matches(first_node("<p> </p>"), settings) is None


class TestHeading:
    def test_heading_level(self, settings):
        context = make_context(settings)
        fragment = build(Heading, "<h2>Title</h2>", context).to_array()

        assert fragment["role"] == "heading2"
        assert fragment["text"] == "Title"
        assert fragment["textStyle"] == "default-heading-2"
        assert fragment["layout"] == "heading-layout"
        assert context.text_styles.get("default-heading-2")["fontSize"] == DEFAULT_THEME_VALUES["header2_size"]

    def test_non_heading(self, settings):
        assert Heading.node_matches(first_node("<h7>x</h7>"), settings) is None
        assert Heading.node_matches(first_node("<h1></h1>"), settings) is None


class TestImage:
    def test_remote_image(self, settings):
        context = make_context(settings)
        fragment = build(Image, '<img src="https://cdn.example.com/a/photo.jpg">', context).to_array()

        assert fragment["role"] == "photo"
        assert fragment["URL"] == "https://cdn.example.com/a/photo.jpg"
        assert "caption" not in fragment
        assert fragment["layout"] == "non-anchored-image"
        assert context.bundles == []

    def test_bundled_image(self, settings):
        context = make_context(settings.model_copy(update={"use_remote_images": False}))
        fragment = build(Image, '<img src="https://cdn.example.com/a/photo.jpg?w=300">', context).to_array()

        assert fragment["URL"] == "bundle://photo.jpg"
        assert context.bundles == ["https://cdn.example.com/a/photo.jpg?w=300"]

    def test_figure_caption(self, settings):
        context = make_context(settings)
        markup = '<figure><img src="https://x.com/p.png"><figcaption> A caption </figcaption></figure>'
        fragment = build(Image, markup, context).to_array()
        assert fragment["caption"] == "A caption"

    def test_wrapped_image_returns_inner_img(self, settings):
        node = Image.node_matches(first_node('<p><a href="/x"><img src="https://x.com/p.png"></a></p>'), settings)
        assert node is not None
        assert node.tag == "img"

    def test_paragraph_with_text_is_not_an_image(self, settings):
        node = first_node('<p>Look: <img src="https://x.com/p.png"></p>')
        assert Image.node_matches(node, settings) is None

    def test_full_bleed(self, settings):
        context = make_context(settings.model_copy(update={"full_bleed_images": True}))
        fragment = build(Image, '<img src="https://x.com/p.png">', context).to_array()
        assert fragment["layout"] == "full-bleed-image"
        layout = context.layouts.get("full-bleed-image")
        assert layout["columnStart"] == 0
        assert layout["columnSpan"] == DEFAULT_THEME_VALUES["layout_columns"]


class TestQuote:
    def test_blockquote(self, settings):
        context = make_context(settings)
        fragment = build(Quote, "<blockquote><p>Quoted</p></blockquote>", context).to_array()

        assert fragment["role"] == "quote"
        assert fragment["text"] == "<p>Quoted</p>"
        assert fragment["textStyle"] == "default-blockquote"
        assert fragment["style"] == "default-blockquote-with-border"

    def test_blockquote_without_border(self, settings):
        context = make_context(settings, Theme("Plain", {"blockquote_border_style": "none"}))
        fragment = build(Quote, "<blockquote>Quoted</blockquote>", context).to_array()
        assert fragment["style"] == "default-blockquote-without-border"
        assert "border" not in context.component_styles.get("default-blockquote-without-border")

    def test_pullquote(self, settings):
        context = make_context(settings)
        fragment = build(Quote, '<blockquote class="pullquote">Big words</blockquote>', context).to_array()
        assert fragment["role"] == "pullquote"
        assert fragment["textStyle"] == "default-pullquote"
        assert "style" not in fragment

    def test_pullquote_figure(self, settings):
        context = make_context(settings)
        markup = '<figure class="pullquote"><blockquote><p>Big</p></blockquote></figure>'
        fragment = build(Quote, markup, context).to_array()
        assert fragment["role"] == "pullquote"
        assert fragment["text"] == "<p>Big</p>"

    def test_default_theme_has_no_conditional(self, settings):
        context = make_context(settings)
        build(Quote, "<blockquote><p>Quoted</p></blockquote>", context)
        style = context.component_styles.get("default-blockquote-with-border")

        assert "conditional" not in style
        assert style["border"]["all"]["color"] == DEFAULT_THEME_VALUES["blockquote_border_color"]

    def test_default_theme_without_border_has_no_conditional(self, settings):
        context = make_context(settings, Theme("Plain", {"blockquote_border_style": "none"}))
        build(Quote, "<blockquote>Quoted</blockquote>", context)
        assert "conditional" not in context.component_styles.get("default-blockquote-without-border")

    def test_dark_border_only(self, settings):
        context = make_context(settings, Theme("Dark", {"blockquote_border_color_dark": "#999999"}))
        build(Quote, "<blockquote>Quoted</blockquote>", context)
        style = context.component_styles.get("default-blockquote-with-border")

        assert len(style["conditional"]) == 1
        entry = style["conditional"][0]
        assert entry["border"]["all"]["color"] == "#999999"
        assert entry["backgroundColor"] == DEFAULT_THEME_VALUES["blockquote_background_color"]
        assert entry["conditions"] == DARK_MODE_CONDITIONS

    def test_dark_background_conditional(self, settings, dark_theme):
        context = make_context(settings, dark_theme)
        build(Quote, "<blockquote>Quoted</blockquote>", context)
        style = context.component_styles.get("default-blockquote-with-border")

        assert style["conditional"][0]["backgroundColor"] == "#333333"
        assert style["conditional"][0]["conditions"] == DARK_MODE_CONDITIONS


class TestDivider:
    def test_divider(self, settings):
        context = make_context(settings)
        fragment = build(Divider, "<hr>", context).to_array()
        assert fragment == {
            "role": "divider",
            "stroke": {
                "color": DEFAULT_THEME_VALUES["divider_border_color"],
                "style": DEFAULT_THEME_VALUES["divider_border_style"],
                "width": DEFAULT_THEME_VALUES["divider_border_width"],
            },
            "layout": "divider-layout",
        }


class TestFootnotes:
    MARKUP = (
        '<ol class="wp-block-footnotes">'
        '<li id="fn1">Note A</li>'
        '<li id="fn2">Note B</li>'
        '</ol>'
    )

    def test_footnotes(self, settings):
        context = make_context(settings)
        fragment = build(Footnotes, self.MARKUP, context).to_array()

        assert fragment["role"] == "container"
        assert fragment["layout"] == "body-layout"
        assert fragment["components"] == [
            {"role": "body", "text": "1. Note A", "format": "html", "identifier": "fn1"},
            {"role": "body", "text": "2. Note B", "format": "html", "identifier": "fn2"},
        ]
        assert "body-layout" in context.layouts

    def test_item_without_id(self, settings):
        context = make_context(settings)
        markup = '<ol class="wp-block-footnotes"><li>Note <em>A</em></li></ol>'
        fragment = build(Footnotes, markup, context).to_array()
        assert fragment["components"] == [
            {"role": "body", "text": "1. Note <em>A</em>", "format": "html"},
        ]

    def test_plain_list_is_not_footnotes(self, settings):
        assert Footnotes.node_matches(first_node("<ol><li>x</li></ol>"), settings) is None


class TestAside:
    MARKUP = '<div class="my-aside"><p>Side note</p><h3>Aside heading</h3></div>'

    @pytest.fixture
    def aside_settings(self, settings):
        return settings.model_copy(update={"aside_component_class": "my-aside"})

    def test_no_marker_class_configured(self, settings):
        assert Aside.node_matches(first_node(self.MARKUP), settings) is None

    def test_claimed_node_does_not_match(self, aside_settings):
        node = first_node(self.MARKUP).claim()
        assert Aside.node_matches(node, aside_settings) is None

    def test_aside(self, aside_settings):
        context = make_context(aside_settings)
        component = build(Aside, self.MARKUP, context)
        fragment = component.to_array()

        assert fragment["role"] == "aside"
        assert fragment["layout"] == "aside-layout-right"
        assert fragment["style"] == "default-aside"
        assert [child["role"] for child in fragment["components"]] == ["body", "heading3"]
        assert component.anchor_position is AnchorPosition.RIGHT
        assert component.needs_layout_if_anchored is False

        layout = context.layouts.get("aside-layout-right")
        assert layout == {"columnStart": 3, "columnSpan": 3, "padding": 20, "margin": 20}

    def test_left_alignment(self, aside_settings):
        context = make_context(aside_settings, Theme("Left", {"aside_alignment": "left"}))
        component = build(Aside, self.MARKUP, context)
        assert component.to_array()["layout"] == "aside-layout-left"
        assert component.anchor_position is AnchorPosition.LEFT

    def test_input_tree_not_mutated(self, aside_settings):
        root = parse_html(self.MARKUP)
        node = root.element_children[0]
        Aside(node, make_context(aside_settings)).build_component()
        assert node.get("class") == "my-aside"
        assert not node.claimed

    def test_no_dark_conditional_by_default(self, aside_settings):
        context = make_context(aside_settings)
        build(Aside, self.MARKUP, context)
        assert "conditional" not in context.component_styles.get("default-aside")

    def test_dark_conditional(self, aside_settings, dark_theme):
        context = make_context(aside_settings, dark_theme)
        build(Aside, self.MARKUP, context)
        style = context.component_styles.get("default-aside")

        assert len(style["conditional"]) == 1
        entry = style["conditional"][0]
        assert entry["backgroundColor"] == "#111111"
        assert entry["border"]["all"]["color"] == "#222222"
        assert entry["conditions"] == DARK_MODE_CONDITIONS

    def test_without_border(self, aside_settings):
        context = make_context(aside_settings, Theme("Flat", {"aside_border_style": "none"}))
        build(Aside, self.MARKUP, context)
        assert context.component_styles.get("default-aside") == {
            "backgroundColor": DEFAULT_THEME_VALUES["aside_background_color"],
        }


class TestInArticle:
    def test_empty_by_default(self, settings):
        context = make_context(settings)
        component = InArticle(ContentNode.element("div"), context).build_component()
        assert component.is_empty
        assert "in-article-layout" not in context.layouts

    def test_defined_by_theme(self, settings):
        theme = Theme("Promo", {"json_templates": {"in_article": {
            "json": {"role": "banner", "text": "Subscribe"},
            "layout": {"margin": 10},
        }}})
        context = make_context(settings, theme)
        component = InArticle(ContentNode.element("div"), context).build_component()

        assert component.to_array() == {"role": "banner", "text": "Subscribe", "layout": "in-article-layout"}
        assert context.layouts.get("in-article-layout") == {
            "margin": 10,
            "columnStart": 0,
            "columnSpan": DEFAULT_THEME_VALUES["layout_columns"],
        }


class TestComponentFactory:
    """Test first-match dispatch and fallbacks"""

    def test_first_match_wins(self, settings):
        context = make_context(settings)
        found = context.factory.match(first_node('<ol class="wp-block-footnotes"><li>a</li></ol>'))
        assert found[0] is Footnotes

    def test_unsupported_tag_recorded(self, settings):
        context = make_context(settings)
        components = context.factory.components_from_node(
            parse_html("<p>a</p><script>alert(1)</script><iframe src='x'></iframe>")
        )
        assert [c.name for c in components] == ["body"]
        assert context.component_errors == ["script", "iframe"]
        assert context.errors[0].phase == "component_errors"

    def test_container_is_descended(self, settings):
        context = make_context(settings)
        components = context.factory.components_from_node(
            parse_html("<div><section><h2>T</h2><p>x</p></section></div>")
        )
        assert [c.name for c in components] == ["heading", "body"]

    def test_loose_text_and_inline_fall_back_to_body(self, settings):
        context = make_context(settings)
        components = context.factory.components_from_node(parse_html("Loose text<span>inline</span>"))
        fragments = [c.to_array() for c in components]
        assert [f["text"] for f in fragments] == ["<p>Loose text</p>", "<p><span>inline</span></p>"]

    def test_empty_nodes_dropped(self, settings):
        context = make_context(settings)
        components = context.factory.components_from_node(parse_html("<div></div><p> </p>  "))
        assert components == []
        assert context.errors == []

    def test_register_appends_variant(self, settings):
        context = ExportContext(settings, Theme())
        factory = ComponentFactory(context, [Heading])
        factory.register(Divider)
        factory.register(Divider)
        assert factory.components == [Heading, Divider]
