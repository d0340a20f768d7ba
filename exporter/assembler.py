#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Article Assembler

Walks a content tree and produces the article document.

Responsibilities:
1. Pick the theme for the run from the content's sections
2. Drive the component factory over the tree, in document order
3. Insert the in-article module and resolve anchors
4. Collect text styles, layouts, component styles, bundles and errors

Every run gets its own ExportContext, so output depends only on the
tree, the theme and the registered specs.

Usage:
    assembler = ArticleAssembler(settings, theme_store)
    result = assembler.assemble(parse_html(html), sections=["news"])
    result.article["components"]
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Type

from config.constants import FORMAT_VERSION
from config.settings import Settings

from .builders import ArticleInfo, build_article_metadata
from .components import DEFAULT_COMPONENTS, Body, Component, ComponentFactory, InArticle
from .content import ContentNode, parse_html
from .context import ExportContext
from .errors import ComponentError
from .specs import SpecRegistry
from .publish.models import ExportContent
from .theme import ThemeStore

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Output of one export run."""
    article: Dict[str, Any]
    bundles: List[str] = field(default_factory=list)
    errors: List[ComponentError] = field(default_factory=list)

    @property
    def component_errors(self) -> List[str]:
        return [error.component for error in self.errors]


class ArticleAssembler:
    """
    Builds article documents from content trees.

    Args:
        settings: Export settings
        theme_store: Themes available to the run
        components: Component variants in matching order
        specs: Spec overrides; each run works on a copy of it
    """

    def __init__(
        self,
        settings: Settings,
        theme_store: Optional[ThemeStore] = None,
        components: Optional[Sequence[Type[Component]]] = None,
        specs: Optional[SpecRegistry] = None,
    ):
        self.settings = settings
        self.theme_store = theme_store or ThemeStore()
        self.components = list(components or DEFAULT_COMPONENTS)
        self.specs = specs

    def export(self, content: ExportContent) -> ExportResult:
        """Export a content item."""
        info = ArticleInfo(
            identifier=str(content.id),
            title=content.title,
            language=content.language,
            date_created=content.date_created,
            date_modified=content.date_modified,
            date_published=content.date_published,
        )
        return self.assemble(parse_html(content.html), content.sections, info)

    def assemble(
        self,
        content_tree: ContentNode,
        sections: Optional[Sequence[str]] = None,
        info: Optional[ArticleInfo] = None,
    ) -> ExportResult:
        """
        Build the article document for a content tree.

        Args:
            content_tree: Root node (its children are the article blocks)
            sections: Section IDs, used to pick the theme
            info: Article identity and dates

        Returns:
            ExportResult with the article, bundles and component errors
        """
        info = info or ArticleInfo()
        theme = self.theme_store.get_used(sections)
        run_specs = self.specs.copy() if self.specs is not None else None
        context = ExportContext(self.settings, theme, run_specs)
        factory = ComponentFactory(context, self.components, fallback=Body)

        logger.info(f"Assembling article '{info.identifier}' with theme '{theme.name}'")

        if self.settings.html_support:
            body = Body(ContentNode.element("p"), context)
            context.text_styles.add_html_styles(
                context.specs.get(body.name, "default-text-styles"), theme
            )

        components = factory.components_from_node(content_tree)
        components = self._insert_in_article(components, context)
        self._resolve_anchors(components, context)

        fragments = [component.to_array() for component in components]

        article: Dict[str, Any] = {
            "version": FORMAT_VERSION,
            "identifier": info.identifier,
            "title": info.title,
            "language": info.language,
            "layout": {
                "columns": theme.get_value("layout_columns"),
                "width": theme.get_value("layout_width"),
                "margin": theme.get_value("layout_margin"),
                "gutter": theme.get_value("layout_gutter"),
            },
            "components": fragments,
            context.text_styles.document_key: context.text_styles.build(),
            context.layouts.document_key: context.layouts.build(),
            context.component_styles.document_key: context.component_styles.build(),
            "metadata": build_article_metadata(info),
        }

        if context.errors:
            logger.warning(
                f"Article '{info.identifier}' has {len(context.errors)} component error(s): "
                f"{', '.join(context.component_errors)}"
            )
        logger.info(f"Assembled {len(fragments)} components, {len(context.bundles)} bundles")

        return ExportResult(
            article=article,
            bundles=list(context.bundles),
            errors=list(context.errors),
        )

    def _insert_in_article(
        self,
        components: List[Component],
        context: ExportContext,
    ) -> List[Component]:
        module = InArticle(ContentNode.element("div"), context)
        module.build_component()
        if module.is_empty:
            return components

        position = max(0, min(self.settings.in_article_position, len(components)))
        logger.debug(f"Inserting in-article module at position {position}")
        return components[:position] + [module] + components[position:]

    def _resolve_anchors(self, components: List[Component], context: ExportContext) -> None:
        """
        Attach every anchored component to a non-anchored neighbour.

        The next non-anchored component is preferred, then the previous
        one. Anchors without a target are dropped.
        """
        for index, component in enumerate(components):
            if not component.is_anchored:
                continue

            target = self._anchor_target(components, index)
            if target is None:
                logger.debug(f"No anchor target for '{component.name}', dropping anchor")
                continue

            if not target.identifier:
                target.json["identifier"] = context.next_identifier()

            component.json["anchor"] = {
                "targetComponentIdentifier": target.identifier,
                "targetAnchorPosition": "center",
            }
            if component.needs_layout_if_anchored:
                left = component.anchor_position.value == "left"
                component.json["layout"] = context.layouts.register_anchor_layout(left, context.theme)

    @staticmethod
    def _anchor_target(components: List[Component], index: int) -> Optional[Component]:
        for candidate in components[index + 1:]:
            if not candidate.is_anchored:
                return candidate
        for candidate in reversed(components[:index]):
            if not candidate.is_anchored:
                return candidate
        return None
