"""
Export Context - State scoped to a single export run.

Every component of a run receives the same context; nothing in it
outlives the run, so concurrent runs never share registries.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from config.settings import Settings

from .builders import ComponentLayouts, ComponentStyles, TextStyles
from .errors import ComponentError
from .specs import SpecRegistry
from .theme import Theme

if TYPE_CHECKING:
    from .components.factory import ComponentFactory

logger = logging.getLogger(__name__)


class ExportContext:
    """
    Per-run registries and collected results.

    Attributes:
        settings: Export settings
        theme: Theme used for this run (read-only)
        specs: Component spec registry (last registration wins)
        text_styles / layouts / component_styles: first-wins registries
        bundles: Absolute asset URLs, first-seen order
        errors: Component errors collected during the walk
    """

    def __init__(
        self,
        settings: Settings,
        theme: Theme,
        specs: Optional[SpecRegistry] = None,
    ):
        self.settings = settings
        self.theme = theme
        self.specs = specs if specs is not None else SpecRegistry()
        self.text_styles = TextStyles()
        self.layouts = ComponentLayouts()
        self.component_styles = ComponentStyles()
        self.bundles: List[str] = []
        self.errors: List[ComponentError] = []
        self.factory: Optional["ComponentFactory"] = None
        self._identifier_count = 0

    def add_bundle(self, url: str) -> None:
        if url and url not in self.bundles:
            self.bundles.append(url)

    def record_error(self, component: str, message: Optional[str] = None) -> ComponentError:
        """Record a non-fatal component error and return it."""
        error = ComponentError(component, message)
        self.errors.append(error)
        logger.warning(str(error))
        return error

    @property
    def component_errors(self) -> List[str]:
        """Names of the components that failed, in encounter order."""
        return [error.component for error in self.errors]

    def next_identifier(self) -> str:
        """Deterministic component identifier, unique within the run."""
        self._identifier_count += 1
        return f"component-{self._identifier_count}"
