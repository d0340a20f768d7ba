"""
News Article Exporter

Converts HTML content into structured JSON news articles and publishes
them through a publishing API.

Usage:
    from config import get_settings
    from exporter import ArticleAssembler, ThemeStore, parse_html

    assembler = ArticleAssembler(get_settings(), ThemeStore())
    result = assembler.assemble(parse_html("<p>Hello</p>"))
"""

from config.constants import GENERATOR_VERSION, ROOT_LOGGER
from config.logging_config import setup_logger

from .content import ContentNode, parse_html
from .theme import Theme, ThemeStore
from .specs import ComponentSpec, SpecRegistry
from .context import ExportContext
from .assembler import ArticleAssembler, ExportResult
from .sync import SyncGate, compute_fingerprint

__version__ = GENERATOR_VERSION

# Console logging for the package; file logging is opt-in via setup_logger
setup_logger(ROOT_LOGGER, log_file=None)

__all__ = [
    "ContentNode",
    "parse_html",
    "Theme",
    "ThemeStore",
    "ComponentSpec",
    "SpecRegistry",
    "ExportContext",
    "ArticleAssembler",
    "ExportResult",
    "SyncGate",
    "compute_fingerprint",
]
