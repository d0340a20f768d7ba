"""
Article Metadata - The document's own metadata block.

Dates and the generator version change between exports without changing
the article; the checksum gate strips them before fingerprinting.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from config.constants import GENERATOR_IDENTIFIER, GENERATOR_NAME, GENERATOR_VERSION


@dataclass
class ArticleInfo:
    """Identity and dates of the article being exported."""
    identifier: str = ""
    title: str = ""
    language: str = "en"
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    date_published: Optional[datetime] = None


def build_article_metadata(info: ArticleInfo) -> Dict[str, Any]:
    """Metadata block for the article document."""
    metadata: Dict[str, Any] = {}

    for key, value in (
        ("dateCreated", info.date_created),
        ("dateModified", info.date_modified),
        ("datePublished", info.date_published),
    ):
        if value is not None:
            metadata[key] = value.isoformat()

    metadata["generatorName"] = GENERATOR_NAME
    metadata["generatorIdentifier"] = GENERATOR_IDENTIFIER
    metadata["generatorVersion"] = GENERATOR_VERSION
    return metadata
