"""
Publish Models - Content input and remote article records.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ArticleRecord(BaseModel):
    """Remote article as reported by the publishing API."""
    id: str
    revision: str = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    modified_at: Optional[str] = Field(default=None, alias="modifiedAt")
    share_url: Optional[str] = Field(default=None, alias="shareUrl")

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class ExportContent:
    """
    A content item to export.

    Attributes:
        id: Content identifier in the host store
        html: Body markup
        sections: Section IDs the item is published to (unordered)
        term_ids: Taxonomy term IDs (checked against the autosync skip list)
        meta: Raw per-item settings (e.g. is_paid='1', maturity_rating='KIDS')
        custom_metadata: List of {key, type, value} entries
    """
    id: str
    title: str = ""
    html: str = ""
    sections: List[str] = field(default_factory=list)
    term_ids: List[int] = field(default_factory=list)
    meta: Dict[str, str] = field(default_factory=dict)
    custom_metadata: List[Dict[str, Any]] = field(default_factory=list)
    language: str = "en"
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    date_published: Optional[datetime] = None


class ContentStore(Protocol):
    """Host content store; returns None for unknown IDs."""

    def get(self, content_id: str) -> Optional[ExportContent]:
        ...


class InMemoryContentStore:
    """Dictionary-backed ContentStore."""

    def __init__(self, items: Optional[List[ExportContent]] = None):
        self._items: Dict[str, ExportContent] = {}
        for item in items or []:
            self.add(item)

    def add(self, content: ExportContent) -> None:
        self._items[content.id] = content

    def remove(self, content_id: str) -> None:
        self._items.pop(content_id, None)

    def get(self, content_id: str) -> Optional[ExportContent]:
        return self._items.get(content_id)
