"""
Publish - pushing exported articles to the publishing API.
"""

from .models import ArticleRecord, ContentStore, ExportContent, InMemoryContentStore
from .metadata import build_publish_metadata, parse_bool_setting
from .api import HttpPublishingApi, PublishingApi
from .state import InMemoryStateStore, RemoteState, SqliteStateStore, StateStore
from .actions import (
    ChannelAction,
    GetAction,
    PushAction,
    PushResult,
    PushStatus,
    clean_bundles,
    validate_document,
)

__all__ = [
    "ArticleRecord",
    "ContentStore",
    "ExportContent",
    "InMemoryContentStore",
    "build_publish_metadata",
    "parse_bool_setting",
    "HttpPublishingApi",
    "PublishingApi",
    "InMemoryStateStore",
    "RemoteState",
    "SqliteStateStore",
    "StateStore",
    "ChannelAction",
    "GetAction",
    "PushAction",
    "PushResult",
    "PushStatus",
    "clean_bundles",
    "validate_document",
]
