#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publish Actions - Push, get and channel lookups against the publishing API.

Push pipeline:
1. Check API configuration and that the content still exists
2. Apply skip policies (callback, autosync skip terms)
3. Export the article, apply the component alert policy
4. Validate the document, build bundles and metadata
5. Skip when the checksum shows nothing changed
6. Create, or refresh the revision and update
7. Persist the remote identity and checksum

Pending and in-progress markers and the workspace are cleared on every
terminal path.

Usage:
    action = PushAction(settings, api, content_store, state_store, assembler)
    result = action.perform("42")
    result.raise_for_status()
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from config.constants import CHANNEL_CACHE_TTL
from config.settings import Settings

from ..errors import (
    ConfigurationError,
    ContentNotFoundError,
    ExportError,
    RemoteGoneError,
    RemoteRequestError,
    SchedulingError,
    UnsupportedComponentsError,
    ValidationError,
)
from ..sync import SyncGate, SyncOverride
from ..workspace import Workspace
from .api import PublishingApi
from .metadata import MetadataFilter, build_publish_metadata
from .models import ArticleRecord, ContentStore, ExportContent
from .state import RemoteState, StateStore

if TYPE_CHECKING:
    from ..assembler import ArticleAssembler, ExportResult

logger = logging.getLogger(__name__)

CHANNEL_TRANSIENT = "channel"

# content id -> whether to skip the push
SkipCallback = Callable[[str], bool]
# content id -> None; runs the push later with doing_async=True
Scheduler = Callable[[str], None]


class PushStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    QUEUED = "queued"
    FAILED = "failed"


@dataclass
class PushResult:
    """
    Outcome of a push.

    Attributes:
        status: What happened
        record: Remote article after a create/update
        error: The error that failed the push
        messages: Notices for the user (skip reasons, component warnings)
        recreated: True when a remotely deleted article was created again
    """
    content_id: str
    status: PushStatus
    record: Optional[ArticleRecord] = None
    error: Optional[ExportError] = None
    messages: List[str] = field(default_factory=list)
    recreated: bool = False
    checksum: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not PushStatus.FAILED

    def raise_for_status(self) -> "PushResult":
        """Raise the push error, if any."""
        if self.error is not None:
            raise self.error
        return self


def validate_document(article: Dict[str, Any]) -> Dict[str, Any]:
    """
    Round-trip the document through JSON.

    Raises:
        ValidationError: If it is empty or not serializable
    """
    try:
        decoded = json.loads(json.dumps(article, ensure_ascii=False))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"The article JSON is invalid and cannot be published: {e}") from e
    if not decoded or not isinstance(decoded, dict):
        raise ValidationError("The article JSON is empty and cannot be published")
    return decoded


def clean_bundles(bundles: List[str]) -> List[str]:
    """Absolute http(s) URLs only, first-seen order."""
    cleaned: List[str] = []
    for url in bundles or []:
        parsed = urlparse(str(url))
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.warning(f"Dropping bundle with invalid URL: {url!r}")
            continue
        if url not in cleaned:
            cleaned.append(url)
    return cleaned


class PushAction:
    """
    Pushes content items to the publishing API.

    Args:
        settings: Export and API settings
        api: Publishing API client
        content_store: Source of ExportContent items
        state_store: Per-content publish state
        assembler: Article assembler
        should_skip: Optional callback vetoing a push
        sync_override: Optional strategy replacing the in-sync decision
        metadata_filter: Optional callback rewriting publish metadata
        scheduler: Queues asynchronous pushes (required when api_async)
    """

    def __init__(
        self,
        settings: Settings,
        api: PublishingApi,
        content_store: ContentStore,
        state_store: StateStore,
        assembler: "ArticleAssembler",
        should_skip: Optional[SkipCallback] = None,
        sync_override: Optional[SyncOverride] = None,
        metadata_filter: Optional[MetadataFilter] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.settings = settings
        self.api = api
        self.content_store = content_store
        self.state_store = state_store
        self.assembler = assembler
        self.should_skip = should_skip
        self.sync_gate = SyncGate(sync_override)
        self.metadata_filter = metadata_filter
        self.scheduler = scheduler

    def perform(self, content_id: str, doing_async: bool = False) -> PushResult:
        """
        Push a content item, or queue it when async pushes are enabled.

        Args:
            content_id: Content to push
            doing_async: True when called back by the scheduler

        Returns:
            PushResult; failures are reported, not raised
        """
        content_id = str(content_id)
        try:
            if self.settings.api_async and not doing_async:
                return self._queue(content_id)
            return self._push(content_id)
        except ExportError as e:
            logger.error(f"Push of content {content_id} failed: {e}")
            return PushResult(content_id, PushStatus.FAILED, error=e, messages=[str(e)])

    # -------------------------------------------------------------------------
    # Async queueing
    # -------------------------------------------------------------------------

    def _queue(self, content_id: str) -> PushResult:
        if self.scheduler is None:
            raise ConfigurationError("Asynchronous pushes are enabled but no scheduler is configured")

        if self.state_store.is_pending(content_id):
            logger.info(f"Content {content_id} is already pending publish")
            return PushResult(
                content_id, PushStatus.SKIPPED,
                messages=[f"Article {content_id} is already pending publish."],
            )

        self.state_store.mark_pending(content_id)
        try:
            self.scheduler(content_id)
        except Exception as e:
            self.state_store.clear_pending(content_id)
            raise SchedulingError(content_id, e) from e
        logger.info(f"Queued push of content {content_id}")
        return PushResult(content_id, PushStatus.QUEUED)

    # -------------------------------------------------------------------------
    # Push
    # -------------------------------------------------------------------------

    def _push(self, content_id: str) -> PushResult:
        if not self.settings.is_api_configuration_valid():
            self.state_store.clear_markers(content_id)
            raise ConfigurationError(
                "The publishing API settings seem to be empty. "
                "Please fill in the API key, API secret and API channel settings."
            )

        content = self.content_store.get(content_id)
        if content is None:
            self.state_store.clear_markers(content_id)
            raise ContentNotFoundError(content_id)

        skip_reason = self._skip_reason(content)
        if skip_reason:
            self.state_store.clear_markers(content_id)
            logger.info(skip_reason)
            return PushResult(content_id, PushStatus.SKIPPED, messages=[skip_reason])

        self.state_store.mark_in_progress(content_id)
        workspace = Workspace(content_id, self.settings.temp_dir)
        try:
            return self._export_and_transmit(content, workspace)
        finally:
            self.state_store.clear_markers(content_id)
            workspace.clean_up()

    def _skip_reason(self, content: ExportContent) -> Optional[str]:
        if self.should_skip is not None and self.should_skip(content.id):
            return f"Skipped push of article {content.id} due to the skip callback."

        if self.settings.api_autosync:
            skip_terms = set(self.settings.api_autosync_skip)
            if skip_terms.intersection(content.term_ids):
                return f"Skipped push of article {content.id} due to the presence of a skip push taxonomy term."
        return None

    def _export_and_transmit(self, content: ExportContent, workspace: Workspace) -> PushResult:
        content_id = content.id
        messages: List[str] = []

        result = self.assembler.export(content)
        self._process_errors(result, messages)

        article = validate_document(result.article)
        workspace.write_article(article)
        bundles = clean_bundles(result.bundles)
        metadata = build_publish_metadata(content, self.settings, self.metadata_filter)

        check = self.sync_gate.check(
            content_id,
            self.state_store.get_checksum(content_id),
            article,
            metadata,
            bundles,
        )
        if check.in_sync:
            message = f"Skipped push of article {content_id} because it is already in sync."
            logger.info(message)
            return PushResult(
                content_id, PushStatus.SKIPPED,
                messages=messages + [message], checksum=check.fingerprint,
            )

        remote = self.state_store.get_remote_state(content_id)
        recreated = False
        try:
            record, status = self._transmit(content_id, remote, article, bundles, metadata)
        except RemoteGoneError as e:
            if not (e.is_article_missing and remote.is_published):
                raise
            record, status = self._recover_deleted_article(content_id, e, article, bundles, metadata)
            recreated = True
            messages.append(
                f"Article {content_id} was previously deleted remotely and has been recreated."
            )

        self.state_store.save_record(content_id, record)
        self.state_store.set_checksum(content_id, check.fingerprint)
        logger.info(f"Pushed content {content_id} as {record.id} ({status.value})")

        return PushResult(
            content_id,
            status,
            record=record,
            messages=messages,
            recreated=recreated,
            checksum=check.fingerprint,
        )

    def _process_errors(self, result: "ExportResult", messages: List[str]) -> None:
        """Apply the component alert policy."""
        names = result.component_errors
        if not names:
            return

        policy = self.settings.component_alerts
        if policy == "fail":
            raise UnsupportedComponentsError(names)
        if policy == "warn":
            messages.append(
                "The following components are unsupported and were removed: " + ", ".join(names)
            )

    def _transmit(
        self,
        content_id: str,
        remote: RemoteState,
        article: Dict[str, Any],
        bundles: List[str],
        metadata: Dict[str, Any],
    ) -> Tuple[ArticleRecord, PushStatus]:
        if not remote.is_published:
            record = self.api.create_article(article, self.settings.api_channel, bundles, metadata)
            return record, PushStatus.CREATED

        # The remote revision may have moved since the last push
        current = self.api.get_article(remote.remote_id)
        if not current.revision:
            raise RemoteRequestError(
                "INVALID_RESPONSE",
                message="The publishing API returned an empty revision for this article",
            )
        self.state_store.set_revision(content_id, current.revision)

        record = self.api.update_article(
            remote.remote_id, current.revision, article, bundles, metadata
        )
        return record, PushStatus.UPDATED

    def _recover_deleted_article(
        self,
        content_id: str,
        error: RemoteGoneError,
        article: Dict[str, Any],
        bundles: List[str],
        metadata: Dict[str, Any],
    ) -> Tuple[ArticleRecord, PushStatus]:
        """Forget the deleted remote article and create it again, once."""
        logger.warning(f"Remote article for content {content_id} is gone ({error}); recreating")
        self.state_store.clear_remote_state(content_id)
        try:
            return self._transmit(content_id, RemoteState(), article, bundles, metadata)
        except RemoteRequestError as retry_error:
            retry_error.original_error = error
            raise


class GetAction:
    """Fetches the remote copy of a published content item."""

    def __init__(self, api: PublishingApi, state_store: StateStore):
        self.api = api
        self.state_store = state_store

    def perform(self, content_id: str) -> Optional[ArticleRecord]:
        """Remote article, or None when the item was never published."""
        remote = self.state_store.get_remote_state(str(content_id))
        if not remote.is_published:
            return None
        return self.api.get_article(remote.remote_id)

    def get_data(self, content_id: str, key: str, default: Any = None) -> Any:
        record = self.perform(content_id)
        if record is None:
            return default
        value = getattr(record, key, None)
        return default if value is None else value


class ChannelAction:
    """Channel lookup, cached for a few minutes (failures included)."""

    def __init__(self, settings: Settings, api: PublishingApi, state_store: StateStore):
        self.settings = settings
        self.api = api
        self.state_store = state_store

    def perform(self) -> Optional[Dict[str, Any]]:
        cached = self.state_store.get_transient(CHANNEL_TRANSIENT)
        if cached is None:
            cached = ""
            if self.settings.is_api_configuration_valid():
                try:
                    cached = json.dumps(self.api.get_channel(self.settings.api_channel))
                except RemoteRequestError as e:
                    logger.error(f"Unable to get channel information: {e}")

        self.state_store.set_transient(CHANNEL_TRANSIENT, cached, CHANNEL_CACHE_TTL)

        if not cached:
            logger.error("Unable to get channel information. Please check your API credentials.")
            return None
        return json.loads(cached) or None
