#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Checksum Gate - Change detection between exports.

The fingerprint covers the article document, the publish metadata and
the bundle list. Fields that change on every export without changing
the article (dates, generator version) are removed first, so an
unchanged article always yields the same fingerprint.

Usage:
    gate = SyncGate()
    check = gate.check(stored_checksum, article, metadata, bundles)
    if check.in_sync:
        ...  # skip the publish
"""

import hashlib
import json
import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from config.constants import FINGERPRINT_LENGTH, VOLATILE_METADATA_FIELDS

logger = logging.getLogger(__name__)


def normalize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of the document without its volatile metadata fields."""
    normalized = deepcopy(dict(document))
    metadata = normalized.get("metadata")
    if isinstance(metadata, dict):
        normalized["metadata"] = {
            k: v for k, v in metadata.items() if k not in VOLATILE_METADATA_FIELDS
        }
    return normalized


def compute_fingerprint(
    document: Any,
    metadata: Optional[Mapping[str, Any]] = None,
    bundles: Optional[Sequence[str]] = None,
) -> str:
    """
    Stable fingerprint of an article and what is published with it.

    Args:
        document: Article document (dict or JSON string)
        metadata: Publish metadata
        bundles: Bundle URLs

    Returns:
        First 16 hex chars of the SHA-256 digest, or "" for an empty
        or unparseable document
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except ValueError:
            return ""
    if not document or not isinstance(document, Mapping):
        return ""

    data = normalize_document(document)
    data["checksum"] = {
        "meta": deepcopy(dict(metadata or {})),
        "bundles": list(bundles or []),
    }

    json_str = json.dumps(data, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def is_in_sync(stored: Optional[str], fresh: str) -> bool:
    """True when a checksum was stored and equals the fresh one."""
    return bool(stored) and stored == fresh


@dataclass
class SyncCheck:
    """Inputs and outcome of one in-sync decision."""
    content_id: str
    stored: Optional[str]
    fingerprint: str
    document: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    bundles: List[str] = field(default_factory=list)
    in_sync: bool = False


# (default decision, check) -> final decision
SyncOverride = Callable[[bool, SyncCheck], bool]


class SyncGate:
    """
    Decides whether a fresh export matches what was last published.

    Args:
        override: Optional strategy that may replace the default decision
    """

    def __init__(self, override: Optional[SyncOverride] = None):
        self.override = override

    def check(
        self,
        content_id: str,
        stored: Optional[str],
        document: Dict[str, Any],
        metadata: Optional[Dict[str, Any]] = None,
        bundles: Optional[List[str]] = None,
    ) -> SyncCheck:
        fingerprint = compute_fingerprint(document, metadata, bundles)
        check = SyncCheck(
            content_id=content_id,
            stored=stored,
            fingerprint=fingerprint,
            document=document,
            metadata=dict(metadata or {}),
            bundles=list(bundles or []),
        )
        in_sync = is_in_sync(stored, fingerprint)

        if self.override is not None:
            in_sync = bool(self.override(in_sync, check))

        check.in_sync = in_sync
        logger.debug(f"Sync check for {content_id}: in_sync={in_sync} ({stored!r} vs {fingerprint!r})")
        return check
