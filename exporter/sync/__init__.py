"""
Sync - checksum-based change detection.
"""

from .checksum import (
    SyncCheck,
    SyncGate,
    SyncOverride,
    compute_fingerprint,
    is_in_sync,
    normalize_document,
)

__all__ = [
    "SyncCheck",
    "SyncGate",
    "SyncOverride",
    "compute_fingerprint",
    "is_in_sync",
    "normalize_document",
]
