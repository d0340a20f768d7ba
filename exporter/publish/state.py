#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
State Store - Per-content publish state.

Holds, per content ID, the remote article identity (id, revision,
timestamps, share URL), the last published checksum, and the pending /
in-progress markers that keep one push in flight per item. Also holds
short-lived transients (cached channel lookups).

Implementations:
- InMemoryStateStore: process-local dictionaries
- SqliteStateStore: SQLite file, one connection per thread
"""

import logging
import sqlite3
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .models import ArticleRecord

logger = logging.getLogger(__name__)

# Keys stored per content item
REMOTE_ID = "api_id"
REVISION = "api_revision"
CREATED_AT = "api_created_at"
MODIFIED_AT = "api_modified_at"
SHARE_URL = "api_share_url"
DELETED = "api_deleted"
CHECKSUM = "article_checksum"
PENDING = "api_pending"
IN_PROGRESS = "api_async_in_progress"

REMOTE_KEYS = (REMOTE_ID, REVISION, CREATED_AT, MODIFIED_AT, SHARE_URL)


@dataclass
class RemoteState:
    """What is known locally about the published copy of an item."""
    remote_id: str = ""
    revision: str = ""
    created_at: str = ""
    modified_at: str = ""
    share_url: str = ""

    @property
    def is_published(self) -> bool:
        return bool(self.remote_id)


class StateStore(ABC):
    """
    Abstract state store.

    Subclasses provide the storage primitives; the publish-level helpers
    are shared.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_value(self, content_id: str, key: str) -> Optional[str]:
        """Stored value, or None"""
        pass

    @abstractmethod
    def set_value(self, content_id: str, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete_value(self, content_id: str, key: str) -> None:
        pass

    @abstractmethod
    def _read_transient(self, name: str) -> Optional[Tuple[Any, float]]:
        """(value, expires_at) or None"""
        pass

    @abstractmethod
    def _write_transient(self, name: str, value: Any, expires_at: float) -> None:
        pass

    @abstractmethod
    def delete_transient(self, name: str) -> None:
        pass

    # -------------------------------------------------------------------------
    # Transients
    # -------------------------------------------------------------------------

    def get_transient(self, name: str) -> Optional[Any]:
        """Cached value, or None when missing or expired."""
        entry = self._read_transient(name)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self.clock():
            self.delete_transient(name)
            return None
        return value

    def set_transient(self, name: str, value: Any, ttl: int) -> None:
        self._write_transient(name, value, self.clock() + ttl)

    # -------------------------------------------------------------------------
    # Remote identity
    # -------------------------------------------------------------------------

    def get_remote_state(self, content_id: str) -> RemoteState:
        return RemoteState(
            remote_id=self.get_value(content_id, REMOTE_ID) or "",
            revision=self.get_value(content_id, REVISION) or "",
            created_at=self.get_value(content_id, CREATED_AT) or "",
            modified_at=self.get_value(content_id, MODIFIED_AT) or "",
            share_url=self.get_value(content_id, SHARE_URL) or "",
        )

    def save_record(self, content_id: str, record: ArticleRecord) -> None:
        """Store the identity returned by a successful push."""
        self.set_value(content_id, REMOTE_ID, record.id)
        self.set_value(content_id, REVISION, record.revision or "")
        self.set_value(content_id, CREATED_AT, record.created_at or "")
        self.set_value(content_id, MODIFIED_AT, record.modified_at or "")
        self.set_value(content_id, SHARE_URL, record.share_url or "")
        self.delete_value(content_id, DELETED)

    def set_revision(self, content_id: str, revision: str) -> None:
        self.set_value(content_id, REVISION, revision)

    def clear_remote_state(self, content_id: str) -> None:
        """Forget the remote article (it was deleted remotely)."""
        for key in REMOTE_KEYS + (CHECKSUM,):
            self.delete_value(content_id, key)
        logger.info(f"Cleared remote state for content {content_id}")

    # -------------------------------------------------------------------------
    # Checksum
    # -------------------------------------------------------------------------

    def get_checksum(self, content_id: str) -> Optional[str]:
        return self.get_value(content_id, CHECKSUM)

    def set_checksum(self, content_id: str, checksum: str) -> None:
        self.set_value(content_id, CHECKSUM, checksum)

    # -------------------------------------------------------------------------
    # Markers
    # -------------------------------------------------------------------------

    def mark_pending(self, content_id: str) -> None:
        self.set_value(content_id, PENDING, str(int(self.clock())))

    def clear_pending(self, content_id: str) -> None:
        self.delete_value(content_id, PENDING)

    def is_pending(self, content_id: str) -> bool:
        return bool(self.get_value(content_id, PENDING))

    def mark_in_progress(self, content_id: str) -> None:
        self.set_value(content_id, IN_PROGRESS, str(int(self.clock())))

    def clear_in_progress(self, content_id: str) -> None:
        self.delete_value(content_id, IN_PROGRESS)

    def is_in_progress(self, content_id: str) -> bool:
        return bool(self.get_value(content_id, IN_PROGRESS))

    def clear_markers(self, content_id: str) -> None:
        self.clear_pending(content_id)
        self.clear_in_progress(content_id)


class InMemoryStateStore(StateStore):
    """Dictionary-backed store, lost on restart."""

    def __init__(self, clock: Callable[[], float] = time.time):
        super().__init__(clock)
        self._values: Dict[str, Dict[str, str]] = {}
        self._transients: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get_value(self, content_id, key):
        with self._lock:
            return self._values.get(str(content_id), {}).get(key)

    def set_value(self, content_id, key, value):
        with self._lock:
            self._values.setdefault(str(content_id), {})[key] = value

    def delete_value(self, content_id, key):
        with self._lock:
            self._values.get(str(content_id), {}).pop(key, None)

    def _read_transient(self, name):
        with self._lock:
            return self._transients.get(name)

    def _write_transient(self, name, value, expires_at):
        with self._lock:
            self._transients[name] = (value, expires_at)

    def delete_transient(self, name):
        with self._lock:
            self._transients.pop(name, None)


class SqliteStateStore(StateStore):
    """
    SQLite-backed store.

    Database Schema:
        content_state(content_id, key, value)  PRIMARY KEY (content_id, key)
        transients(name PRIMARY KEY, value, expires_at)

    Transient values must be strings.
    """

    def __init__(self, db_path: Union[str, Path], clock: Callable[[], float] = time.time):
        super().__init__(clock)
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if getattr(self._local, "conn", None) is None:
            self._local.conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,  # Autocommit mode
            )
        return self._local.conn

    def _init_db(self) -> None:
        conn = self._get_connection()
        conn.execute('''
            CREATE TABLE IF NOT EXISTS content_state (
                content_id TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (content_id, key)
            )
        ''')
        conn.execute('''
            CREATE TABLE IF NOT EXISTS transients (
                name TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                expires_at REAL NOT NULL
            )
        ''')

    def get_value(self, content_id, key):
        row = self._get_connection().execute(
            'SELECT value FROM content_state WHERE content_id = ? AND key = ?',
            (str(content_id), key),
        ).fetchone()
        return row[0] if row else None

    def set_value(self, content_id, key, value):
        self._get_connection().execute(
            'INSERT OR REPLACE INTO content_state (content_id, key, value) VALUES (?, ?, ?)',
            (str(content_id), key, value),
        )

    def delete_value(self, content_id, key):
        self._get_connection().execute(
            'DELETE FROM content_state WHERE content_id = ? AND key = ?',
            (str(content_id), key),
        )

    def _read_transient(self, name):
        row = self._get_connection().execute(
            'SELECT value, expires_at FROM transients WHERE name = ?', (name,)
        ).fetchone()
        return (row[0], row[1]) if row else None

    def _write_transient(self, name, value, expires_at):
        self._get_connection().execute(
            'INSERT OR REPLACE INTO transients (name, value, expires_at) VALUES (?, ?, ?)',
            (name, value, expires_at),
        )

    def delete_transient(self, name):
        self._get_connection().execute('DELETE FROM transients WHERE name = ?', (name,))

    def close(self) -> None:
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None
