#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publishing API - Client protocol and httpx implementation.

Authentication is the caller's concern: pass an httpx.Client that is
already configured with whatever auth the channel requires.

Error bodies of the form {"errors": [{"code": ..., "keyPath": [...]}]}
are mapped to RemoteRequestError subclasses (RemoteConflictError for
WRONG_REVISION, RemoteGoneError for NOT_FOUND).

Usage:
    client = httpx.Client(auth=my_auth)
    api = HttpPublishingApi("https://news-api.example.com", client=client)
    record = api.create_article(article, channel_id, bundles, metadata)
"""

import logging
import time
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.constants import API_TIMEOUT_SECONDS

from ..errors import RemoteRequestError, error_for_code
from .models import ArticleRecord

logger = logging.getLogger(__name__)


class PublishingApi(Protocol):
    """
    Protocol for publishing API clients.

    Every method raises RemoteRequestError (or a subclass) on failure.
    """

    def create_article(
        self,
        document: Dict[str, Any],
        channel_id: str,
        bundles: List[str],
        metadata: Dict[str, Any],
    ) -> ArticleRecord:
        ...

    def update_article(
        self,
        remote_id: str,
        revision: str,
        document: Dict[str, Any],
        bundles: List[str],
        metadata: Dict[str, Any],
    ) -> ArticleRecord:
        ...

    def get_article(self, remote_id: str) -> ArticleRecord:
        ...

    def get_channel(self, channel_id: str) -> Dict[str, Any]:
        ...


class HttpPublishingApi:
    """
    httpx-based PublishingApi.

    Features:
    - Reuses one client for every request
    - Retries connection failures with exponential backoff
    - Maps API error bodies to the export error taxonomy
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = API_TIMEOUT_SECONDS,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        """
        Args:
            base_url: API root, e.g. https://news-api.example.com
            client: Pre-configured client (auth, proxies); one is created if None
            timeout: Request timeout in seconds for a created client
            max_retries: Attempts for requests failing to connect
            retry_delay: Base delay for the exponential backoff
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.Client] = None) -> "HttpPublishingApi":
        """Client for settings.api_base_url with settings.api_timeout."""
        return cls(settings.api_base_url, client=client, timeout=settings.api_timeout)

    def create_article(self, document, channel_id, bundles, metadata) -> ArticleRecord:
        payload = self._payload(document, bundles, metadata)
        data = self._request("POST", f"/channels/{channel_id}/articles", json=payload)
        return self._record(data)

    def update_article(self, remote_id, revision, document, bundles, metadata) -> ArticleRecord:
        payload = self._payload(document, bundles, metadata)
        payload["metadata"]["data"]["revision"] = revision
        data = self._request("POST", f"/articles/{remote_id}", json=payload)
        return self._record(data)

    def get_article(self, remote_id: str) -> ArticleRecord:
        return self._record(self._request("GET", f"/articles/{remote_id}"))

    def get_channel(self, channel_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/channels/{channel_id}")

    def close(self) -> None:
        self.client.close()

    @staticmethod
    def _record(data: Dict[str, Any]) -> ArticleRecord:
        try:
            return ArticleRecord(**data)
        except PydanticValidationError as e:
            raise RemoteRequestError("INVALID_RESPONSE", message=f"Unexpected article data: {e}") from e

    @staticmethod
    def _payload(document, bundles, metadata) -> Dict[str, Any]:
        meta = dict(metadata or {})
        meta["data"] = dict(meta.get("data") or {})
        return {
            "article": document,
            "metadata": meta,
            "bundles": list(bundles or []),
        }

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"

        for attempt in range(self.max_retries):
            try:
                response = self.client.request(method, url, **kwargs)
            except httpx.ConnectError as e:
                if attempt < self.max_retries - 1:
                    wait_time = self.retry_delay * (2 ** attempt)
                    logger.warning(f"Connection to {url} failed, retrying in {wait_time}s...")
                    time.sleep(wait_time)
                    continue
                raise RemoteRequestError(
                    "NETWORK_ERROR", message=f"Failed to connect to {url}: {e}"
                ) from e
            except httpx.HTTPError as e:
                raise RemoteRequestError("NETWORK_ERROR", message=f"{method} {url} failed: {e}") from e

            return self._parse_response(response)

        raise RemoteRequestError("NETWORK_ERROR", message="Max retries exceeded")

    @staticmethod
    def _parse_response(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_success:
            # Successful responses wrap the resource in 'data'
            if isinstance(body, dict) and isinstance(body.get("data"), dict):
                return body["data"]
            return body if isinstance(body, dict) else {}

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors and isinstance(errors[0], dict):
            first = errors[0]
            key_path = first.get("keyPath") or []
            if isinstance(key_path, str):
                key_path = [key_path]
            raise error_for_code(
                str(first.get("code", "UNKNOWN")),
                key_path,
                status_code=response.status_code,
            )

        raise RemoteRequestError(
            f"HTTP_{response.status_code}",
            message=f"HTTP {response.status_code}",
            status_code=response.status_code,
        )
